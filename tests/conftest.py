"""Pytest configuration shared by every test package."""

from hypothesis import HealthCheck, settings

# Round trips through ctypes have uneven timing; disable the per-example deadline.
settings.register_profile(
    "no_deadline",
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("no_deadline")
