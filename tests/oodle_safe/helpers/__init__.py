"""Test helpers for oodle_safe unit tests."""

from __future__ import annotations

from .fake_library import FLAG_CRC, FLAG_STORED, HEADER_LEN, FakeOodleLibrary

__all__ = [
    "FLAG_CRC",
    "FLAG_STORED",
    "HEADER_LEN",
    "FakeOodleLibrary",
]
