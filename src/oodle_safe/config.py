"""
Runtime configuration for locating the Oodle codec.

The codec ships as a proprietary shared library that is never bundled with
this package. These settings are read once from the environment. Nothing is
checked here: an unusable value surfaces as `LibraryNotFoundError` when the
library is first loaded.
"""

import os

OODLE_LIBRARY: str | None = os.environ.get("OODLE_LIBRARY") or None
"""
Library to load instead of searching the candidates.

Either a path or a bare file name the platform loader can resolve
(`liboo2corelinux64.so.9`, `oo2core_9_win64.dll`).
"""

LIBRARY_CANDIDATES: list[str] = [
    "oo2core",
    "oo2core_9",
    "oo2core_9_win64",
    "oo2corelinux64",
    "oo2coremac64",
]
"""Library names handed to `ctypes.util.find_library` when no explicit path is set."""
