"""
Shared pytest fixtures for all oodle_safe tests.

The codec is proprietary, so unit tests run against a fake library that
implements the native entry points at the ctypes level.
"""

from __future__ import annotations

import pytest

from oodle_safe.native import NativeCodec
from tests.oodle_safe.helpers import FakeOodleLibrary


@pytest.fixture
def fake_library() -> FakeOodleLibrary:
    """A fresh fake codec library with an empty call log."""
    return FakeOodleLibrary()


@pytest.fixture
def codec(fake_library: FakeOodleLibrary) -> NativeCodec:
    """A codec handle bound to the fake library."""
    return NativeCodec(fake_library)


@pytest.fixture
def sample_data() -> bytes:
    """Compressible text, long enough to span several deflate blocks."""
    line = b"The quick brown fox jumps over the lazy dog. 0123456789\n"
    return b"".join(line.replace(b"0", str(i % 10).encode()) for i in range(400))
