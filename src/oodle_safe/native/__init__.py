"""Native boundary: struct layout and library access."""

from .layout import OodleLZ_CompressOptions, pack_options, unpack_options
from .library import NativeCodec, get_codec, load_library

__all__ = [
    "NativeCodec",
    "OodleLZ_CompressOptions",
    "get_codec",
    "load_library",
    "pack_options",
    "unpack_options",
]
