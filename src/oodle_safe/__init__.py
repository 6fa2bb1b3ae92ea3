"""Safe Python bindings for the Oodle LZ codec.

The codec (Kraken, Leviathan, Mermaid, Selkie, Hydra) is a proprietary
shared library loaded at runtime. This package validates options, marshals
buffers, and turns the codec's raw results into sizes or exceptions.

Usage::

    from oodle_safe import (
        CompressionLevel,
        Compressor,
        compress,
        decompress,
        max_compressed_length,
    )

    output = bytearray(max_compressed_length(len(data)))
    size = compress(Compressor.KRAKEN, data, output, CompressionLevel.NORMAL)

    restored = bytearray(len(data))
    decompress(output[:size], restored)

The decompressed size is not stored in the compressed block. Callers keep it
in their own container format.
"""

from __future__ import annotations

from .compress import compress, compress_bytes
from .constants import (
    BLOCK_LEN,
    COMPRESS_OVERHEAD,
    FAILED,
    LOCALDICTIONARYSIZE_MAX,
    max_compressed_length,
)
from .decompress import decompress, decompress_bytes
from .enums import (
    CheckCRC,
    CompressionLevel,
    Compressor,
    DecodeThreadPhase,
    Jobify,
    Profile,
    Verbosity,
)
from .exceptions import (
    CodecFailure,
    CompressionFailed,
    DefaultOptionsUnavailableError,
    DecompressionFailed,
    LibraryNotFoundError,
    OodleError,
    OptionsLayoutError,
    UnmappedNativeValueError,
)
from .native import NativeCodec, get_codec, load_library
from .options import CompressOptions
from .types import Int32, Uint32

__all__ = [
    # Transform operations
    "compress",
    "decompress",
    "compress_bytes",
    "decompress_bytes",
    # Configuration model
    "CompressOptions",
    "Int32",
    "Uint32",
    # Enumerations
    "CheckCRC",
    "CompressionLevel",
    "Compressor",
    "DecodeThreadPhase",
    "Jobify",
    "Profile",
    "Verbosity",
    # Constants
    "BLOCK_LEN",
    "COMPRESS_OVERHEAD",
    "FAILED",
    "LOCALDICTIONARYSIZE_MAX",
    "max_compressed_length",
    # Codec access
    "NativeCodec",
    "get_codec",
    "load_library",
    # Exceptions
    "OodleError",
    "CodecFailure",
    "CompressionFailed",
    "DecompressionFailed",
    "DefaultOptionsUnavailableError",
    "LibraryNotFoundError",
    "OptionsLayoutError",
    "UnmappedNativeValueError",
]
