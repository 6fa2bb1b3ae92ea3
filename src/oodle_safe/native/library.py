"""
Loading the codec shared library and calling into it.

`NativeCodec` is the only code that invokes native functions. It speaks
ctypes values: raw enum codes, `c_void_p` addresses and option struct
pointers. Marshaling Python buffers into those values happens one layer up.

The codec keeps process-wide state of its own (job pools, allocators). This
module does not model or reset it; it only hands out one shared handle.
"""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import threading
from typing import Any

from .. import config
from ..enums import (
    CheckCRC,
    CompressionLevel,
    Compressor,
    DecodeThreadPhase,
    FuzzSafe,
    Verbosity,
)
from ..exceptions import DefaultOptionsUnavailableError, LibraryNotFoundError
from .layout import OodleLZ_CompressOptions

logger = logging.getLogger(__name__)

_OptionsPointer = ctypes.POINTER(OodleLZ_CompressOptions)


def _declare_signatures(lib: ctypes.CDLL) -> None:
    """Attach argument and return types to the entry points used here."""
    lib.OodleLZ_CompressOptions_GetDefault.argtypes = [ctypes.c_int, ctypes.c_int]
    lib.OodleLZ_CompressOptions_GetDefault.restype = _OptionsPointer

    lib.OodleLZ_CompressOptions_Validate.argtypes = [_OptionsPointer]
    lib.OodleLZ_CompressOptions_Validate.restype = None

    lib.OodleLZ_Compress.argtypes = [
        ctypes.c_int,  # compressor
        ctypes.c_void_p,  # rawBuf
        ctypes.c_ssize_t,  # rawLen
        ctypes.c_void_p,  # compBuf
        ctypes.c_int,  # level
        _OptionsPointer,  # pOptions
        ctypes.c_void_p,  # dictionaryBase
        ctypes.c_void_p,  # lrm
        ctypes.c_void_p,  # scratchMem
        ctypes.c_ssize_t,  # scratchSize
    ]
    lib.OodleLZ_Compress.restype = ctypes.c_ssize_t

    lib.OodleLZ_Decompress.argtypes = [
        ctypes.c_void_p,  # compBuf
        ctypes.c_ssize_t,  # compBufSize
        ctypes.c_void_p,  # rawBuf
        ctypes.c_ssize_t,  # rawLen
        ctypes.c_int,  # fuzzSafe
        ctypes.c_int,  # checkCRC
        ctypes.c_int,  # verbosity
        ctypes.c_void_p,  # decBufBase
        ctypes.c_ssize_t,  # decBufSize
        ctypes.c_void_p,  # fpCallback
        ctypes.c_void_p,  # callbackUserData
        ctypes.c_void_p,  # decoderMemory
        ctypes.c_ssize_t,  # decoderMemorySize
        ctypes.c_int,  # threadPhase
    ]
    lib.OodleLZ_Decompress.restype = ctypes.c_ssize_t


def _candidate_paths(path: str | None) -> list[str]:
    """List library locations to try, most specific first."""
    if path is not None:
        return [path]
    if config.OODLE_LIBRARY is not None:
        return [config.OODLE_LIBRARY]

    found = []
    for name in config.LIBRARY_CANDIDATES:
        resolved = ctypes.util.find_library(name)
        if resolved is not None and resolved not in found:
            found.append(resolved)
    return found


def load_library(path: str | None = None) -> ctypes.CDLL:
    """
    Open the codec shared library and declare its signatures.

    Args:
        path: Explicit library path. Defaults to `OODLE_LIBRARY`, then to
            the configured candidate names.

    Raises:
        LibraryNotFoundError: If no candidate could be loaded.
    """
    candidates = _candidate_paths(path)
    if not candidates:
        raise LibraryNotFoundError(config.LIBRARY_CANDIDATES, detail="no candidate resolved")

    errors = []
    for candidate in candidates:
        try:
            lib = ctypes.CDLL(candidate)
        except OSError as e:
            errors.append(f"{candidate}: {e}")
            continue

        try:
            _declare_signatures(lib)
        except AttributeError as e:
            errors.append(f"{candidate}: missing entry point ({e})")
            continue

        logger.info("Loaded Oodle codec from %s", candidate)
        return lib

    raise LibraryNotFoundError(candidates, detail="; ".join(errors))


class NativeCodec:
    """
    Thin call surface over the codec's entry points.

    Args:
        lib: A loaded library whose functions accept ctypes values, as
            returned by `load_library`.
    """

    def __init__(self, lib: Any) -> None:
        self._lib = lib

    def get_default_options(
        self, compressor: Compressor, level: CompressionLevel
    ) -> OodleLZ_CompressOptions:
        """
        Copy the codec's built-in options for a compressor and level.

        The codec returns a pointer to static storage; the copy keeps callers
        from mutating it.
        """
        pointer = self._lib.OodleLZ_CompressOptions_GetDefault(
            compressor.to_native(), level.to_native()
        )
        if not pointer:
            raise DefaultOptionsUnavailableError(compressor, level)
        return OodleLZ_CompressOptions.from_buffer_copy(pointer.contents)

    def validate_options(self, native: OodleLZ_CompressOptions) -> None:
        """Let the codec clamp and fill the struct in place."""
        self._lib.OodleLZ_CompressOptions_Validate(ctypes.pointer(native))

    def compress(
        self,
        compressor: Compressor,
        raw: ctypes.c_void_p,
        raw_len: int,
        comp: ctypes.c_void_p,
        level: CompressionLevel,
        options: OodleLZ_CompressOptions | None,
        dictionary_base: ctypes.c_void_p | None,
        scratch: ctypes.c_void_p | None,
        scratch_size: int,
    ) -> int:
        """Invoke `OodleLZ_Compress` and return its raw result."""
        return self._lib.OodleLZ_Compress(
            compressor.to_native(),
            raw,
            raw_len,
            comp,
            level.to_native(),
            ctypes.pointer(options) if options is not None else None,
            dictionary_base,
            None,  # lrm
            scratch,
            scratch_size,
        )

    def decompress(
        self,
        comp: ctypes.c_void_p,
        comp_len: int,
        raw: ctypes.c_void_p,
        raw_len: int,
        check_crc: CheckCRC,
        verbosity: Verbosity,
        dec_buf_base: ctypes.c_void_p | None,
        dec_buf_size: int,
        thread_phase: DecodeThreadPhase,
    ) -> int:
        """Invoke `OodleLZ_Decompress` with fuzz safety on and return its raw result."""
        return self._lib.OodleLZ_Decompress(
            comp,
            comp_len,
            raw,
            raw_len,
            FuzzSafe.YES.to_native(),
            check_crc.to_native(),
            verbosity.to_native(),
            dec_buf_base,
            dec_buf_size,
            None,  # fpCallback
            None,  # callbackUserData
            None,  # decoderMemory
            0,  # decoderMemorySize
            thread_phase.to_native(),
        )


_codec: NativeCodec | None = None
_codec_lock = threading.Lock()


def get_codec() -> NativeCodec:
    """
    Return the process-wide codec handle, loading the library on first use.

    Raises:
        LibraryNotFoundError: If the library cannot be loaded.
    """
    global _codec
    with _codec_lock:
        if _codec is None:
            _codec = NativeCodec(load_library())
        return _codec
