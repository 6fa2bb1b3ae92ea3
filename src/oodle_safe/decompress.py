"""
Decompression entry point.

`decompress` decodes one complete compressed block into a caller buffer
whose length is the exact decompressed size. The compressed format is not
self-describing, so that size must come from the caller's container.


FAILURE
-------
Corrupt input, a wrong dictionary, a CRC mismatch, CRC checking on data
compressed without CRCs, and phase splitting on non-Kraken data all come
back from the codec as the same failure code. They surface as one
`DecompressionFailed`; the layer does not guess which one occurred.

Fuzz safety is always requested, so hostile input fails cleanly instead of
corrupting memory.


DICTIONARIES
------------
The decoder resolves history through a window base: the decoded bytes are
written inside the window, right after the dictionary. The layer builds
that window, decodes into it, and copies the result out.
"""

from __future__ import annotations

import logging

from typing_extensions import Buffer

from .buffers import Window, readonly_buffer, writable_buffer
from .constants import FAILED
from .enums import (
    DEFAULT_CHECK_CRC,
    DEFAULT_THREAD_PHASE,
    DEFAULT_VERBOSITY,
    CheckCRC,
    DecodeThreadPhase,
    Verbosity,
)
from .exceptions import DecompressionFailed
from .native.library import NativeCodec, get_codec

logger = logging.getLogger(__name__)


def decompress(
    data: Buffer,
    output: Buffer,
    dictionary: Buffer | None = None,
    check_crc: CheckCRC | None = None,
    verbosity: Verbosity | None = None,
    thread_phase: DecodeThreadPhase | None = None,
    *,
    codec: NativeCodec | None = None,
) -> int:
    """
    Decompress one compressed block into `output` synchronously.

    Args:
        data: A complete compressed block.
        output: Writable buffer whose length is the decompressed size.
        dictionary: The preconditioning history used at compression time.
        check_crc: Verify quantum CRCs. Defaults to `CheckCRC.NO`.
        verbosity: Codec-side logging. Defaults to `Verbosity.NONE`.
        thread_phase: Phase of a split threaded decode (Kraken only).
            Defaults to `DecodeThreadPhase.UNTHREADED`.
        codec: Codec handle. Defaults to the process-wide one.

    Returns:
        Number of bytes written to `output`.

    Raises:
        DecompressionFailed: On corruption, dictionary or CRC mismatch, or
            an unsupported thread phase.
        TypeError: If `output` is not a writable buffer.
    """
    if codec is None:
        codec = get_codec()

    check_crc = DEFAULT_CHECK_CRC if check_crc is None else check_crc
    verbosity = DEFAULT_VERBOSITY if verbosity is None else verbosity
    thread_phase = DEFAULT_THREAD_PHASE if thread_phase is None else thread_phase

    comp = readonly_buffer(data)
    out = writable_buffer(output)

    # Decode straight into the caller's buffer unless history must precede it.
    window = Window(dictionary, out.length) if dictionary is not None else None

    logger.debug(
        "Decompressing %d bytes into %d (dictionary=%s, crc=%s, phase=%s)",
        comp.length,
        out.length,
        window.prefix_len if window is not None else None,
        check_crc.name,
        thread_phase.name,
    )

    result = codec.decompress(
        comp.pointer,
        comp.length,
        window.payload if window is not None else out.pointer,
        out.length,
        check_crc,
        verbosity,
        window.base if window is not None else None,
        window.size if window is not None else 0,
        thread_phase,
    )

    # An empty output decodes to size 0, which equals the failure code.
    if result == FAILED and out.length > 0:
        logger.debug("Codec reported decompression failure")
        raise DecompressionFailed()
    if result < 0 or result > out.length:
        logger.debug("Codec reported impossible decompressed size %d", result)
        raise DecompressionFailed(
            f"codec returned size {result} for a {out.length} byte output"
        )

    if window is not None:
        memoryview(output).cast("B")[:result] = window.payload_bytes(result)

    return result


def decompress_bytes(
    data: Buffer,
    decompressed_size: int,
    dictionary: Buffer | None = None,
    check_crc: CheckCRC | None = None,
    verbosity: Verbosity | None = None,
    thread_phase: DecodeThreadPhase | None = None,
    *,
    codec: NativeCodec | None = None,
) -> bytes:
    """
    Decompress into a newly allocated `bytes` object of `decompressed_size` bytes.

    Raises:
        ValueError: If `decompressed_size` is negative.
        DecompressionFailed: As for `decompress`.
    """
    if decompressed_size < 0:
        raise ValueError(f"Decompressed size must be non-negative, got {decompressed_size}")

    output = bytearray(decompressed_size)
    size = decompress(data, output, dictionary, check_crc, verbosity, thread_phase, codec=codec)
    return bytes(output[:size])
