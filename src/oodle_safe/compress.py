"""
Compression entry point.

`compress` marshals caller buffers into one synchronous `OodleLZ_Compress`
call and turns the codec's single-integer result into either a size or a
`CompressionFailed` exception.


OUTPUT SIZING
-------------
The native call has no output length parameter: the codec trusts the
output to hold the worst case for incompressible data. This layer refuses
to call it unless the output provides `len(data) + COMPRESS_OVERHEAD` bytes.


DICTIONARIES
------------
A dictionary is history that precedes the data. The codec finds it by
address: everything between the dictionary base and the start of the data
is usable as match source. The layer copies both into one contiguous window
so the caller's buffers can live anywhere.


THREADING
---------
`jobify` in the options only controls how the codec fans out work
internally. The call always blocks until compression is finished.
"""

from __future__ import annotations

import logging

from typing_extensions import Buffer

from .buffers import Window, buffer_length, readonly_buffer, writable_buffer
from .constants import FAILED, max_compressed_length
from .enums import CompressionLevel, Compressor
from .exceptions import CompressionFailed
from .native.library import NativeCodec, get_codec
from .options import CompressOptions

logger = logging.getLogger(__name__)


def compress(
    compressor: Compressor,
    data: Buffer,
    output: Buffer,
    level: CompressionLevel,
    options: CompressOptions | None = None,
    dictionary: Buffer | None = None,
    scratch: Buffer | None = None,
    *,
    codec: NativeCodec | None = None,
) -> int:
    """
    Compress `data` into `output` synchronously.

    Args:
        compressor: Compression algorithm.
        data: Bytes to compress.
        output: Writable buffer of at least `max_compressed_length(len(data))` bytes.
        level: Encoder effort.
        options: Additional options. Defaults to the codec's built-ins.
        dictionary: Preconditioning history. The same bytes must be supplied
            to `decompress`.
        scratch: Writable working memory for the codec. Without it the codec
            allocates its own. Must not be shared by concurrent calls.
        codec: Codec handle. Defaults to the process-wide one.

    Returns:
        Number of bytes written to `output`.

    Raises:
        CompressionFailed: If the output is too small or the codec reports
            failure. Bytes in `output` are then meaningless.
        TypeError: If `output` or `scratch` is not a writable buffer.
    """
    if codec is None:
        codec = get_codec()

    raw = readonly_buffer(data)
    out = writable_buffer(output)

    # Step 1: Refuse outputs the codec could overrun.
    required = max_compressed_length(raw.length)
    if out.length < required:
        logger.debug("Compress output too small: %d < %d", out.length, required)
        raise CompressionFailed(f"output holds {out.length} bytes, needs {required}")

    # Step 2: Place the dictionary directly before the data.
    #
    # Without a dictionary the data is addressed in place.
    window = None
    raw_pointer = raw.pointer
    if dictionary is not None:
        window = Window(dictionary, raw.length)
        window.fill_payload(data)
        raw_pointer = window.payload

    scratch_buffer = writable_buffer(scratch) if scratch is not None else None

    logger.debug(
        "Compressing %d bytes with %s at %s (dictionary=%s, scratch=%s)",
        raw.length,
        compressor.name,
        level.name,
        window.prefix_len if window is not None else None,
        scratch_buffer.length if scratch_buffer is not None else None,
    )

    # Step 3: Single native call; no retries.
    result = codec.compress(
        compressor,
        raw_pointer,
        raw.length,
        out.pointer,
        level,
        options.to_native() if options is not None else None,
        window.base if window is not None else None,
        scratch_buffer.pointer if scratch_buffer is not None else None,
        scratch_buffer.length if scratch_buffer is not None else 0,
    )

    # Step 4: Interpret the result.
    #
    # The failure code is 0, which is also the only sensible size for empty
    # input, so an empty input cannot fail here.
    if result == FAILED and raw.length > 0:
        logger.debug("Codec reported compression failure")
        raise CompressionFailed()
    if result < 0 or result > out.length:
        logger.debug("Codec reported impossible compressed size %d", result)
        raise CompressionFailed(f"codec returned size {result} for a {out.length} byte output")

    return result


def compress_bytes(
    compressor: Compressor,
    data: Buffer,
    level: CompressionLevel,
    options: CompressOptions | None = None,
    dictionary: Buffer | None = None,
    scratch: Buffer | None = None,
    *,
    codec: NativeCodec | None = None,
) -> bytes:
    """
    Compress `data` into a newly allocated `bytes` object.

    Same semantics as `compress`, with the output sized by
    `max_compressed_length` and trimmed to the compressed size.
    """
    output = bytearray(max_compressed_length(buffer_length(data)))
    size = compress(compressor, data, output, level, options, dictionary, scratch, codec=codec)
    return bytes(output[:size])
