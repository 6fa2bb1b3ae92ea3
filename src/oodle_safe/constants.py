"""
Constants defined by the Oodle codec.

The first three values are re-exported unchanged from the codec headers.
Code that talks to the codec must use these rather than literals.
"""

from __future__ import annotations

# ===========================================================================
# Codec Constants
# ===========================================================================

BLOCK_LEN: int = 1 << 18
"""Bytes per independent compression block (OODLELZ_BLOCK_LEN, 256 KiB).

Seek chunks are at least this long. The validate routine normalizes a
zero `seek_chunk_len` to this value.
"""

FAILED: int = 0
"""Raw return value of compress and decompress on failure (OODLELZ_FAILED)."""

LOCALDICTIONARYSIZE_MAX: int = 1 << 30
"""Upper bound for `max_local_dictionary_size` (OODLELZ_LOCALDICTIONARYSIZE_MAX).

The option must stay strictly below this value. Validation halves it when
it is set to exactly the maximum.
"""

# ===========================================================================
# Buffer Sizing
# ===========================================================================
#
# The native compress call takes no output length. The caller provides an
# output buffer with enough slack for incompressible input.

COMPRESS_OVERHEAD: int = 8
"""Extra bytes beyond the input length that the compress output must provide."""


def max_compressed_length(input_len: int) -> int:
    """Size of the output buffer `compress` requires for `input_len` bytes of input.

    Raises:
        ValueError: If `input_len` is negative.
    """
    if input_len < 0:
        raise ValueError(f"Input length must be non-negative, got {input_len}")
    return input_len + COMPRESS_OVERHEAD
