"""
Compression options.

`CompressOptions` mirrors the codec's options record field for field. It is
a mutable value: assign fields, then run `validate` to let the codec clamp
them, and keep using the returned copy.

Example::

    options = CompressOptions(send_quantum_crcs=True)
    options.min_match_len = Int32(6)
    options = options.validate()
"""

from __future__ import annotations

import ctypes

from pydantic import field_validator

from .constants import BLOCK_LEN
from .enums import CompressionLevel, Compressor, Jobify, Profile
from .native.layout import OodleLZ_CompressOptions, pack_options, unpack_options
from .native.library import NativeCodec, get_codec
from .types import Int32, NativeRecord, Uint32

DEFAULT_SEEK_CHUNK_LEN: int = BLOCK_LEN
"""Default length of independent seek chunks (2^18)."""

DEFAULT_SPACE_SPEED_TRADEOFF_BYTES: int = 256
"""Default minimum byte savings for a slower encoding decision."""

DEFAULT_MAX_LOCAL_DICTIONARY_SIZE: int = 1 << 24
"""Default local dictionary size before the long range matcher takes over."""

_ADDRESS_LIMIT: int = 2 ** (8 * ctypes.sizeof(ctypes.c_void_p))


class CompressOptions(NativeRecord):
    """
    Options for a single compress call.

    Typically, you would use the defaults and only change the fields you
    need. Field semantics belong to the codec; the model only guarantees that
    every value fits the native layout.
    """

    min_match_len: Int32 = Int32(0)
    """
    Minimum match length.

    Cannot lower a compressor's default, only raise it. On some data a large
    value (6 or 8) is a space-speed win.
    """

    seek_chunk_reset: bool = False
    """Whether chunks are independent, for seeking and parallelism."""

    seek_chunk_len: Uint32 = Uint32(DEFAULT_SEEK_CHUNK_LEN)
    """
    Length of independent seek chunks when `seek_chunk_reset` is set.

    Must be a power of two and at least `BLOCK_LEN`.
    """

    profile: Profile = Profile.MAIN
    """Decoder profile to target."""

    dictionary_size: Int32 = Int32(0)
    """Maximum match offset. Zero or negative means the whole buffer."""

    space_speed_tradeoff_bytes: Int32 = Int32(DEFAULT_SPACE_SPEED_TRADEOFF_BYTES)
    """Bytes a speed-decreasing decision must save to be accepted."""

    send_quantum_crcs: bool = False
    """
    Emit a CRC per compressed quantum.

    Required for decoding with `CheckCRC.YES`.
    """

    max_local_dictionary_size: Uint32 = Uint32(DEFAULT_MAX_LOCAL_DICTIONARY_SIZE)
    """
    Size of the local dictionary before a long range matcher is needed.

    Limits encoder memory and time, not the decoder window. Must be a power
    of two below `LOCALDICTIONARYSIZE_MAX`.
    """

    make_long_range_matcher: bool = True
    """Find matches beyond `max_local_dictionary_size`."""

    match_table_size_log2: Int32 = Int32(0)
    """Log2 size of the match finder table. Zero uses the compressor default."""

    jobify: Jobify = Jobify.DEFAULT
    """Internal job usage of the compressor."""

    jobify_user_context: int | None = None
    """
    Opaque address passed through to the codec's job callbacks.

    Never dereferenced or freed here. The caller keeps whatever it points to
    alive for as long as the codec may schedule jobs against it.
    """

    far_match_min_len: Int32 = Int32(0)
    """Minimum length of a far match."""

    far_match_offset_log2: Int32 = Int32(0)
    """Log2 of the offset beyond which `far_match_min_len` applies. Zero disables it."""

    @field_validator("min_match_len")
    @classmethod
    def check_min_match_len(cls, value: Int32) -> Int32:
        if value < 0:
            raise ValueError(f"min_match_len must be non-negative, got {int(value)}")
        return value

    @field_validator("jobify_user_context")
    @classmethod
    def check_jobify_user_context(cls, value: int | None) -> int | None:
        if value is not None and not (0 <= value < _ADDRESS_LIMIT):
            raise ValueError(f"jobify_user_context is not a valid address: {value}")
        return value

    @classmethod
    def default(cls, codec: NativeCodec | None = None) -> CompressOptions:
        """
        Build options from the codec's built-in defaults.

        Queries the codec for the (no compressor, no level) selector pair
        and copies every field out of the native record.
        """
        if codec is None:
            codec = get_codec()
        return cls.from_native(
            codec.get_default_options(Compressor.NONE, CompressionLevel.NONE)
        )

    def validate(  # type: ignore[override]
        self, codec: NativeCodec | None = None
    ) -> CompressOptions:
        """
        Return a copy normalized by the codec.

        Unset or out-of-range fields are clamped or filled. The receiver is
        left untouched, and the result may differ from it; always continue
        with the returned value.
        """
        if codec is None:
            codec = get_codec()
        native = self.to_native()
        codec.validate_options(native)
        return type(self).from_native(native)

    def to_native(self) -> OodleLZ_CompressOptions:
        """Pack into the native struct layout."""
        return pack_options(self)

    @classmethod
    def from_native(cls, native: OodleLZ_CompressOptions) -> CompressOptions:
        """Unpack from the native struct layout."""
        return cls(**unpack_options(native))
