"""
Native layout of the codec's options record.

This module is the only place that knows the field order and C types of
`OodleLZ_CompressOptions`. Everything else goes through `pack_options` and
`unpack_options`.


STRUCT LAYOUT
-------------
The codec header declares (Oodle 2.9)::

    typedef struct {
        OO_U32 unused_was_verbosity;
        OO_S32 minMatchLen;
        OO_BOOL seekChunkReset;
        OO_S32 seekChunkLen;
        OodleLZ_Profile profile;
        OO_S32 dictionarySize;
        OO_S32 spaceSpeedTradeoffBytes;
        OO_S32 unused_was_maxHuffmansPerChunk;
        OO_BOOL sendQuantumCRCs;
        OO_S32 maxLocalDictionarySize;
        OO_BOOL makeLongRangeMatcher;
        OO_S32 matchTableSizeLog2;
        OodleLZ_Jobify jobify;
        void * jobifyUserPtr;
        OO_S32 farMatchMinLen;
        OO_S32 farMatchOffsetLog2;
        OO_U32 reserved[4];
    } OodleLZ_CompressOptions;

OO_BOOL is a 32-bit int and the enums are C ints. The pointer is aligned
to its natural size, so on 64-bit platforms four bytes of padding precede it.


LAYOUT-ONLY FIELDS
------------------
The two retired fields and the reserved block carry no behavior. They are
written as zero and must come back as zero.
"""

from __future__ import annotations

import ctypes
from typing import TYPE_CHECKING, Any

from ..enums import Jobify, Profile
from ..exceptions import OptionsLayoutError
from ..types import Int32, Uint32

if TYPE_CHECKING:
    from ..options import CompressOptions

RESERVED_WORDS: int = 4
"""Number of 32-bit words in the reserved block."""


class OodleLZ_CompressOptions(ctypes.Structure):
    """Byte-exact mirror of the native options struct."""

    _fields_ = [
        ("unused_was_verbosity", ctypes.c_uint32),
        ("minMatchLen", ctypes.c_int32),
        ("seekChunkReset", ctypes.c_int32),
        ("seekChunkLen", ctypes.c_int32),
        ("profile", ctypes.c_int),
        ("dictionarySize", ctypes.c_int32),
        ("spaceSpeedTradeoffBytes", ctypes.c_int32),
        ("unused_was_maxHuffmansPerChunk", ctypes.c_int32),
        ("sendQuantumCRCs", ctypes.c_int32),
        ("maxLocalDictionarySize", ctypes.c_int32),
        ("makeLongRangeMatcher", ctypes.c_int32),
        ("matchTableSizeLog2", ctypes.c_int32),
        ("jobify", ctypes.c_int),
        ("jobifyUserPtr", ctypes.c_void_p),
        ("farMatchMinLen", ctypes.c_int32),
        ("farMatchOffsetLog2", ctypes.c_int32),
        ("reserved", ctypes.c_uint32 * RESERVED_WORDS),
    ]


def pack_options(options: CompressOptions) -> OodleLZ_CompressOptions:
    """
    Build the native struct from a validated options model.

    Unsigned fields stored as `s32` by the codec are reinterpreted with
    two's complement. Layout-only fields are zeroed.
    """
    # A freshly constructed ctypes struct is zero-filled, which covers the
    # retired fields and the reserved block.
    native = OodleLZ_CompressOptions()

    native.minMatchLen = int(options.min_match_len)
    native.seekChunkReset = int(options.seek_chunk_reset)
    native.seekChunkLen = options.seek_chunk_len.to_s32()
    native.profile = options.profile.to_native()
    native.dictionarySize = int(options.dictionary_size)
    native.spaceSpeedTradeoffBytes = int(options.space_speed_tradeoff_bytes)
    native.sendQuantumCRCs = int(options.send_quantum_crcs)
    native.maxLocalDictionarySize = options.max_local_dictionary_size.to_s32()
    native.makeLongRangeMatcher = int(options.make_long_range_matcher)
    native.matchTableSizeLog2 = int(options.match_table_size_log2)
    native.jobify = options.jobify.to_native()
    native.jobifyUserPtr = options.jobify_user_context
    native.farMatchMinLen = int(options.far_match_min_len)
    native.farMatchOffsetLog2 = int(options.far_match_offset_log2)

    return native


def unpack_options(native: OodleLZ_CompressOptions) -> dict[str, Any]:
    """
    Read every field of the native struct into model field values.

    Returns:
        Keyword arguments for `CompressOptions`.

    Raises:
        OptionsLayoutError: If a layout-only field is non-zero.
        UnmappedNativeValueError: If an enum field holds an unknown code.
    """
    if native.unused_was_verbosity != 0:
        raise OptionsLayoutError("unused_was_verbosity", native.unused_was_verbosity)
    if native.unused_was_maxHuffmansPerChunk != 0:
        raise OptionsLayoutError(
            "unused_was_maxHuffmansPerChunk", native.unused_was_maxHuffmansPerChunk
        )
    if any(native.reserved):
        raise OptionsLayoutError("reserved", list(native.reserved))

    return {
        "min_match_len": Int32(native.minMatchLen),
        "seek_chunk_reset": native.seekChunkReset != 0,
        "seek_chunk_len": Uint32.from_s32(native.seekChunkLen),
        "profile": Profile.from_native(native.profile),
        "dictionary_size": Int32(native.dictionarySize),
        "space_speed_tradeoff_bytes": Int32(native.spaceSpeedTradeoffBytes),
        "send_quantum_crcs": native.sendQuantumCRCs != 0,
        "max_local_dictionary_size": Uint32.from_s32(native.maxLocalDictionarySize),
        "make_long_range_matcher": native.makeLongRangeMatcher != 0,
        "match_table_size_log2": Int32(native.matchTableSizeLog2),
        "jobify": Jobify.from_native(native.jobify),
        # ctypes reads a null void pointer back as None.
        "jobify_user_context": native.jobifyUserPtr,
        "far_match_min_len": Int32(native.farMatchMinLen),
        "far_match_offset_log2": Int32(native.farMatchOffsetLog2),
    }
