"""Tests for the native options layout and the pack/unpack adapter."""

from __future__ import annotations

import ctypes

import pytest

from oodle_safe.enums import Jobify, Profile
from oodle_safe.exceptions import OptionsLayoutError, UnmappedNativeValueError
from oodle_safe.native.layout import (
    RESERVED_WORDS,
    OodleLZ_CompressOptions,
    pack_options,
    unpack_options,
)
from oodle_safe.options import CompressOptions
from oodle_safe.types import Int32, Uint32

IS_64_BIT = ctypes.sizeof(ctypes.c_void_p) == 8


class TestStructLayout:
    """The ctypes struct matches the header byte for byte."""

    def test_field_order(self) -> None:
        """Fields appear in header order."""
        names = [name for name, _ in OodleLZ_CompressOptions._fields_]
        assert names == [
            "unused_was_verbosity",
            "minMatchLen",
            "seekChunkReset",
            "seekChunkLen",
            "profile",
            "dictionarySize",
            "spaceSpeedTradeoffBytes",
            "unused_was_maxHuffmansPerChunk",
            "sendQuantumCRCs",
            "maxLocalDictionarySize",
            "makeLongRangeMatcher",
            "matchTableSizeLog2",
            "jobify",
            "jobifyUserPtr",
            "farMatchMinLen",
            "farMatchOffsetLog2",
            "reserved",
        ]

    def test_leading_fields_are_packed_words(self) -> None:
        """The thirteen 32-bit fields before the pointer are contiguous."""
        assert OodleLZ_CompressOptions.minMatchLen.offset == 4
        assert OodleLZ_CompressOptions.jobify.offset == 48

    @pytest.mark.skipif(not IS_64_BIT, reason="pointer padding differs on 32-bit")
    def test_pointer_alignment_on_64_bit(self) -> None:
        """The user pointer is 8-byte aligned, leaving a 4-byte hole."""
        assert OodleLZ_CompressOptions.jobifyUserPtr.offset == 56
        assert OodleLZ_CompressOptions.farMatchMinLen.offset == 64
        assert OodleLZ_CompressOptions.reserved.offset == 72
        assert ctypes.sizeof(OodleLZ_CompressOptions) == 88

    def test_reserved_block_size(self) -> None:
        """Four reserved words."""
        assert RESERVED_WORDS == 4
        assert OodleLZ_CompressOptions.reserved.size == 16


class TestPack:
    """Model to native struct."""

    def test_defaults(self) -> None:
        """Documented defaults land in the matching native fields."""
        native = pack_options(CompressOptions())

        assert native.minMatchLen == 0
        assert native.seekChunkReset == 0
        assert native.seekChunkLen == 1 << 18
        assert native.profile == 0
        assert native.dictionarySize == 0
        assert native.spaceSpeedTradeoffBytes == 256
        assert native.sendQuantumCRCs == 0
        assert native.maxLocalDictionarySize == 1 << 24
        assert native.makeLongRangeMatcher == 1
        assert native.matchTableSizeLog2 == 0
        assert native.jobify == 0
        assert native.jobifyUserPtr is None
        assert native.farMatchMinLen == 0
        assert native.farMatchOffsetLog2 == 0

    def test_layout_only_fields_are_zero(self) -> None:
        """Retired and reserved fields are always written as zero."""
        native = pack_options(CompressOptions(send_quantum_crcs=True))

        assert native.unused_was_verbosity == 0
        assert native.unused_was_maxHuffmansPerChunk == 0
        assert list(native.reserved) == [0, 0, 0, 0]

    def test_booleans_and_enums(self) -> None:
        """Booleans become 0/1 and enums their raw codes."""
        native = pack_options(
            CompressOptions(
                seek_chunk_reset=True,
                send_quantum_crcs=True,
                make_long_range_matcher=False,
                profile=Profile.REDUCED,
                jobify=Jobify.AGGRESSIVE,
            )
        )

        assert native.seekChunkReset == 1
        assert native.sendQuantumCRCs == 1
        assert native.makeLongRangeMatcher == 0
        assert native.profile == 1
        assert native.jobify == 3

    def test_unsigned_fields_wrap_into_s32(self) -> None:
        """Unsigned values above the s32 range are reinterpreted, not rejected."""
        native = pack_options(CompressOptions(seek_chunk_len=Uint32(2**31)))
        assert native.seekChunkLen == -(2**31)

    def test_user_context_passes_through(self) -> None:
        """The opaque address is copied without interpretation."""
        native = pack_options(CompressOptions(jobify_user_context=0xDEAD0))
        assert native.jobifyUserPtr == 0xDEAD0


class TestUnpack:
    """Native struct to model field values."""

    def test_round_trip(self) -> None:
        """Every field survives pack then unpack."""
        options = CompressOptions(
            min_match_len=Int32(6),
            seek_chunk_reset=True,
            seek_chunk_len=Uint32(1 << 20),
            profile=Profile.REDUCED,
            dictionary_size=Int32(-1),
            space_speed_tradeoff_bytes=Int32(64),
            send_quantum_crcs=True,
            max_local_dictionary_size=Uint32(1 << 22),
            make_long_range_matcher=False,
            match_table_size_log2=Int32(19),
            jobify=Jobify.DISABLE,
            jobify_user_context=0x1000,
            far_match_min_len=Int32(8),
            far_match_offset_log2=Int32(22),
        )

        assert CompressOptions(**unpack_options(pack_options(options))) == options

    def test_null_pointer_reads_back_as_none(self) -> None:
        """A null user pointer maps to None."""
        assert unpack_options(OodleLZ_CompressOptions())["jobify_user_context"] is None

    def test_negative_s32_reads_back_unsigned(self) -> None:
        """Unsigned fields stored as s32 are masked back to 32 bits."""
        native = OodleLZ_CompressOptions()
        native.maxLocalDictionarySize = -1
        assert unpack_options(native)["max_local_dictionary_size"] == 2**32 - 1

    @pytest.mark.parametrize(
        "field_name", ["unused_was_verbosity", "unused_was_maxHuffmansPerChunk"]
    )
    def test_rejects_non_zero_retired_fields(self, field_name: str) -> None:
        """Retired fields must come back as zero."""
        native = OodleLZ_CompressOptions()
        setattr(native, field_name, 5)

        with pytest.raises(OptionsLayoutError) as exc_info:
            unpack_options(native)
        assert exc_info.value.field_name == field_name

    def test_rejects_non_zero_reserved(self) -> None:
        """The reserved block must come back as zero."""
        native = OodleLZ_CompressOptions()
        native.reserved[2] = 1

        with pytest.raises(OptionsLayoutError, match="reserved"):
            unpack_options(native)

    def test_rejects_unknown_enum_codes(self) -> None:
        """Unknown profile or jobify codes fail loudly."""
        native = OodleLZ_CompressOptions()
        native.jobify = 9

        with pytest.raises(UnmappedNativeValueError):
            unpack_options(native)
