"""
Tests against the real codec library.

Skipped unless the library can be loaded (see `OODLE_LIBRARY`). The
reference scenarios additionally need `OODLE_TEST_DATA`: a directory holding
`decompressed` (plaintext) and `compressed` (a 4 byte little-endian
decompressed size followed by the Kraken/Normal block).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import pytest

from oodle_safe import (
    BLOCK_LEN,
    LOCALDICTIONARYSIZE_MAX,
    CheckCRC,
    CompressionLevel,
    CompressOptions,
    Compressor,
    DecompressionFailed,
    LibraryNotFoundError,
    NativeCodec,
    compress,
    compress_bytes,
    decompress,
    decompress_bytes,
    load_library,
)


@pytest.fixture(scope="module")
def real_codec() -> NativeCodec:
    """A handle on the installed codec library."""
    try:
        return NativeCodec(load_library())
    except LibraryNotFoundError as e:
        pytest.skip(str(e))


@dataclass(frozen=True)
class ReferenceData:
    """A plaintext and its captured Kraken/Normal block."""

    decompressed: bytes
    compressed: bytes
    decompressed_size: int


@pytest.fixture(scope="module")
def reference() -> ReferenceData:
    """Reference files from `OODLE_TEST_DATA`, with the size header split off."""
    directory = os.environ.get("OODLE_TEST_DATA")
    if not directory:
        pytest.skip("OODLE_TEST_DATA is not set")
    root = Path(directory)
    framed = (root / "compressed").read_bytes()
    return ReferenceData(
        decompressed=(root / "decompressed").read_bytes(),
        compressed=framed[4:],
        decompressed_size=int.from_bytes(framed[:4], "little"),
    )


class TestReferenceOutput:
    """Bit-exact agreement with previously captured codec output."""

    @pytest.mark.parametrize("options", [None, "default"])
    def test_compress(
        self, real_codec: NativeCodec, reference: ReferenceData, options: str | None
    ) -> None:
        """Kraken/Normal reproduces the captured block, with or without explicit defaults."""
        output = bytearray(len(reference.decompressed) + 8)
        size = compress(
            Compressor.KRAKEN,
            reference.decompressed,
            output,
            CompressionLevel.NORMAL,
            CompressOptions.default(real_codec) if options == "default" else None,
            codec=real_codec,
        )

        assert bytes(output[:size]) == reference.compressed

    def test_decompress(self, real_codec: NativeCodec, reference: ReferenceData) -> None:
        """The captured block decodes to the plaintext."""
        output = bytearray(reference.decompressed_size)

        assert decompress(reference.compressed, output, codec=real_codec) == len(output)
        assert bytes(output) == reference.decompressed

    def test_corruption_fails(self, real_codec: NativeCodec, reference: ReferenceData) -> None:
        """One flipped byte in the middle of the block never decodes."""
        corrupted = bytearray(reference.compressed)
        corrupted[len(corrupted) // 2] ^= 0xFF

        with pytest.raises(DecompressionFailed):
            decompress_bytes(bytes(corrupted), reference.decompressed_size, codec=real_codec)


class TestOptions:
    """Options behavior as reported by the codec."""

    def test_default_and_validate(self, real_codec: NativeCodec) -> None:
        """Defaults come back as documented and validation fills the gaps."""
        options = CompressOptions.default(real_codec)
        assert options == CompressOptions()

        validated = options.validate(real_codec)
        assert validated.min_match_len >= 2
        assert validated.validate(real_codec) == validated

    def test_validate_clamps_sizes(self, real_codec: NativeCodec) -> None:
        """Out-of-range sizes are pulled into range."""
        options = CompressOptions().copy(
            seek_chunk_len=0, max_local_dictionary_size=LOCALDICTIONARYSIZE_MAX
        )
        validated = options.validate(real_codec)

        assert validated.seek_chunk_len == BLOCK_LEN
        assert validated.max_local_dictionary_size == LOCALDICTIONARYSIZE_MAX >> 1


class TestTransforms:
    """Round trips through the real bitstream."""

    DATA = b"".join(b"record %05d: value=%d\n" % (i, i * 7 % 13) for i in range(5000))

    @pytest.mark.parametrize(
        "compressor",
        [Compressor.KRAKEN, Compressor.MERMAID, Compressor.SELKIE, Compressor.LEVIATHAN],
    )
    def test_round_trip(self, real_codec: NativeCodec, compressor: Compressor) -> None:
        compressed = compress_bytes(compressor, self.DATA, CompressionLevel.FAST, codec=real_codec)
        assert decompress_bytes(compressed, len(self.DATA), codec=real_codec) == self.DATA

    def test_crc_round_trip(self, real_codec: NativeCodec) -> None:
        options = CompressOptions(send_quantum_crcs=True)
        compressed = compress_bytes(
            Compressor.KRAKEN, self.DATA, CompressionLevel.NORMAL, options, codec=real_codec
        )
        result = decompress_bytes(
            compressed, len(self.DATA), check_crc=CheckCRC.YES, codec=real_codec
        )
        assert result == self.DATA

    def test_dictionary_round_trip(self, real_codec: NativeCodec) -> None:
        dictionary = self.DATA[:4096]
        payload = self.DATA[4096:8192]
        compressed = compress_bytes(
            Compressor.KRAKEN,
            payload,
            CompressionLevel.NORMAL,
            dictionary=dictionary,
            codec=real_codec,
        )
        result = decompress_bytes(compressed, len(payload), dictionary, codec=real_codec)
        assert result == payload

    def test_corruption_is_detected(self, real_codec: NativeCodec) -> None:
        """Fuzz-safe decoding turns corrupt input into an exception."""
        compressed = bytearray(
            compress_bytes(Compressor.KRAKEN, self.DATA, CompressionLevel.NORMAL, codec=real_codec)
        )
        del compressed[len(compressed) // 2 :]

        with pytest.raises(DecompressionFailed):
            decompress_bytes(bytes(compressed), len(self.DATA), codec=real_codec)
