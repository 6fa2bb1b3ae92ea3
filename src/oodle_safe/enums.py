"""
Closed sets of identifiers understood by the codec.

Each enumeration's values are the codec's raw integer codes, so the class
body is the two-way mapping table. Converting a raw value that has no member
raises instead of falling back to a default: an unknown code coming back
from the codec means the headers and this module disagree.
"""

from __future__ import annotations

from enum import IntEnum

from typing_extensions import Self

from .exceptions import UnmappedNativeValueError


class NativeEnum(IntEnum):
    """Base class for enumerations mirrored from the codec headers."""

    @classmethod
    def from_native(cls, raw: int) -> Self:
        """
        Map a raw codec value to its member.

        Raises:
            UnmappedNativeValueError: If no member carries `raw`.
        """
        try:
            return cls(raw)
        except ValueError:
            raise UnmappedNativeValueError(cls.__name__, raw) from None

    def to_native(self) -> int:
        """Return the raw codec value for this member."""
        return int(self)


class Compressor(NativeEnum):
    """
    Compression algorithm (`OodleLZ_Compressor`).

    Each compressor trades compression ratio against decode speed.
    """

    NONE = 3
    """No compression, just a copy."""

    KRAKEN = 8
    """Fast decompression and a high compression ratio."""

    MERMAID = 9
    """Between Kraken and Selkie in speed with a decent compression ratio."""

    SELKIE = 11
    """Maximum decompression speed, lowest ratio of the family."""

    HYDRA = 12
    """Selects between Kraken, Leviathan, Mermaid and Selkie per block."""

    LEVIATHAN = 13
    """Slightly slower decompression than Kraken, higher compression ratio."""


class CompressionLevel(NativeEnum):
    """
    Amount of encoder work (`OodleLZ_CompressionLevel`).

    The level trades encode time for bitstream quality. It does not change
    the format, so any level decodes with the same call.
    """

    NONE = 0
    """Don't compress, just copy the data."""

    SUPER_FAST = 1
    """Lowest ratio of the normal levels, very fast."""

    VERY_FAST = 2
    """Fastest with still decent compression."""

    FAST = 3
    """Good for daily use."""

    NORMAL = 4
    """Standard medium speed."""

    OPTIMAL1 = 5
    """Optimal parse level 1 (fastest optimal)."""

    OPTIMAL2 = 6
    """Optimal parse level 2 (recommended baseline)."""

    OPTIMAL3 = 7
    """Optimal parse level 3 (slower)."""

    OPTIMAL4 = 8
    """Optimal parse level 4 (very slow)."""

    OPTIMAL5 = 9
    """Optimal parse level 5 (best ratio, speed ignored)."""

    HYPER_FAST1 = -1
    """Faster than SUPER_FAST, lower ratio."""

    HYPER_FAST2 = -2
    """Faster than HYPER_FAST1, lower ratio."""

    HYPER_FAST3 = -3
    """Faster than HYPER_FAST2, lower ratio."""

    HYPER_FAST4 = -4
    """Fastest level, lowest ratio."""

    # Aliases share the value of the level they name.
    OPTIMAL = 6
    HYPER_FAST = -1
    MAX = 9
    MIN = -4


class Profile(NativeEnum):
    """Decoder profile to target (`OodleLZ_Profile`)."""

    MAIN = 0
    """Full feature set."""

    REDUCED = 1
    """Kraken only, limited feature set."""


class Jobify(NativeEnum):
    """Internal threading used by the compressor (`OodleLZ_Jobify`)."""

    DEFAULT = 0
    """Compressor default level of job usage."""

    DISABLE = 1
    """No jobs at all."""

    NORMAL = 2
    """Balance parallelism against increased memory use."""

    AGGRESSIVE = 3
    """Maximize parallelism at the cost of memory."""


class CheckCRC(NativeEnum):
    """
    Whether the decoder verifies quantum CRCs (`OodleLZ_CheckCRC`).

    `YES` only works on data compressed with `send_quantum_crcs` enabled.
    """

    NO = 0
    YES = 1


class Verbosity(NativeEnum):
    """Codec-side log level during decompression (`OodleLZ_Verbosity`)."""

    NONE = 0
    """Log nothing, even on corrupt data."""

    MINIMAL = 1
    SOME = 2
    LOTS = 3


class DecodeThreadPhase(NativeEnum):
    """
    Phase of a split threaded decode (`OodleLZ_Decode_ThreadPhase`).

    Phase splitting is only available for Kraken data. The codec defines
    the unthreaded decode as running all phases, hence the alias.
    """

    ONE = 1
    TWO = 2
    ALL = 3
    UNTHREADED = 3


class FuzzSafe(NativeEnum):
    """Decoder hardening against hostile input (`OodleLZ_FuzzSafe`)."""

    NO = 0
    YES = 1


DEFAULT_CHECK_CRC: CheckCRC = CheckCRC.NO
DEFAULT_VERBOSITY: Verbosity = Verbosity.NONE
DEFAULT_THREAD_PHASE: DecodeThreadPhase = DecodeThreadPhase.UNTHREADED
