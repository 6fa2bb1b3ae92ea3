"""Exception hierarchy for the Oodle safety layer."""

from __future__ import annotations

from .constants import FAILED


class OodleError(Exception):
    """
    Base exception for all errors raised by this package.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class LibraryNotFoundError(OodleError):
    """
    Raised when the codec shared library cannot be located or loaded.

    Attributes:
        searched: The paths or library names that were tried.
    """

    def __init__(self, searched: list[str], *, detail: str | None = None) -> None:
        self.searched = searched
        self.detail = detail

        msg = f"Oodle library not found (tried: {', '.join(searched) or 'nothing'})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class DefaultOptionsUnavailableError(OodleError):
    """
    Raised when the codec has no built-in options for a compressor and level.

    Attributes:
        compressor: The compressor that was queried.
        level: The compression level that was queried.
    """

    def __init__(self, compressor: object, level: object) -> None:
        self.compressor = compressor
        self.level = level
        super().__init__(f"Codec has no default options for {compressor!r} at {level!r}")


class UnmappedNativeValueError(OodleError, ValueError):
    """
    Raised when a raw integer from the codec has no matching enum member.

    This signals an ABI mismatch or a violated precondition, never a data
    condition the caller could recover from.

    Attributes:
        enum_name: The enumeration that was being decoded.
        raw: The unmapped raw value.
    """

    def __init__(self, enum_name: str, raw: int) -> None:
        self.enum_name = enum_name
        self.raw = raw
        super().__init__(f"Native value {raw} has no {enum_name} member")


class OptionsLayoutError(OodleError):
    """
    Raised when a native options struct carries non-zero layout-only fields.

    Attributes:
        field_name: The native field that should have been zero.
        value: The value found.
    """

    def __init__(self, field_name: str, value: object) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"Native options field '{field_name}' must be zero, got {value!r}")


class CodecFailure(OodleError):
    """
    The codec returned its failure sentinel.

    Caller misuse (undersized buffer, wrong dictionary, CRC requested on data
    without CRCs, incompatible thread phase) and data corruption are reported
    identically. Bytes may have been written to the output buffer, but none of
    them are valid.

    Attributes:
        code: The raw failure value, always `FAILED`.
    """

    operation: str = "codec call"

    def __init__(self, detail: str | None = None) -> None:
        self.code = FAILED
        self.detail = detail

        msg = f"{self.operation} failed"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class CompressionFailed(CodecFailure):
    """Raised when compression produces no valid output."""

    operation = "compression"


class DecompressionFailed(CodecFailure):
    """Raised when decompression produces no valid output."""

    operation = "decompression"
