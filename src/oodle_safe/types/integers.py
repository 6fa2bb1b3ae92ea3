"""Fixed-width integer types matching the codec's native fields."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self


class BoundedInt(int):
    """A base class for integers restricted to the range of a native C type."""

    MIN: ClassVar[int]
    """Smallest representable value (inclusive)."""

    MAX: ClassVar[int]
    """Largest representable value (inclusive)."""

    NATIVE_NAME: ClassVar[str]
    """Name of the native type, used in error messages and JSON schema."""

    def __new__(cls, value: int) -> Self:
        """
        Create and validate a new bounded integer.

        Booleans are rejected even though they subclass `int`.

        Raises:
            TypeError: If `value` is not an integer.
            OverflowError: If `value` is outside [MIN, MAX].
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int for {cls.__name__}, got {type(value).__name__}")
        if not (cls.MIN <= value <= cls.MAX):
            raise OverflowError(
                f"{value} is out of range for {cls.__name__} "
                f"(valid range: [{cls.MIN}, {cls.MAX}])"
            )
        return super().__new__(cls, value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> BoundedInt:
            """Pydantic validation function that calls the class constructor."""
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            # JSON input is range-checked as an int, then wrapped in the bounded type.
            json_schema=core_schema.no_info_after_validator_function(
                cls, core_schema.int_schema(ge=cls.MIN, le=cls.MAX)
            ),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """Hook into Pydantic's JSON Schema generation system."""
        json_schema = handler(core_schema)
        json_schema.update(format=cls.NATIVE_NAME)
        return json_schema

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Int32(BoundedInt):
    """A signed 32-bit integer (`OO_S32`)."""

    MIN = -(2**31)
    MAX = 2**31 - 1
    NATIVE_NAME = "int32"


class Uint32(BoundedInt):
    """An unsigned 32-bit integer (`OO_U32`)."""

    MIN = 0
    MAX = 2**32 - 1
    NATIVE_NAME = "uint32"

    def to_s32(self) -> int:
        """Reinterpret the value as a two's complement signed 32-bit integer."""
        value = int(self)
        return value - 2**32 if value > Int32.MAX else value

    @classmethod
    def from_s32(cls, value: int) -> Uint32:
        """Reinterpret a signed 32-bit value as unsigned."""
        return cls(value & 0xFFFFFFFF)
