"""Base model for records that mirror a native codec struct."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class NativeRecord(BaseModel):
    """
    A mutable, strictly validated mirror of a C struct.

    Field names are snake case in Python. Serialized by alias they take the
    camel case spelling of the codec headers, so `min_match_len` dumps as
    `minMatchLen`.

    Every construction and every assignment is validated. An instance can
    therefore always be packed into the native layout.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        validate_assignment=True,
        strict=True,
        extra="forbid",
    )

    def copy(self: Self, **changes: Any) -> Self:
        """Return a validated copy with `changes` applied on top of every current field."""
        return type(self).model_validate(self.model_dump() | changes)
