"""Typed identifiers backed by time-ordered UUIDs."""

from __future__ import annotations

import secrets
import time
import uuid
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


def _uuid7() -> uuid.UUID:
    """Build a version 7 UUID: 48-bit Unix milliseconds followed by random bits."""
    millis = time.time_ns() // 1_000_000
    rand_a = secrets.randbits(12)
    rand_b = secrets.randbits(62)
    value = (millis & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76
    value |= rand_a << 64
    value |= 0b10 << 62
    value |= rand_b
    return uuid.UUID(int=value)


@dataclass(frozen=True, repr=False)
class Id(Generic[T]):
    """An identifier for an entity of type ``T``.

    The type parameter only serves static checking; two ids are equal when
    their UUIDs are equal. ``Id()`` creates a fresh UUID v7.
    """

    uuid: uuid.UUID = field(default_factory=_uuid7)

    def __post_init__(self) -> None:
        if not isinstance(self.uuid, uuid.UUID):
            raise TypeError(f"Id requires a UUID, got {type(self.uuid).__name__}")

    @classmethod
    def new(cls) -> "Id[T]":
        """Create a new time-ordered identifier."""
        return cls(_uuid7())

    @classmethod
    def parse(cls, text: str) -> "Id[T]":
        """Parse an identifier from its textual UUID form.

        Raises ValueError if the text is not a UUID.
        """
        return cls(uuid.UUID(text))

    def cast(self) -> "Id[U]":
        """The same UUID as an identifier of another entity type."""
        return Id(self.uuid)

    def __str__(self) -> str:
        return str(self.uuid)

    def __repr__(self) -> str:
        return f"Id({self.uuid})"