"""E-mail addresses that do not reveal themselves in logs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, repr=False)
class Email:
    """An e-mail address. Its representation is masked."""

    _value: str

    def __post_init__(self) -> None:
        if not isinstance(self._value, str):
            raise TypeError(f"Email requires a str, got {type(self._value).__name__}")

    def expose(self) -> str:
        """The address itself."""
        return self._value

    def __repr__(self) -> str:
        return "Email(***)"

    __str__ = __repr__