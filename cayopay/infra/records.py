"""Inputs for creating and updating stored entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional, Union

from cayopay.domain.address import Email
from cayopay.domain.models import ActorId, InviteStatus, ShopId, UserId, WalletId, WalletLabel
from cayopay.domain.money import Money
from cayopay.domain.role import Role


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET
"""Marks a nullable field of an update that is to be left unchanged."""


def _require(value: object, kind: type, name: str) -> None:
    if not isinstance(value, kind):
        raise TypeError(f"{name} must be {kind.__name__}, got {type(value).__name__}")


@dataclass(frozen=True)
class GuestCreation:
    actor_id: ActorId
    email: Email
    verified: bool

    def __post_init__(self) -> None:
        _require(self.email, Email, "email")


@dataclass(frozen=True)
class GuestUpdate:
    """Fields left as None are kept unchanged."""

    email: Optional[Email] = None
    verified: Optional[bool] = None


@dataclass(frozen=True)
class InviteCreation:
    invitor: UserId
    email: Email
    token: str
    role: Role
    expires_in: timedelta

    def __post_init__(self) -> None:
        _require(self.email, Email, "email")
        _require(self.expires_in, timedelta, "expires_in")


@dataclass(frozen=True)
class InviteUpdate:
    status: Optional[InviteStatus] = None


@dataclass(frozen=True)
class SessionCreation:
    user_id: UserId
    token: str
    user_agent: Optional[str]
    ip_address: Optional[str]
    expires_in: timedelta

    def __post_init__(self) -> None:
        _require(self.expires_in, timedelta, "expires_in")


@dataclass(frozen=True)
class WalletCreation:
    owner: Optional[ActorId]
    label: Optional[WalletLabel]
    allow_overdraft: bool


@dataclass(frozen=True)
class WalletUpdate:
    """``label`` may be set to None to clear it; UNSET keeps it."""

    label: Union[Optional[WalletLabel], _Unset] = UNSET
    allow_overdraft: Optional[bool] = None


@dataclass(frozen=True)
class ShopCreation:
    owner: Optional[UserId]
    name: str


@dataclass(frozen=True)
class ShopUpdate:
    """``owner`` may be set to None to clear it; UNSET keeps it."""

    owner: Union[Optional[UserId], _Unset] = UNSET
    name: Optional[str] = None


@dataclass(frozen=True)
class ShopOfferingCreation:
    name: str
    description: Optional[str]
    price: Money

    def __post_init__(self) -> None:
        _require(self.price, Money, "price")


@dataclass(frozen=True)
class ShopOfferingUpdate:
    """``description`` may be set to None to clear it; UNSET keeps it."""

    name: Optional[str] = None
    description: Union[Optional[str], _Unset] = UNSET
    price: Optional[Money] = None

    def __post_init__(self) -> None:
        if self.price is not None:
            _require(self.price, Money, "price")


@dataclass(frozen=True)
class TransactionCreation:
    source: WalletId
    destination: WalletId
    executor: Optional[ActorId]
    amount: Money
    description: Optional[str]

    def __post_init__(self) -> None:
        _require(self.amount, Money, "amount")


__all__ = [
    "UNSET",
    "GuestCreation",
    "GuestUpdate",
    "InviteCreation",
    "InviteUpdate",
    "SessionCreation",
    "WalletCreation",
    "WalletUpdate",
    "ShopCreation",
    "ShopUpdate",
    "ShopOfferingCreation",
    "ShopOfferingUpdate",
    "TransactionCreation",
]