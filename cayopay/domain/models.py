"""Domain entities: invites, sessions, wallets, guests, shops and transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from cayopay.domain.address import Email
from cayopay.domain.ids import Id
from cayopay.domain.money import Money
from cayopay.domain.role import Role

ActorId = Id["Actor"]
UserId = Id["User"]
InviteId = Id["Invite"]
SessionId = Id["Session"]
WalletId = Id["Wallet"]
GuestId = Id["Guest"]
ShopId = Id["Shop"]
ShopOfferingId = Id["ShopOffering"]
ShopMemberId = Id["ShopMember"]
TransactionId = Id["Transaction"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InviteStatus(str, Enum):
    """The state of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    REVOKED = "revoked"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "InviteStatus":
        """Read a stored status; unknown values give ``PENDING``."""
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING


@dataclass
class Invite:
    """An invitation for someone to join with a given role."""

    id: InviteId
    invitor: UserId
    email: Email
    token: str
    role: Role
    status: InviteStatus
    expires_in: timedelta
    created_at: datetime
    updated_at: Optional[datetime] = None

    def is_expired(self) -> bool:
        return _now() > self.created_at + self.expires_in


@dataclass
class Session:
    """A login session identified by its token."""

    id: SessionId
    user_id: UserId
    token: str
    user_agent: Optional[str]
    ip_address: Optional[str]
    expires_in: timedelta
    created_at: datetime
    updated_at: Optional[datetime] = None

    def is_expired(self) -> bool:
        return _now() > self.created_at + self.expires_in


class WalletLabel(str, Enum):
    """Labels of the system wallets that belong to no actor."""

    OUTSIDE_CASH = "outside_cash"
    OUTSIDE_CASH_DISCREPANCY = "outside_cash_discrepancy"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def variants(cls) -> tuple["WalletLabel", ...]:
        """Every label, in declaration order."""
        return tuple(cls)

    @classmethod
    def parse(cls, value: str) -> "WalletLabel":
        """Read a stored label; unknown values give ``OUTSIDE_CASH``."""
        try:
            return cls(value)
        except ValueError:
            return cls.OUTSIDE_CASH


@dataclass
class Wallet:
    id: WalletId
    owner: Optional[ActorId]
    label: Optional[WalletLabel]
    allow_overdraft: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class Guest:
    id: GuestId
    actor_id: ActorId
    email: Optional[Email]
    verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class Shop:
    id: ShopId
    owner: Optional[UserId]
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class ShopOffering:
    id: ShopOfferingId
    shop_id: ShopId
    name: str
    description: Optional[str]
    price_cents: Money
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class ShopMember:
    id: ShopMemberId
    shop_id: ShopId
    user_id: UserId
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class Transaction:
    """A transfer of money from one wallet to another."""

    id: TransactionId
    source: WalletId
    destination: WalletId
    executor: Optional[ActorId]
    amount: Money
    description: Optional[str]
    created_at: datetime = field(default_factory=_now)
    updated_at: Optional[datetime] = None