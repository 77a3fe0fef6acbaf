"""Persistence for actors, guests, invites, sessions and wallets."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import Table, delete, select, update
from sqlalchemy.engine import Connection, Row

from cayopay.domain.address import Email
from cayopay.domain.ids import Id
from cayopay.domain.models import (
    ActorId,
    Guest,
    GuestId,
    Invite,
    InviteId,
    InviteStatus,
    Session,
    UserId,
    Wallet,
    WalletId,
    WalletLabel,
)
from cayopay.domain.role import Role
from cayopay.infra.records import (
    UNSET,
    GuestCreation,
    GuestUpdate,
    InviteCreation,
    InviteUpdate,
    SessionCreation,
    WalletCreation,
    WalletUpdate,
)
from cayopay.infra.schema import actors, guests, invites, sessions, wallets


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _opt_utc(value: Optional[datetime]) -> Optional[datetime]:
    return None if value is None else _utc(value)


def _opt_id(value: Optional[uuid.UUID]) -> Optional[Id]:
    return None if value is None else Id(value)


def _guest(row: Row) -> Guest:
    return Guest(
        id=Id(row.id),
        actor_id=Id(row.actor_id),
        email=None if row.email is None else Email(row.email),
        verified=bool(row.verified),
        created_at=_utc(row.created_at),
        updated_at=_opt_utc(row.updated_at),
    )


def _invite(row: Row) -> Invite:
    created_at = _utc(row.created_at)
    return Invite(
        id=Id(row.id),
        invitor=Id(row.invitor_user_id),
        email=Email(row.email),
        token=row.token,
        role=Role.parse(row.role),
        status=InviteStatus.parse(row.status),
        expires_in=_utc(row.expires_at) - created_at,
        created_at=created_at,
        updated_at=_opt_utc(row.updated_at),
    )


def _session(row: Row) -> Session:
    created_at = _utc(row.created_at)
    return Session(
        id=Id(row.id),
        user_id=Id(row.user_id),
        token=row.token,
        user_agent=row.user_agent,
        ip_address=row.ip_address,
        expires_in=_utc(row.expires_at) - created_at,
        created_at=created_at,
        updated_at=_opt_utc(row.updated_at),
    )


def _wallet(row: Row) -> Wallet:
    return Wallet(
        id=Id(row.id),
        owner=_opt_id(row.owner_actor_id),
        label=None if row.label is None else WalletLabel.parse(row.label),
        allow_overdraft=bool(row.allow_overdraft),
        created_at=_utc(row.created_at),
        updated_at=_opt_utc(row.updated_at),
    )


class _Store:
    """A store bound to a connection; the caller owns the transaction."""

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _insert(self, table: Table, **values: Any) -> uuid.UUID:
        new_id = Id.new().uuid
        self.connection.execute(table.insert().values(id=new_id, **values))
        return new_id

    def _row_by_id(self, table: Table, row_id: uuid.UUID) -> Optional[Row]:
        return self.connection.execute(select(table).where(table.c.id == row_id)).first()

    def _update(self, table: Table, row_id: uuid.UUID, values: dict[str, Any]) -> None:
        if values:
            self.connection.execute(update(table).where(table.c.id == row_id).values(**values))


class ActorStore(_Store):
    def create(self) -> ActorId:
        """Create a new actor and return its id."""
        return Id(self._insert(actors))


class GuestStore(_Store):
    def create(self, creation: GuestCreation) -> Guest:
        new_id = self._insert(
            guests,
            actor_id=creation.actor_id.uuid,
            email=creation.email.expose(),
            verified=creation.verified,
        )
        return _guest(self.connection.execute(select(guests).where(guests.c.id == new_id)).one())

    def update_by_id(self, guest_id: GuestId, update: GuestUpdate) -> Guest:
        """Apply the given changes; raise NoResultFound if there is no such guest."""
        values: dict[str, Any] = {}
        if update.email is not None:
            values["email"] = update.email.expose()
        if update.verified is not None:
            values["verified"] = update.verified
        self._update(guests, guest_id.uuid, values)
        row = self.connection.execute(select(guests).where(guests.c.id == guest_id.uuid)).one()
        return _guest(row)

    def find_by_id(self, guest_id: GuestId) -> Optional[Guest]:
        row = self._row_by_id(guests, guest_id.uuid)
        return None if row is None else _guest(row)

    def find_by_actor_id(self, actor_id: ActorId) -> Optional[Guest]:
        row = self.connection.execute(
            select(guests).where(guests.c.actor_id == actor_id.uuid)
        ).first()
        return None if row is None else _guest(row)

    def list_all(self) -> list[Guest]:
        return [_guest(row) for row in self.connection.execute(select(guests))]


class InviteStore(_Store):
    def create(self, creation: InviteCreation) -> Invite:
        now = _now()
        new_id = self._insert(
            invites,
            invitor_user_id=creation.invitor.uuid,
            email=creation.email.expose(),
            token=creation.token,
            role=creation.role.value,
            expires_at=now + creation.expires_in,
            created_at=now,
        )
        return _invite(self._row_by_id(invites, new_id))

    def update_by_id(self, invite_id: InviteId, update: InviteUpdate) -> Optional[Invite]:
        values: dict[str, Any] = {}
        if update.status is not None:
            values["status"] = update.status.value
        self._update(invites, invite_id.uuid, values)
        row = self._row_by_id(invites, invite_id.uuid)
        return None if row is None else _invite(row)

    def delete_by_id(self, invite_id: InviteId) -> None:
        self.connection.execute(delete(invites).where(invites.c.id == invite_id.uuid))

    def find_by_token(self, token: str) -> Optional[Invite]:
        row = self.connection.execute(select(invites).where(invites.c.token == token)).first()
        return None if row is None else _invite(row)

    def find_by_email(self, email: Email) -> Optional[Invite]:
        row = self.connection.execute(
            select(invites).where(invites.c.email == email.expose())
        ).first()
        return None if row is None else _invite(row)

    def list_all(self) -> list[Invite]:
        return [_invite(row) for row in self.connection.execute(select(invites))]


class SessionStore(_Store):
    def create(self, creation: SessionCreation) -> Session:
        now = _now()
        new_id = self._insert(
            sessions,
            user_id=creation.user_id.uuid,
            token=creation.token,
            user_agent=creation.user_agent,
            ip_address=creation.ip_address,
            expires_at=now + creation.expires_in,
            created_at=now,
        )
        return _session(self._row_by_id(sessions, new_id))

    def delete_by_token(self, token: str) -> None:
        self.connection.execute(delete(sessions).where(sessions.c.token == token))

    def find_by_token(self, token: str) -> Optional[Session]:
        row = self.connection.execute(select(sessions).where(sessions.c.token == token)).first()
        return None if row is None else _session(row)

    def list_by_user_id(self, user_id: UserId) -> list[Session]:
        rows = self.connection.execute(select(sessions).where(sessions.c.user_id == user_id.uuid))
        return [_session(row) for row in rows]


class WalletStore(_Store):
    def create(self, creation: WalletCreation) -> Wallet:
        new_id = self._insert(
            wallets,
            owner_actor_id=None if creation.owner is None else creation.owner.uuid,
            label=None if creation.label is None else creation.label.value,
            allow_overdraft=creation.allow_overdraft,
        )
        return _wallet(self._row_by_id(wallets, new_id))

    def update_by_id(self, wallet_id: WalletId, update: WalletUpdate) -> Optional[Wallet]:
        values: dict[str, Any] = {}
        if update.label is not UNSET:
            values["label"] = None if update.label is None else update.label.value
        if update.allow_overdraft is not None:
            values["allow_overdraft"] = update.allow_overdraft
        self._update(wallets, wallet_id.uuid, values)
        row = self._row_by_id(wallets, wallet_id.uuid)
        return None if row is None else _wallet(row)

    def find_by_id(self, wallet_id: WalletId) -> Optional[Wallet]:
        row = self._row_by_id(wallets, wallet_id.uuid)
        return None if row is None else _wallet(row)

    def find_by_label(self, label: WalletLabel) -> Optional[Wallet]:
        row = self.connection.execute(select(wallets).where(wallets.c.label == label.value)).first()
        return None if row is None else _wallet(row)