"""Relational schema for the persisted entities."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Union

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.engine import Connection, Engine

from cayopay.domain.ids import Id

metadata = MetaData()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_uuid() -> uuid.UUID:
    return Id.new().uuid


def _id_column() -> Column:
    return Column("id", Uuid, primary_key=True, default=_new_uuid)


def _timestamp_columns() -> tuple[Column, Column]:
    return (
        Column("created_at", DateTime(timezone=True), nullable=False, default=_now),
        Column("updated_at", DateTime(timezone=True), nullable=True, onupdate=_now),
    )


actors = Table(
    "actors",
    metadata,
    _id_column(),
    *_timestamp_columns(),
)

users = Table(
    "users",
    metadata,
    _id_column(),
    Column("actor_id", Uuid, ForeignKey("actors.id"), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("first_name", String(127), nullable=False),
    Column("last_name", String(127), nullable=False),
    Column("role", String(32), nullable=False, default="undefined"),
    *_timestamp_columns(),
)

guests = Table(
    "guests",
    metadata,
    _id_column(),
    Column("actor_id", Uuid, ForeignKey("actors.id"), nullable=False, unique=True),
    Column("email", String(255), nullable=True),
    Column("verified", Boolean, nullable=False, default=False),
    *_timestamp_columns(),
)

invites = Table(
    "invites",
    metadata,
    _id_column(),
    Column("invitor_user_id", Uuid, ForeignKey("users.id"), nullable=False),
    Column("email", String(255), nullable=False),
    Column("token", String(255), nullable=False, unique=True),
    Column("role", String(32), nullable=False),
    Column("status", String(32), nullable=False, default="pending"),
    Column("expires_at", DateTime(timezone=True), nullable=False),
    *_timestamp_columns(),
)

sessions = Table(
    "sessions",
    metadata,
    _id_column(),
    Column("user_id", Uuid, ForeignKey("users.id"), nullable=False),
    Column("token", String(255), nullable=False, unique=True),
    Column("user_agent", Text, nullable=True),
    Column("ip_address", String(64), nullable=True),
    Column("expires_at", DateTime(timezone=True), nullable=False),
    *_timestamp_columns(),
)

wallets = Table(
    "wallets",
    metadata,
    _id_column(),
    Column("owner_actor_id", Uuid, ForeignKey("actors.id"), nullable=True),
    Column("label", String(64), nullable=True, unique=True),
    Column("allow_overdraft", Boolean, nullable=False, default=False),
    *_timestamp_columns(),
)

shops = Table(
    "shops",
    metadata,
    _id_column(),
    Column("owner_user_id", Uuid, ForeignKey("users.id"), nullable=True),
    Column("name", String(255), nullable=False),
    *_timestamp_columns(),
)

shop_offerings = Table(
    "shop_offerings",
    metadata,
    _id_column(),
    Column("shop_id", Uuid, ForeignKey("shops.id"), nullable=False),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("price_cents", Integer, nullable=False),
    *_timestamp_columns(),
)

shop_members = Table(
    "shop_members",
    metadata,
    _id_column(),
    Column("shop_id", Uuid, ForeignKey("shops.id"), nullable=False),
    Column("user_id", Uuid, ForeignKey("users.id"), nullable=False),
    *_timestamp_columns(),
    UniqueConstraint("shop_id", "user_id"),
)

transactions = Table(
    "transactions",
    metadata,
    _id_column(),
    Column("source_wallet_id", Uuid, ForeignKey("wallets.id"), nullable=False),
    Column("destination_wallet_id", Uuid, ForeignKey("wallets.id"), nullable=False),
    Column("executor_actor_id", Uuid, ForeignKey("actors.id"), nullable=True),
    Column("amount_cents", Integer, nullable=False),
    Column("description", Text, nullable=True),
    *_timestamp_columns(),
)


def create_schema(connection: Union[Connection, Engine]) -> None:
    """Create every table that does not exist yet."""
    metadata.create_all(connection)