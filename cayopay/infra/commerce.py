"""Persistence for shops, their offerings and members, and wallet transactions."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import case, delete, func, or_, select
from sqlalchemy.engine import Row

from cayopay.domain.ids import Id
from cayopay.domain.models import (
    Shop,
    ShopId,
    ShopMember,
    ShopMemberId,
    ShopOffering,
    ShopOfferingId,
    Transaction,
    TransactionId,
    UserId,
    WalletId,
)
from cayopay.domain.money import Money
from cayopay.infra.records import (
    UNSET,
    ShopCreation,
    ShopOfferingCreation,
    ShopOfferingUpdate,
    ShopUpdate,
    TransactionCreation,
)
from cayopay.infra.schema import shop_members, shop_offerings, shops, transactions
from cayopay.infra.stores import _opt_id, _opt_utc, _Store, _utc

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _shop(row: Row) -> Shop:
    return Shop(
        id=Id(row.id),
        owner=_opt_id(row.owner_user_id),
        name=row.name,
        created_at=_utc(row.created_at),
        updated_at=_opt_utc(row.updated_at),
    )


def _offering(row: Row) -> ShopOffering:
    return ShopOffering(
        id=Id(row.id),
        shop_id=Id(row.shop_id),
        name=row.name,
        description=row.description,
        price_cents=Money.from_minor(row.price_cents),
        created_at=_utc(row.created_at),
        updated_at=_opt_utc(row.updated_at),
    )


def _member(row: Row) -> ShopMember:
    return ShopMember(
        id=Id(row.id),
        shop_id=Id(row.shop_id),
        user_id=Id(row.user_id),
        created_at=_utc(row.created_at),
        updated_at=_opt_utc(row.updated_at),
    )


def _transaction(row: Row) -> Transaction:
    return Transaction(
        id=Id(row.id),
        source=Id(row.source_wallet_id),
        destination=Id(row.destination_wallet_id),
        executor=_opt_id(row.executor_actor_id),
        amount=Money.from_minor(row.amount_cents),
        description=row.description,
        created_at=_utc(row.created_at),
        updated_at=_opt_utc(row.updated_at),
    )


class ShopStore(_Store):
    def create(self, creation: ShopCreation) -> Shop:
        new_id = self._insert(
            shops,
            owner_user_id=None if creation.owner is None else creation.owner.uuid,
            name=creation.name,
        )
        return _shop(self._row_by_id(shops, new_id))

    def update_by_id(self, shop_id: ShopId, update: ShopUpdate) -> Optional[Shop]:
        """Apply the given changes; None if there is no such shop."""
        values: dict[str, Any] = {}
        if update.owner is not UNSET:
            values["owner_user_id"] = None if update.owner is None else update.owner.uuid
        if update.name is not None:
            values["name"] = update.name
        self._update(shops, shop_id.uuid, values)
        row = self._row_by_id(shops, shop_id.uuid)
        return None if row is None else _shop(row)

    def find_by_id(self, shop_id: ShopId) -> Optional[Shop]:
        row = self._row_by_id(shops, shop_id.uuid)
        return None if row is None else _shop(row)

    def list_all(self) -> list[Shop]:
        return [_shop(row) for row in self.connection.execute(select(shops))]


class ShopOfferingStore(_Store):
    def create(self, shop_id: ShopId, creation: ShopOfferingCreation) -> ShopOffering:
        new_id = self._insert(
            shop_offerings,
            shop_id=shop_id.uuid,
            name=creation.name,
            description=creation.description,
            price_cents=creation.price.as_minor(),
        )
        return _offering(self._row_by_id(shop_offerings, new_id))

    def update_by_id(
        self, offering_id: ShopOfferingId, update: ShopOfferingUpdate
    ) -> Optional[ShopOffering]:
        """Apply the given changes; None if there is no such offering."""
        values: dict[str, Any] = {}
        if update.name is not None:
            values["name"] = update.name
        if update.description is not UNSET:
            values["description"] = update.description
        if update.price is not None:
            values["price_cents"] = update.price.as_minor()
        self._update(shop_offerings, offering_id.uuid, values)
        row = self._row_by_id(shop_offerings, offering_id.uuid)
        return None if row is None else _offering(row)

    def delete_by_id(self, offering_id: ShopOfferingId) -> None:
        self.connection.execute(
            delete(shop_offerings).where(shop_offerings.c.id == offering_id.uuid)
        )

    def find_by_id(self, offering_id: ShopOfferingId) -> Optional[ShopOffering]:
        row = self._row_by_id(shop_offerings, offering_id.uuid)
        return None if row is None else _offering(row)

    def list_by_shop_id(self, shop_id: ShopId) -> list[ShopOffering]:
        rows = self.connection.execute(
            select(shop_offerings).where(shop_offerings.c.shop_id == shop_id.uuid)
        )
        return [_offering(row) for row in rows]


class ShopMemberStore(_Store):
    def create(self, shop_id: ShopId, user_id: UserId) -> ShopMember:
        new_id = self._insert(shop_members, shop_id=shop_id.uuid, user_id=user_id.uuid)
        return _member(self._row_by_id(shop_members, new_id))

    def delete_by_shop_and_user_id(self, shop_id: ShopId, user_id: UserId) -> None:
        self.connection.execute(
            delete(shop_members).where(
                shop_members.c.shop_id == shop_id.uuid,
                shop_members.c.user_id == user_id.uuid,
            )
        )

    def find_by_id(self, member_id: ShopMemberId) -> Optional[ShopMember]:
        row = self._row_by_id(shop_members, member_id.uuid)
        return None if row is None else _member(row)

    def find_by_shop_and_user_id(self, shop_id: ShopId, user_id: UserId) -> Optional[ShopMember]:
        row = self.connection.execute(
            select(shop_members).where(
                shop_members.c.shop_id == shop_id.uuid,
                shop_members.c.user_id == user_id.uuid,
            )
        ).first()
        return None if row is None else _member(row)

    def list_by_shop_id(self, shop_id: ShopId) -> list[ShopMember]:
        rows = self.connection.execute(
            select(shop_members).where(shop_members.c.shop_id == shop_id.uuid)
        )
        return [_member(row) for row in rows]

    def list_by_user_id(self, user_id: UserId) -> list[ShopMember]:
        rows = self.connection.execute(
            select(shop_members).where(shop_members.c.user_id == user_id.uuid)
        )
        return [_member(row) for row in rows]


class TransactionStore(_Store):
    def create(self, creation: TransactionCreation) -> Transaction:
        new_id = self._insert(
            transactions,
            source_wallet_id=creation.source.uuid,
            destination_wallet_id=creation.destination.uuid,
            executor_actor_id=None if creation.executor is None else creation.executor.uuid,
            amount_cents=creation.amount.as_minor(),
            description=creation.description,
        )
        return _transaction(self._row_by_id(transactions, new_id))

    def find_by_id(self, transaction_id: TransactionId) -> Optional[Transaction]:
        row = self._row_by_id(transactions, transaction_id.uuid)
        return None if row is None else _transaction(row)

    def list_by_wallet_id(self, wallet_id: WalletId) -> list[Transaction]:
        """Transactions into or out of the wallet, newest first."""
        rows = self.connection.execute(
            select(transactions)
            .where(
                or_(
                    transactions.c.source_wallet_id == wallet_id.uuid,
                    transactions.c.destination_wallet_id == wallet_id.uuid,
                )
            )
            .order_by(transactions.c.created_at.desc())
        )
        return [_transaction(row) for row in rows]

    def calculate_wallet_balance(self, wallet_id: WalletId) -> Money:
        """Incoming minus outgoing amounts of the wallet.

        Raises OverflowError if the sum leaves the 32-bit range of Money.
        """
        wid = wallet_id.uuid
        signed = case(
            (transactions.c.destination_wallet_id == wid, transactions.c.amount_cents),
            (transactions.c.source_wallet_id == wid, -transactions.c.amount_cents),
            else_=0,
        )
        stmt = select(func.coalesce(func.sum(signed), 0)).where(
            or_(
                transactions.c.source_wallet_id == wid,
                transactions.c.destination_wallet_id == wid,
            )
        )
        balance = int(self.connection.execute(stmt).scalar_one() or 0)
        if not _I32_MIN <= balance <= _I32_MAX:
            raise OverflowError(f"Balance overflow: {balance} cents exceeds i32 range")
        return Money.from_minor(balance)