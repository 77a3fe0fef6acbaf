from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from cayopay.domain.address import Email
from cayopay.domain.ids import Id
from cayopay.domain.models import WalletLabel
from cayopay.domain.money import Money
from cayopay.domain.role import Role
from cayopay.infra.records import (
    UNSET,
    GuestCreation,
    GuestUpdate,
    InviteCreation,
    SessionCreation,
    ShopOfferingCreation,
    ShopOfferingUpdate,
    ShopUpdate,
    TransactionCreation,
    WalletUpdate,
)


def test_unset_default_is_falsy_and_distinct_from_none():
    label = WalletUpdate().label
    assert label is UNSET
    assert not label
    assert label is not None
    assert repr(label) == "UNSET"


def test_wallet_update_defaults_keep_everything():
    update = WalletUpdate()
    assert update.label is UNSET
    assert update.allow_overdraft is None


def test_wallet_update_can_clear_label():
    update = WalletUpdate(label=None)
    assert update.label is None


def test_wallet_update_sets_label():
    assert WalletUpdate(label=WalletLabel.OUTSIDE_CASH).label is WalletLabel.OUTSIDE_CASH


def test_shop_update_defaults():
    update = ShopUpdate()
    assert update.owner is UNSET
    assert update.name is None
    assert ShopUpdate(owner=None).owner is None


def test_shop_offering_update_defaults():
    update = ShopOfferingUpdate()
    assert update.description is UNSET
    assert update.name is None and update.price is None


def test_shop_offering_update_rejects_non_money_price():
    with pytest.raises(TypeError):
        ShopOfferingUpdate(price=100)


def test_guest_update_defaults():
    update = GuestUpdate()
    assert update.email is None and update.verified is None


def test_guest_creation_requires_email_type():
    with pytest.raises(TypeError):
        GuestCreation(actor_id=Id.new(), email="guest@example.com", verified=False)


def test_invite_creation_requires_timedelta():
    with pytest.raises(TypeError):
        InviteCreation(
            invitor=Id.new(),
            email=Email("friend@example.com"),
            token="token",
            role=Role.ADMIN,
            expires_in=7,
        )


def test_session_creation_requires_timedelta():
    with pytest.raises(TypeError):
        SessionCreation(
            user_id=Id.new(), token="token", user_agent=None, ip_address=None, expires_in=1
        )


def test_transaction_creation_requires_money():
    with pytest.raises(TypeError):
        TransactionCreation(
            source=Id.new(), destination=Id.new(), executor=None, amount=100, description=None
        )


def test_shop_offering_creation_requires_money():
    with pytest.raises(TypeError):
        ShopOfferingCreation(name="Coffee", description=None, price=250)


def test_records_are_frozen():
    creation = ShopOfferingCreation(name="Coffee", description=None, price=Money.from_minor(250))
    with pytest.raises(FrozenInstanceError):
        creation.name = "Tea"
    assert creation.name == "Coffee"
    assert creation.price == Money.from_minor(250)


def test_records_compare_by_value():
    invitor = Id.new()
    first = InviteCreation(invitor, Email("friend@example.com"), "token", Role.ADMIN, timedelta(days=7))
    second = InviteCreation(invitor, Email("friend@example.com"), "token", Role.ADMIN, timedelta(days=7))
    assert first == second