# cayopay

Building blocks for a cashless point-of-sale system: a domain model for
money, roles, invites, sessions, wallets, guests, shops and transactions; a
storage layer on SQLAlchemy; session and guest services; an SMTP mailer for
invitations; and the response bodies of an HTTP API.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Layout

- `cayopay.domain.money`: `Money`, an amount in cents limited to the signed
  32-bit range. `+`, `-` and unary `-` saturate at `Money.MIN` and
  `Money.MAX`; `checked_add`, `checked_sub` and `checked_neg` return `None`
  on overflow. `from_major` takes whole units, `from_u64` raises
  `OverflowError` for values above the 32-bit range, and `to_u64` turns
  debts into zero.
- `cayopay.domain.ids`: `Id`, a typed identifier around a time-ordered
  UUID (version 7). `Id.new()`, `Id.parse(text)` and `cast()`; the UUID is
  in `.uuid`.
- `cayopay.domain.address`: `Email`, whose `repr` and `str` are masked as
  `Email(***)`; `expose()` returns the address.
- `cayopay.domain.role`: `Role` (`UNDEFINED`, `OWNER`, `ADMIN`) and
  `Permission`, with `permissions()`, `has_permission()`,
  `can_assign_role()` and `Role.parse()`.
- `cayopay.domain.models`: `Invite`, `InviteStatus`, `Session`, `Wallet`,
  `WalletLabel`, `Guest`, `Shop`, `ShopOffering`, `ShopMember` and
  `Transaction`. `Invite.is_expired()` and `Session.is_expired()` compare
  `created_at + expires_in` with the current time.
- `cayopay.infra.schema`: the tables and `create_schema(connection)`, which
  creates any that are missing.
- `cayopay.infra.records`: the creation and update inputs of the stores. In
  `WalletUpdate`, `ShopUpdate` and `ShopOfferingUpdate` a nullable field set
  to `None` is cleared, and the default `UNSET` leaves it unchanged.
- `cayopay.infra.stores`: `ActorStore`, `GuestStore`, `InviteStore`,
  `SessionStore` and `WalletStore`.
- `cayopay.infra.commerce`: `ShopStore`, `ShopOfferingStore`,
  `ShopMemberStore` and `TransactionStore`. `list_by_wallet_id` returns the
  newest transaction first, and `calculate_wallet_balance` adds incoming and
  subtracts outgoing amounts, raising `OverflowError` outside the 32-bit range.
- `cayopay.infra.mailer`: `EmailService` and `EmailServiceConfig`.
  `build_invite` composes the HTML invitation and `send_invite` delivers it.
  Port 587 uses STARTTLS, and every other port uses implicit TLS. The
  service raises `AddressParseError` or `EmailTransportError`, both
  subclasses of `EmailError`.
- `cayopay.application.errors`: `AppError` and its subclasses, such as
  `NotFoundError`, `AuthenticationError`, `InviteExpiredError` and
  `DatabaseError`.
- `cayopay.application.services`: `SessionService` and `GuestService`. Each
  call runs in its own transaction on a SQLAlchemy `Engine`, and database
  failures are raised as `DatabaseError`.
- `cayopay.api.responses`: `ErrorResponse`, `HealthResponse`,
  `GuestResponse` and `InviteResponse`, each with `to_dict()`. There are
  also `health_check()` and `error_response(error)`.

The stores take a SQLAlchemy `Connection`, and the caller owns the
transaction.

## Money

```python
from cayopay.domain.money import Money

balance = Money.from_major(10) - Money.from_major(15)
print(balance)               # -5.00
print(balance.format_eur())  # €-5.00
print(balance.is_negative()) # True
print(Money.MAX.checked_add(Money.from_minor(1)))  # None
```

## Roles

```python
from cayopay.domain.role import Permission, Role

Role.OWNER.has_permission(Permission.CONFIGURE_SETTINGS)  # True
Role.ADMIN.can_assign_role(Role.OWNER)                    # False
Role.parse("nobody")                                      # Role.UNDEFINED
```

## Wallets and balances

```python
from sqlalchemy import create_engine

from cayopay.domain.models import WalletLabel
from cayopay.domain.money import Money
from cayopay.infra.commerce import TransactionStore
from cayopay.infra.records import TransactionCreation, WalletCreation
from cayopay.infra.schema import create_schema
from cayopay.infra.stores import WalletStore

engine = create_engine("sqlite:///cayopay.db")
with engine.begin() as connection:
    create_schema(connection)
    wallets = WalletStore(connection)
    cash = wallets.create(WalletCreation(owner=None, label=WalletLabel.OUTSIDE_CASH,
                                         allow_overdraft=True))
    till = wallets.create(WalletCreation(owner=None, label=None, allow_overdraft=False))

    transactions = TransactionStore(connection)
    transactions.create(TransactionCreation(source=cash.id, destination=till.id,
                                            executor=None, amount=Money.from_major(20),
                                            description="top-up"))
    print(transactions.calculate_wallet_balance(till.id))  # 20.00
```

## Sessions

```python
from sqlalchemy import create_engine

from cayopay.application.services import SessionService
from cayopay.domain.ids import Id
from cayopay.infra.schema import create_schema

engine = create_engine("sqlite:///cayopay.db")
with engine.begin() as connection:
    create_schema(connection)

sessions = SessionService(engine, expiration_days=1)
session = sessions.create_session(Id.new())
sessions.get_session(session.token)  # the session, or None once it has expired
sessions.end_session(session.token)
```

## Error responses

```python
from cayopay.api.responses import error_response
from cayopay.application.errors import NotFoundError

status, body = error_response(NotFoundError())
status          # HTTPStatus.NOT_FOUND
body.to_dict()  # {"message": "Resource not found"}
```

The response for database, mail and missing-invitor errors is always `500`
with `"Internal server error"`. The cause is logged.

## Invitation mail

```python
from cayopay.domain.address import Email
from cayopay.infra.mailer import EmailService, EmailServiceConfig

password = "password"
mailer = EmailService(EmailServiceConfig(host="smtp.example.com", port=587,
                                         username="mailer@example.com",
                                         password=password,
                                         sender="CayoPay <mailer@example.com>"))
message = mailer.build_invite(Email("guest@example.com"), "token", "Ada Admin")
```

## What the package does not do

- It has no HTTP server and no routes. `cayopay.api.responses` only builds
  response bodies and status codes.
- It has no login, registration or invitation workflow, and no password
  hashing. The `users` table is created, but no store writes to it.
- It does not read configuration from the environment. It does not run
  migrations beyond `create_schema`, and it does not seed default users or
  wallets.
- It installs no command-line program.