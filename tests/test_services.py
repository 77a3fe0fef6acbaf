import uuid
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from cayopay.application.errors import DatabaseError
from cayopay.application.services import GuestService, SessionService
from cayopay.domain.address import Email
from cayopay.domain.ids import Id
from cayopay.infra.records import GuestCreation
from cayopay.infra.schema import create_schema
from cayopay.infra.stores import ActorStore, GuestStore, SessionStore


def _engine():
    return create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def engine():
    eng = _engine()
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def bare_engine():
    eng = _engine()
    yield eng
    eng.dispose()


def test_create_session_sets_user_and_expiry(engine):
    service = SessionService(engine, 3)
    user_id = Id.new()
    session = service.create_session(user_id)
    assert session.user_id == user_id
    assert session.expires_in == timedelta(days=3)
    assert uuid.UUID(session.token).version == 4
    assert session.user_agent is None
    assert session.ip_address is None


def test_tokens_are_unique(engine):
    service = SessionService(engine, 1)
    user_id = Id.new()
    first = service.create_session(user_id)
    second = service.create_session(user_id)
    assert first.token != second.token
    assert first.id != second.id


def test_get_session_round_trip(engine):
    service = SessionService(engine, 1)
    created = service.create_session(Id.new())
    found = service.get_session(created.token)
    assert found is not None
    assert found.id == created.id
    assert found.user_id == created.user_id


def test_get_unknown_session_is_none(engine):
    service = SessionService(engine, 1)
    assert service.get_session("token") is None


def test_expired_session_is_removed(engine):
    service = SessionService(engine, -1)
    created = service.create_session(Id.new())
    assert service.get_session(created.token) is None
    with engine.begin() as connection:
        assert SessionStore(connection).find_by_token(created.token) is None


def test_end_session_deletes_it(engine):
    service = SessionService(engine, 1)
    created = service.create_session(Id.new())
    service.end_session(created.token)
    assert service.get_session(created.token) is None


def test_guest_service_lists_guests(engine):
    with engine.begin() as connection:
        actor_id = ActorStore(connection).create()
        GuestStore(connection).create(
            GuestCreation(actor_id=actor_id, email=Email("guest@example.com"), verified=True)
        )
    guests = GuestService(engine).get_all()
    assert len(guests) == 1
    assert guests[0].actor_id == actor_id
    assert guests[0].email.expose() == "guest@example.com"
    assert guests[0].verified is True


def test_guest_service_empty(engine):
    assert GuestService(engine).get_all() == []


def test_database_failure_raises_database_error(bare_engine):
    with pytest.raises(DatabaseError) as excinfo:
        GuestService(bare_engine).get_all()
    assert isinstance(excinfo.value.cause, SQLAlchemyError)


def test_session_database_failure(bare_engine):
    with pytest.raises(DatabaseError):
        SessionService(bare_engine, 1).create_session(Id.new())