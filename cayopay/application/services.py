"""Application services for sessions and guests."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import timedelta
from typing import Iterator, Optional

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from cayopay.application.errors import DatabaseError
from cayopay.domain.models import Guest, Session, UserId
from cayopay.infra.records import SessionCreation
from cayopay.infra.stores import GuestStore, SessionStore


class _Service:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def _transaction(self) -> Iterator[Connection]:
        try:
            with self._engine.begin() as connection:
                yield connection
        except SQLAlchemyError as exc:
            raise DatabaseError(exc) from exc


class SessionService(_Service):
    """Creates, looks up and ends login sessions."""

    def __init__(self, engine: Engine, expiration_days: int) -> None:
        super().__init__(engine)
        self.expiration_days = expiration_days

    def create_session(self, user_id: UserId) -> Session:
        """Start a session for the user with a fresh random token."""
        creation = SessionCreation(
            user_id=user_id,
            token=str(uuid.uuid4()),
            user_agent=None,
            ip_address=None,
            expires_in=timedelta(days=self.expiration_days),
        )
        with self._transaction() as connection:
            return SessionStore(connection).create(creation)

    def get_session(self, token: str) -> Optional[Session]:
        """The live session with this token; expired sessions are removed."""
        with self._transaction() as connection:
            store = SessionStore(connection)
            session = store.find_by_token(token)
            if session is not None and session.is_expired():
                store.delete_by_token(token)
                return None
            return session

    def end_session(self, token: str) -> None:
        with self._transaction() as connection:
            SessionStore(connection).delete_by_token(token)


class GuestService(_Service):
    """Read access to guests."""

    def get_all(self) -> list[Guest]:
        with self._transaction() as connection:
            return GuestStore(connection).list_all()