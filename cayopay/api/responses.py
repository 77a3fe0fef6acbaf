"""Response bodies of the HTTP API and the mapping of errors onto them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Optional

from cayopay.application.errors import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    DatabaseError,
    EmailDeliveryError,
    InviteAlreadySentError,
    InviteExpiredError,
    InvitorMissingError,
    NotFoundError,
    UserAlreadyExistsError,
    ValidationError,
)
from cayopay.domain.models import ActorId, Guest, GuestId, Invite, InviteId, InviteStatus, UserId
from cayopay.domain.role import Role

logger = logging.getLogger(__name__)

_INTERNAL = "Internal server error"


def _timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorResponse:
    message: str
    details: Optional[dict[str, list[str]]] = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.details is not None:
            body["details"] = {key: list(values) for key, values in self.details.items()}
        return body


_FIXED: tuple[tuple[type, HTTPStatus, str], ...] = (
    (NotFoundError, HTTPStatus.NOT_FOUND, "Resource not found"),
    (AuthenticationError, HTTPStatus.UNAUTHORIZED, "Authentication failed"),
    (AuthorizationError, HTTPStatus.FORBIDDEN, "Permission denied"),
    (UserAlreadyExistsError, HTTPStatus.CONFLICT, "User already exists"),
    (InviteAlreadySentError, HTTPStatus.CONFLICT, "Invite already sent"),
    (InviteExpiredError, HTTPStatus.BAD_REQUEST, "Invite expired"),
)


def error_response(error: AppError) -> tuple[HTTPStatus, ErrorResponse]:
    """The status and body sent to a client for an application error.

    Internal failures are logged and reported without detail.
    """
    if isinstance(error, DatabaseError):
        logger.error("Database error: %r", error.cause)
        return HTTPStatus.INTERNAL_SERVER_ERROR, ErrorResponse(_INTERNAL)
    if isinstance(error, InvitorMissingError):
        logger.error("Invitor missing: %r", error.user_id)
        return HTTPStatus.INTERNAL_SERVER_ERROR, ErrorResponse(_INTERNAL)
    if isinstance(error, EmailDeliveryError):
        logger.error("Email error: %r", error.cause)
        return HTTPStatus.INTERNAL_SERVER_ERROR, ErrorResponse(_INTERNAL)
    if isinstance(error, (ValidationError, BadRequestError)):
        return HTTPStatus.BAD_REQUEST, ErrorResponse(error.detail)
    for kind, status, message in _FIXED:
        if isinstance(error, kind):
            return status, ErrorResponse(message)
    return HTTPStatus.INTERNAL_SERVER_ERROR, ErrorResponse(_INTERNAL)


@dataclass(frozen=True)
class HealthResponse:
    status: str

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status}


def health_check() -> HealthResponse:
    """Report that the server is up."""
    return HealthResponse(status="ok")


@dataclass(frozen=True)
class GuestResponse:
    id: GuestId
    actor_id: ActorId
    email: Optional[str]
    verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_guest(cls, guest: Guest) -> "GuestResponse":
        return cls(
            id=guest.id,
            actor_id=guest.actor_id,
            email=None if guest.email is None else guest.email.expose(),
            verified=guest.verified,
            created_at=guest.created_at,
            updated_at=guest.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "id": str(self.id),
            "actor_id": str(self.actor_id),
            "email": self.email,
            "verified": self.verified,
            "created_at": _timestamp(self.created_at),
        }
        if self.updated_at is not None:
            body["updated_at"] = _timestamp(self.updated_at)
        return body


@dataclass(frozen=True)
class InviteResponse:
    id: InviteId
    invitor: UserId
    email: str
    role: Role
    status: InviteStatus
    expires_at: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteResponse":
        return cls(
            id=invite.id,
            invitor=invite.invitor,
            email=invite.email.expose(),
            role=invite.role,
            status=invite.status,
            expires_at=invite.created_at + invite.expires_in,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "id": str(self.id),
            "invitor": str(self.invitor),
            "email": self.email,
            "role": self.role.value,
            "status": self.status.value,
            "expires_at": _timestamp(self.expires_at),
            "created_at": _timestamp(self.created_at),
        }
        if self.updated_at is not None:
            body["updated_at"] = _timestamp(self.updated_at)
        return body