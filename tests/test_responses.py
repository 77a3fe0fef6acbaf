from datetime import datetime, timedelta, timezone
from http import HTTPStatus

import pytest

from cayopay.api.responses import (
    ErrorResponse,
    GuestResponse,
    HealthResponse,
    InviteResponse,
    error_response,
    health_check,
)
from cayopay.application.errors import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    DatabaseError,
    EmailDeliveryError,
    InternalServerError,
    InviteAlreadySentError,
    InviteExpiredError,
    InvitorMissingError,
    NotFoundError,
    UserAlreadyExistsError,
    ValidationError,
)
from cayopay.domain.address import Email
from cayopay.domain.ids import Id
from cayopay.domain.models import Guest, Invite, InviteStatus
from cayopay.domain.role import Role

CREATED = datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)


def _parse(text):
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


@pytest.mark.parametrize(
    ("error", "status", "message"),
    [
        (DatabaseError(RuntimeError("down")), HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error"),
        (NotFoundError(), HTTPStatus.NOT_FOUND, "Resource not found"),
        (AuthenticationError(), HTTPStatus.UNAUTHORIZED, "Authentication failed"),
        (AuthorizationError(), HTTPStatus.FORBIDDEN, "Permission denied"),
        (UserAlreadyExistsError(), HTTPStatus.CONFLICT, "User already exists"),
        (InviteAlreadySentError(), HTTPStatus.CONFLICT, "Invite already sent"),
        (InvitorMissingError(Id.new()), HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error"),
        (InviteExpiredError(), HTTPStatus.BAD_REQUEST, "Invite expired"),
        (EmailDeliveryError(OSError("refused")), HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error"),
        (InternalServerError(), HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error"),
    ],
)
def test_error_mapping(error, status, message):
    got_status, body = error_response(error)
    assert got_status == status
    assert body.message == message
    assert body.to_dict() == {"message": message}


def test_validation_and_bad_request_pass_detail():
    status, body = error_response(ValidationError("email: invalid"))
    assert status == HTTPStatus.BAD_REQUEST
    assert body.message == "email: invalid"
    status, body = error_response(BadRequestError("missing body"))
    assert status == HTTPStatus.BAD_REQUEST
    assert body.message == "missing body"


def test_error_response_includes_details_when_given():
    body = ErrorResponse("bad", {"email": ["invalid"]})
    assert body.to_dict() == {"message": "bad", "details": {"email": ["invalid"]}}


def test_health_check():
    response = health_check()
    assert response == HealthResponse(status="ok")
    assert response.to_dict() == {"status": "ok"}


def _guest(email, updated_at=None):
    return Guest(
        id=Id.new(),
        actor_id=Id.new(),
        email=email,
        verified=False,
        created_at=CREATED,
        updated_at=updated_at,
    )


def test_guest_response_fields():
    guest = _guest(Email("guest@example.com"))
    body = GuestResponse.from_guest(guest).to_dict()
    assert body["id"] == str(guest.id)
    assert body["actor_id"] == str(guest.actor_id)
    assert body["email"] == "guest@example.com"
    assert body["verified"] is False
    assert _parse(body["created_at"]) == CREATED
    assert "updated_at" not in body


def test_guest_response_without_email_and_with_update():
    updated = CREATED + timedelta(hours=1)
    body = GuestResponse.from_guest(_guest(None, updated)).to_dict()
    assert body["email"] is None
    assert _parse(body["updated_at"]) == updated


def _invite(updated_at=None):
    return Invite(
        id=Id.new(),
        invitor=Id.new(),
        email=Email("friend@example.com"),
        token="token",
        role=Role.ADMIN,
        status=InviteStatus.PENDING,
        expires_in=timedelta(days=7),
        created_at=CREATED,
        updated_at=updated_at,
    )


def test_invite_response_computes_expiry():
    invite = _invite()
    response = InviteResponse.from_invite(invite)
    assert response.expires_at == invite.created_at + invite.expires_in
    body = response.to_dict()
    assert body["id"] == str(invite.id)
    assert body["invitor"] == str(invite.invitor)
    assert body["email"] == "friend@example.com"
    assert body["role"] == "admin"
    assert body["status"] == "pending"
    assert _parse(body["expires_at"]) == response.expires_at
    assert _parse(body["created_at"]) == CREATED
    assert "updated_at" not in body
    assert "token" not in body


def test_invite_response_with_update():
    updated = CREATED + timedelta(minutes=5)
    body = InviteResponse.from_invite(_invite(updated)).to_dict()
    assert _parse(body["updated_at"]) == updated