import pytest

from cayopay.application.errors import (
    AppError,
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
from cayopay.domain.ids import Id


@pytest.mark.parametrize(
    ("error", "message"),
    [
        (NotFoundError(), "Entity not found"),
        (AuthenticationError(), "Authentication failed"),
        (AuthorizationError(), "Authorization failed"),
        (UserAlreadyExistsError(), "User already exists"),
        (InviteAlreadySentError(), "Invite already sent"),
        (InviteExpiredError(), "Invite expired"),
        (InternalServerError(), "Internal server error"),
    ],
)
def test_fixed_messages(error, message):
    assert str(error) == message
    assert error.message == message
    assert isinstance(error, AppError)


def test_invitor_missing_names_user():
    user_id = Id.new()
    error = InvitorMissingError(user_id)
    assert str(error) == f"Invitor with user id '{user_id}' does not exist"
    assert error.user_id == user_id


def test_database_error_wraps_cause():
    cause = RuntimeError("connection lost")
    error = DatabaseError(cause)
    assert error.cause is cause
    assert str(error) == f"Database error: {cause}"


def test_email_error_wraps_cause():
    cause = OSError("refused")
    error = EmailDeliveryError(cause)
    assert error.cause is cause
    assert str(error) == f"Email error: {cause}"


def test_validation_and_bad_request_keep_detail():
    validation = ValidationError("email: invalid")
    bad = BadRequestError("missing body")
    assert validation.detail == "email: invalid"
    assert str(validation) == "Validation error: email: invalid"
    assert bad.detail == "missing body"
    assert str(bad) == "Bad request: missing body"


def test_errors_can_be_caught_as_app_error():
    user_id = Id.new()
    errors = [
        InviteExpiredError(),
        ValidationError("email: invalid"),
        InvitorMissingError(user_id),
    ]
    caught = []
    for error in errors:
        try:
            raise error
        except AppError as exc:
            caught.append(str(exc))
    assert caught == [
        "Invite expired",
        "Validation error: email: invalid",
        f"Invitor with user id '{user_id}' does not exist",
    ]