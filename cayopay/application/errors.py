"""Errors raised by the application services."""

from __future__ import annotations

from typing import Optional

from cayopay.domain.models import UserId


class AppError(Exception):
    """Base class of every application error."""

    default_message = "Application error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(self.default_message if message is None else message)

    @property
    def message(self) -> str:
        return str(self)


class DatabaseError(AppError):
    """The database could not carry out a query."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Database error: {cause}")
        self.cause = cause


class NotFoundError(AppError):
    default_message = "Entity not found"


class AuthenticationError(AppError):
    default_message = "Authentication failed"


class AuthorizationError(AppError):
    default_message = "Authorization failed"


class UserAlreadyExistsError(AppError):
    default_message = "User already exists"


class InviteAlreadySentError(AppError):
    default_message = "Invite already sent"


class InviteExpiredError(AppError):
    default_message = "Invite expired"


class InvitorMissingError(AppError):
    """The user who sent an invite no longer exists."""

    def __init__(self, user_id: UserId) -> None:
        super().__init__(f"Invitor with user id '{user_id}' does not exist")
        self.user_id = user_id


class EmailDeliveryError(AppError):
    """An e-mail could not be built or sent."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Email error: {cause}")
        self.cause = cause


class ValidationError(AppError):
    """Input failed validation; ``detail`` holds the reason."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Validation error: {detail}")
        self.detail = detail


class BadRequestError(AppError):
    """A request could not be understood; ``detail`` holds the reason."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Bad request: {detail}")
        self.detail = detail


class InternalServerError(AppError):
    default_message = "Internal server error"