"""Sending invitation e-mails over SMTP."""

from __future__ import annotations

import contextlib
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, parseaddr
from enum import Enum

from cayopay.domain.address import Email

logger = logging.getLogger(__name__)

INVITE_SUBJECT = "You have been invited to CayoPay"
_TIMEOUT_SECONDS = 30.0


class EmailError(Exception):
    """A failure to build or send an e-mail."""


class AddressParseError(EmailError):
    """An address could not be parsed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to parse email address: {detail}")
        self.detail = detail


class EmailTransportError(EmailError):
    """The message could not be delivered to the SMTP server."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Failed to send email: {cause}")
        self.cause = cause


class TlsMode(Enum):
    """How the SMTP connection is secured."""

    WRAPPER = "wrapper"
    OPPORTUNISTIC = "opportunistic"


@dataclass(frozen=True)
class EmailServiceConfig:
    host: str
    port: int
    username: str
    password: str
    sender: str


def _parse_mailbox(text: str) -> str:
    name, addr = parseaddr(text)
    if not addr or addr.count("@") != 1:
        raise ValueError(f"invalid address {text!r}")
    local, domain = addr.split("@")
    if not local or not domain or any(ch.isspace() for ch in addr):
        raise ValueError(f"invalid address {text!r}")
    return formataddr((name, addr))


class EmailService:
    """Sends mail through one SMTP relay with the configured credentials."""

    def __init__(self, config: EmailServiceConfig) -> None:
        logger.info("Initializing EmailService with host: %s, port: %s", config.host, config.port)
        self._config = config
        if config.port == 587:
            logger.info("Using Opportunistic TLS (STARTTLS) for port 587")
            self.tls_mode = TlsMode.OPPORTUNISTIC
        else:
            if config.port == 465:
                logger.info("Using Implicit TLS (Wrapper) for port 465")
            else:
                logger.info("Using default TLS settings for port %s", config.port)
            self.tls_mode = TlsMode.WRAPPER

    @property
    def sender(self) -> str:
        return self._config.sender

    def build_invite(self, email: Email, token: str, inviter_name: str) -> EmailMessage:
        """Compose the invitation message; raise AddressParseError on bad addresses."""
        try:
            sender = _parse_mailbox(self._config.sender)
        except ValueError as exc:
            raise AddressParseError(f"From address error: {exc}") from exc
        try:
            recipient = _parse_mailbox(email.expose())
        except ValueError as exc:
            raise AddressParseError(f"To address error: {exc}") from exc

        message = EmailMessage()
        message["From"] = sender
        message["To"] = recipient
        message["Subject"] = INVITE_SUBJECT
        message.set_content(
            "<h1>CayoPay Invitation</h1><br><p>You have been invited to CayoPay by "
            f"<b>{inviter_name}</b>.</p><p>Your invite token is: <i>{token}</i></p>",
            subtype="html",
        )
        return message

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.tls_mode is TlsMode.WRAPPER:
            return smtplib.SMTP_SSL(
                self._config.host, self._config.port, context=context, timeout=_TIMEOUT_SECONDS
            )
        smtp = smtplib.SMTP(self._config.host, self._config.port, timeout=_TIMEOUT_SECONDS)
        smtp.ehlo()
        if smtp.has_extn("starttls"):
            smtp.starttls(context=context)
            smtp.ehlo()
        return smtp

    def send_invite(self, email: Email, token: str, inviter_name: str) -> None:
        """Build and deliver the invitation for ``email``."""
        message = self.build_invite(email, token, inviter_name)
        try:
            smtp = self._connect()
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailTransportError(exc) from exc
        try:
            smtp.login(self._config.username, self._config.password)
            smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailTransportError(exc) from exc
        finally:
            with contextlib.suppress(smtplib.SMTPException, OSError):
                smtp.quit()