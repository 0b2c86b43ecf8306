"""SMTP mail dispatch.

This module turns an :class:`OutboundMessage` into a MIME email and delivers
it with :mod:`smtplib`. Library errors are mapped to the dispatch error
hierarchy with actionable hints:

- MailAuthError: credentials rejected (Gmail app passwords included)
- MailConnectionError: server unreachable
- CollaboratorTimeout: no answer within the send timeout
- MailDispatchError: any other SMTP failure
"""

import asyncio
import logging
import smtplib
import socket
import ssl
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid
from typing import Optional

from src.common.errors import (
    CollaboratorTimeout,
    DispatchConfigError,
    MailAuthError,
    MailConnectionError,
    MailDispatchError,
)

from .config_loader import Config, SMTPSettings, get_default_config
from .types import DispatchResult, OutboundMessage

logger = logging.getLogger(__name__)

_GMAIL_APP_PASSWORD_HELP = (
    "Gmail accounts with 2-step verification need an app password:\n"
    "1. Google Account -> Security -> confirm 2-Step Verification is on\n"
    "2. Create an app password at https://myaccount.google.com/apppasswords\n"
    "3. Put the generated 16-character password in SMTP_PASS"
)

_LOGIN_HELP = (
    "Check SMTP_USER and SMTP_PASS. Gmail users should use an app password "
    "(https://myaccount.google.com/apppasswords) instead of the account password."
)


class SMTPMailer:
    """Delivers outbound messages through an SMTP server.

    Args:
        settings: SMTP connection settings. If None, read from the environment.
        config: Dispatch configuration. If None, uses the bundled defaults.

    Example:
        >>> mailer = SMTPMailer()
        >>> result = await mailer.send_async(message)
        >>> print(result.message_id)
    """

    def __init__(
        self,
        settings: Optional[SMTPSettings] = None,
        config: Optional[Config] = None,
    ):
        self.settings = settings if settings is not None else SMTPSettings()
        self.config: Config = config if config is not None else get_default_config()

        logger.info(
            f"SMTPMailer initialized: host={self.settings.host or 'missing'}, "
            f"port={self.settings.port}, secure={self.settings.secure}, "
            f"user={self.settings.user or 'missing'}"
        )

    @property
    def sender(self) -> str:
        """Formatted From address (display name + SMTP user)."""
        return formataddr((self.config.dispatch.sender_name, self.settings.user))

    def build_email(self, message: OutboundMessage) -> EmailMessage:
        """Build the MIME email for a message.

        Args:
            message: Structured outbound message.

        Returns:
            EmailMessage with text and HTML alternatives and all attachments.
        """
        domain = self.settings.user.rpartition("@")[2] or None

        email = EmailMessage()
        email["Subject"] = message.subject
        email["From"] = self.sender
        email["To"] = message.recipient
        email["Date"] = formatdate(localtime=True)
        email["Message-ID"] = make_msgid(domain=domain)

        email.set_content(message.text_body)
        email.add_alternative(message.html_body, subtype="html")

        for attachment in message.attachments:
            email.add_attachment(
                attachment.content,
                maintype=attachment.maintype,
                subtype=attachment.subtype,
                filename=attachment.filename,
            )

        return email

    def send(self, message: OutboundMessage) -> DispatchResult:
        """Send a message, blocking until the server accepts it.

        Args:
            message: Structured outbound message.

        Returns:
            DispatchResult with the Message-ID.

        Raises:
            DispatchConfigError: If SMTP settings are incomplete.
            MailAuthError: If the server rejects the credentials.
            MailConnectionError: If the server cannot be reached.
            CollaboratorTimeout: If the server does not answer in time.
            MailDispatchError: On any other SMTP failure.
        """
        missing = self.settings.missing_fields()
        if missing:
            raise DispatchConfigError(
                f"SMTP settings are incomplete: missing {', '.join(missing)}",
                help_text="\n".join(f"export {name}=your_value_here" for name in missing),
            )

        email = self.build_email(message)
        timeout_s = self.config.dispatch.timeout_s

        logger.info(
            f"Sending '{message.subject}' to {message.recipient} with "
            f"{len(message.attachments)} attachments "
            f"({round(message.attachment_bytes / 1024)}KB)"
        )

        try:
            if self.settings.secure:
                server = smtplib.SMTP_SSL(
                    self.settings.host,
                    self.settings.port,
                    timeout=timeout_s,
                    context=ssl.create_default_context(),
                )
            else:
                server = smtplib.SMTP(self.settings.host, self.settings.port, timeout=timeout_s)

            with server:
                if not self.settings.secure:
                    server.ehlo()
                    if server.has_extn("starttls"):
                        server.starttls(context=ssl.create_default_context())
                        server.ehlo()
                server.login(self.settings.user, self.settings.password)
                server.send_message(email)

        except TimeoutError as e:
            raise CollaboratorTimeout(
                f"SMTP server did not respond within {timeout_s}s"
            ) from e
        except smtplib.SMTPAuthenticationError as e:
            raise self._auth_error(e) from e
        except (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected, ConnectionError, socket.gaierror) as e:
            raise MailConnectionError(
                f"Could not connect to SMTP server {self.settings.host}:{self.settings.port}: {e}",
                help_text="Check SMTP_HOST and SMTP_PORT.",
            ) from e
        except (smtplib.SMTPException, OSError) as e:
            raise MailDispatchError(f"Email dispatch failed: {e}") from e

        message_id = email["Message-ID"]
        logger.info(f"Email sent to {message.recipient}: {message_id}")
        return DispatchResult(message_id=message_id, recipient=message.recipient)

    async def send_async(self, message: OutboundMessage) -> DispatchResult:
        """Send a message without blocking the event loop.

        Args:
            message: Structured outbound message.

        Returns:
            DispatchResult with the Message-ID.

        Raises:
            CollaboratorTimeout: If the whole send exceeds ``timeout_s``.
            MailDispatchError: See :meth:`send`.
        """
        timeout_s = self.config.dispatch.timeout_s
        try:
            return await asyncio.wait_for(asyncio.to_thread(self.send, message), timeout=timeout_s)
        except asyncio.TimeoutError as e:
            raise CollaboratorTimeout(f"Email dispatch timed out after {timeout_s}s") from e

    def _auth_error(self, error: smtplib.SMTPAuthenticationError) -> MailAuthError:
        """Map an authentication failure to a MailAuthError with a hint."""
        detail = error.smtp_error.decode("utf-8", "replace") if isinstance(error.smtp_error, bytes) else str(error.smtp_error)

        if "Application-specific password required" in detail:
            return MailAuthError(
                "Gmail app password required", help_text=_GMAIL_APP_PASSWORD_HELP
            )
        return MailAuthError(
            f"SMTP authentication failed: {detail.strip()}", help_text=_LOGIN_HELP
        )
