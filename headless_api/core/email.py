"""
Outbound email for the admin side (password reset).

Backends:
    - console: logs the message instead of sending it (development default)
    - smtp: delivers through an SMTP relay with aiosmtplib

The backend is picked from settings.email_backend when the service is built.
"""

import logging
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from headless_api.config.settings import settings

logger = logging.getLogger(__name__)


class EmailBackend(ABC):
    """Abstract base class for email backends."""

    @abstractmethod
    async def send_email(self, to: str, subject: str, body: str, from_address: str, from_name: str) -> bool:
        """
        Send a plain-text email.

        Returns:
            bool: True if sent successfully, False otherwise
        """


class ConsoleEmailBackend(EmailBackend):
    """Logs emails instead of sending them. Useful for local development."""

    async def send_email(self, to: str, subject: str, body: str, from_address: str, from_name: str) -> bool:
        logger.info("EMAIL (Console Backend)")
        logger.info(f"To: {to}")
        logger.info(f"From: {from_name} <{from_address}>")
        logger.info(f"Subject: {subject}")
        logger.info(body)
        return True


class SMTPEmailBackend(EmailBackend):
    """Sends emails via an SMTP server, optionally upgrading with STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str],
        password: Optional[str],
        use_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls

    async def send_email(self, to: str, subject: str, body: str, from_address: str, from_name: str) -> bool:
        message = EmailMessage()
        message["From"] = f"{from_name} <{from_address}>"
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=self.use_tls,
            )
        except aiosmtplib.SMTPException as e:
            logger.error(f"Failed to send email via SMTP to {to}: {e}")
            return False

        logger.info(f"Email sent successfully via SMTP to {to}")
        return True


class EmailService:
    def __init__(self, backend: Optional[EmailBackend] = None):
        self.backend = backend or self._create_backend()

    @staticmethod
    def _create_backend() -> EmailBackend:
        backend_type = settings.email_backend.lower()
        if backend_type == "smtp":
            if not settings.smtp_host:
                logger.warning("SMTP backend selected but smtp_host not configured. Falling back to console.")
                return ConsoleEmailBackend()
            return SMTPEmailBackend(
                host=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_username,
                password=settings.smtp_password,
                use_tls=settings.smtp_use_tls,
            )
        return ConsoleEmailBackend()

    async def send_email(self, to: str, subject: str, body: str) -> bool:
        return await self.backend.send_email(
            to=to,
            subject=subject,
            body=body,
            from_address=settings.email_from_address,
            from_name=settings.email_from_name,
        )

    async def send_new_password_email(self, to: str, new_password: str) -> bool:
        body = f"Hello!\n\nYour new password is: {new_password}\n"
        return await self.send_email(to=to, subject="Forgot Password", body=body)


def get_email_service() -> EmailService:
    return EmailService()
