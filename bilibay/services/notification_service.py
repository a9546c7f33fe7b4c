"""
Notification Service.

Sends account emails (verification, password reset) over SMTP.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from bilibay.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Handles outgoing account emails.

    When SMTP credentials are not configured the message is only logged,
    which is what local development and tests rely on.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def send_verification_email(self, email: str, token: str) -> bool:
        link = f"{self.settings.FRONTEND_URL}/verify-email/{token}"
        body = (
            "Welcome to BiliBay!\n\n"
            f"Confirm your email address by opening the link below:\n{link}\n"
        )
        return await self.send_email(email, "Verify your BiliBay account", body, link=link)

    async def send_password_reset_email(self, email: str, token: str) -> bool:
        link = f"{self.settings.FRONTEND_URL}/reset-password?token={token}"
        minutes = self.settings.RESET_TOKEN_EXPIRE_MINUTES
        body = (
            "We received a request to reset your BiliBay password.\n\n"
            f"Open the link below within {minutes} minutes to choose a new one:\n{link}\n\n"
            "If you did not ask for this, you can ignore this email."
        )
        return await self.send_email(email, "Reset your BiliBay password", body, link=link)

    async def send_email(self, to_email: str, subject: str, body: str, link: str | None = None) -> bool:
        """Send a plain-text email. Returns False when it was not delivered."""
        if not self.settings.SMTP_USERNAME:
            logger.warning(f"Email delivery not configured, skipping '{subject}' to {to_email} (link: {link})")
            return False

        msg = MIMEMultipart()
        msg["From"] = self.settings.EMAIL_FROM
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.attach(MIMEText(body, "plain"))

        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{subject}' to {to_email}: {e}")
            return False

        logger.info(f"Email '{subject}' sent to {to_email}")
        return True

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.settings.SMTP_SERVER, self.settings.SMTP_PORT) as server:
            server.starttls()
            server.login(self.settings.SMTP_USERNAME or "", self.settings.SMTP_PASSWORD or "")
            server.send_message(msg)
