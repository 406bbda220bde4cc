"""SMTP invitation email sender"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from underneath.app.services.email_sender import EmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(EmailSender):
    """Sends invitation codes over SMTP; disabled unless EMAIL_ENABLED is set"""

    def __init__(self, config):
        self.smtp_host = config.SMTP_HOST
        self.smtp_port = config.SMTP_PORT
        self.smtp_user = config.SMTP_USER
        self.smtp_password = config.SMTP_PASSWORD
        self.smtp_from = config.SMTP_FROM
        self.smtp_tls = config.SMTP_TLS
        self.enabled = config.EMAIL_ENABLED
        self.frontend_url = config.FRONTEND_URL

    async def send_invitation_email(
        self,
        to_email: str,
        code: str,
        dom_name: str,
        message: Optional[str] = None,
    ) -> bool:
        if not self.enabled:
            logger.info(f"Email disabled. Would send invitation {code} to {to_email}")
            return False

        subject = f"{dom_name} invited you to Underneath"
        body = self._render_invitation(code, dom_name, message)

        try:
            await asyncio.to_thread(self._send, to_email, subject, body)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send invitation email to {to_email}: {e}")
            return False

        logger.info(f"Invitation email sent to {to_email}")
        return True

    def _render_invitation(self, code: str, dom_name: str, message: Optional[str]) -> str:
        lines = [
            f"{dom_name} has invited you to connect on Underneath.",
            "",
            f"Your invitation code: {code}",
            f"Redeem it at {self.frontend_url}/invite?code={code}",
        ]
        if message:
            lines += ["", "Message:", message]
        return "\n".join(lines)

    def _send(self, to_email: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.smtp_from
        msg["To"] = to_email

        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=10) as server:
            if self.smtp_tls:
                server.starttls()
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            server.sendmail(self.smtp_from, [to_email], msg.as_string())
