"""Email service using SendGrid."""

import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from todo_api.config import Settings, settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending transactional emails via SendGrid.

    Delivery is best-effort: every send returns a bool and never raises.
    """

    def __init__(self, api_key: str, from_address: str, from_name: str) -> None:
        self._api_key = api_key
        self._from_address = from_address
        self._from_name = from_name

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "EmailService":
        return cls(
            api_key=config.sendgrid_api_key,
            from_address=config.email_from_address,
            from_name=config.email_from_name,
        )

    def _send_email(self, to_email: str, subject: str, html_content: str) -> bool:
        """Send email via SendGrid. Returns True if successful."""
        if not self._api_key:
            logger.warning("SendGrid API key not configured, skipping email send")
            return False

        message = Mail(
            from_email=(self._from_address, self._from_name),
            to_emails=to_email,
            subject=subject,
            html_content=html_content,
        )

        try:
            sg = SendGridAPIClient(self._api_key)
            response = sg.send(message)
            logger.info(f"Email sent to {to_email}, status: {response.status_code}")
            return response.status_code in (200, 201, 202)
        except Exception:
            logger.exception(f"Failed to send email to {to_email}")
            return False

    def send_password_reset_email(self, email: str, reset_url: str, expires_hours: int = 1) -> bool:
        """Send password reset link."""
        html = f"""
        <h2>Reset Your Password</h2>
        <p>Click the link below to reset your password:</p>
        <p><a href="{reset_url}">{reset_url}</a></p>
        <p>This link expires in {expires_hours} hour{"s" if expires_hours != 1 else ""}.</p>
        <p>If you didn't request this, you can ignore this email.</p>
        """
        return self._send_email(email, "Reset Your Password - Todo App", html)
