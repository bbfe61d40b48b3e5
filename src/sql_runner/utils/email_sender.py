import smtplib
from email.message import EmailMessage
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from sql_runner.errors import NotificationError
from sql_runner.utils.logger import get_logger

logger = get_logger(__name__)


class EmailConfig(BaseSettings):
    """
    Configuration model for email settings, loaded from environment variables.
    Validates required fields and provides defaults where appropriate.
    """
    model_config = SettingsConfigDict(env_file='.env', env_ignore_empty=True, extra='ignore')

    smtp_server: Optional[str] = None
    smtp_port: int = 587
    sender_email: Optional[str] = None
    smtp_user: Optional[str] = None  # Optional if no authentication is needed
    smtp_password: Optional[str] = None  # Optional if no authentication is needed
    smtp_starttls: bool = True


def send_email(
    config: EmailConfig,
    subject: str,
    body: str,
    recipients: List[str],
) -> None:
    """
    Sends a plain text email with the specified subject, body and recipients.

    :param config: Email configuration instance.
    :param subject: The subject of the email.
    :param body: The plain text body of the email.
    :param recipients: List of recipient email addresses.
    :raises NotificationError: If required configuration is missing or sending fails.
    """
    if not config.smtp_server or not config.sender_email:
        raise NotificationError("SMTP_SERVER or SENDER_EMAIL not configured.")
    if not recipients:
        raise NotificationError("No recipients given for notification email.")

    msg = EmailMessage()
    msg["From"] = config.sender_email
    msg["To"] = ", ".join(recipients)
    msg["Subject"] = subject
    msg.set_content(body)

    try:
        with smtplib.SMTP(config.smtp_server, config.smtp_port) as server:
            if config.smtp_starttls:
                server.starttls()
            if config.smtp_user and config.smtp_password:
                server.login(config.smtp_user, config.smtp_password)
            server.send_message(msg)
        logger.info("Email sent successfully to: %s", ", ".join(recipients))
    except (smtplib.SMTPException, OSError) as e:
        logger.error("SMTP error occurred: %s", e)
        raise NotificationError(f"Failed to send email: {e}") from e


class SmtpSender:
    """Notification send capability backed by SMTP."""

    def __init__(self, config: Optional[EmailConfig] = None):
        self.config = config or EmailConfig()

    def send(self, recipient: str, subject: str, body: str) -> None:
        send_email(self.config, subject=subject, body=body, recipients=[recipient])


class LogSender:
    """Notification send capability that only logs the message."""

    def send(self, recipient: str, subject: str, body: str) -> None:
        logger.info("Notification for %s suppressed (%s):\n%s", recipient or "(none)", subject, body)
