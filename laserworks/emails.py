"""Confirmation e-mail delivery."""
import logging
import smtplib
from email.mime.text import MIMEText

from .auth import EmailTokenCodec
from .config import Settings

logger = logging.getLogger(__name__)


class ConfirmationMailer:
    """Sends the link a new user follows to verify their e-mail address.

    With ``mail_enabled`` off the link is only logged, which is what local
    development and the test suite rely on.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.tokens = EmailTokenCodec(settings)

    def confirmation_url(self, username: str) -> str:
        return self.settings.verification_url.format(token=self.tokens.encode(username))

    def send_confirmation(self, username: str, to_email: str) -> bool:
        url = self.confirmation_url(username)
        if not self.settings.mail_enabled:
            logger.info("Confirmation link for %s <%s>: %s", username, to_email, url)
            return True

        msg = MIMEText(f'Please click this link to confirm your email: <a href="{url}">{url}</a>', "html")
        msg["Subject"] = "Confirmation Email"
        msg["From"] = self.settings.mail_from
        msg["To"] = to_email
        try:
            with smtplib.SMTP_SSL(self.settings.smtp_host, self.settings.smtp_port) as server:
                server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send confirmation email to %s: %s", to_email, exc)
            return False
        logger.info("Confirmation email sent to %s", to_email)
        return True
