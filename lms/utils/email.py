# lms/utils/email.py
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from lms.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class EmailSender:
    """Sends password reset verification codes over SMTP.

    Delivery is best effort: failures are logged and reported through the
    return value, never raised to the caller.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    def build_message(self, recipient_email: str, verification_code: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.smtp_from_email
        message["To"] = recipient_email
        message["Subject"] = "Email Verification Code"
        message.set_content(f"Your verification code is: {verification_code}")
        return message

    def send_verification_code(self, recipient_email: str, verification_code: str) -> bool:
        message = self.build_message(recipient_email, verification_code)
        try:
            with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port, timeout=self.config.smtp_timeout) as smtp:
                smtp.starttls()
                if self.config.smtp_username and self.config.smtp_password:
                    smtp.login(self.config.smtp_username, self.config.smtp_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Could not send verification code to {recipient_email}: {str(e)}")
            return False
        logger.info(f"Verification code sent to {recipient_email}")
        return True
