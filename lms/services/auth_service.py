# lms/services/auth_service.py

from typing import Dict, Optional
import logging
import secrets
from sqlalchemy.orm import Session

from lms.exceptions import InvalidInputError, UserNotFoundError
from lms.sa.models import User
from lms.sa.repositories import UserRepository
from lms.utils import validators
from lms.utils.email import EmailSender
from lms.utils.passwords import check_password, hash_password

logger = logging.getLogger(__name__)

def generate_verification_code() -> str:
    """Random six digit code, never starting with 0"""
    return str(secrets.randbelow(900000) + 100000)

class AuthService:
    """Login and the forgot-password flow.

    Reset codes live on the service instance for the length of a console
    session; they are not persisted.
    """

    def __init__(self, session: Session, email_sender: Optional[EmailSender] = None):
        self.session = session
        self.users = UserRepository(session)
        self.email_sender = email_sender or EmailSender()
        self._pending_codes: Dict[str, str] = {}

    def authenticate(self, username: str, password: str) -> User:
        """Check a username/password pair.

        Raises:
            InvalidInputError: If the user is unknown or the password is wrong
        """
        user = self.users.get_by_username(username) if validators.is_not_blank(username) else None
        if not user or not check_password(password, user.password):
            logger.info(f"Failed login for '{username}'")
            raise InvalidInputError("Invalid username or password.")
        logger.info(f"User {user.id} logged in")
        return user

    def request_password_reset(self, username: str) -> bool:
        """E-mail a verification code to the user.

        Returns:
            True if the e-mail went out; the code is kept either way

        Raises:
            UserNotFoundError: If no user has this username
        """
        user = self.users.get_by_username(username) if validators.is_not_blank(username) else None
        if not user:
            raise UserNotFoundError(f"User '{username}' not found.")

        code = generate_verification_code()
        self._pending_codes[user.username] = code
        return self.email_sender.send_verification_code(user.email, code)

    def verify_code(self, username: str, code: str) -> bool:
        expected = self._pending_codes.get(username.strip())
        return expected is not None and secrets.compare_digest(expected, code.strip())

    def reset_password(self, username: str, code: str, new_password: str) -> None:
        """Store a new password once the verification code matches.

        Raises:
            InvalidInputError: If the code is wrong or the password too weak
        """
        if not self.verify_code(username, code):
            raise InvalidInputError("Verification failed. Incorrect code.")
        if not validators.is_valid_password(new_password):
            raise InvalidInputError(
                "Password must be at least 8 characters and contain a digit, "
                "a lower and upper case letter and one of @#$%^&+=!"
            )

        user = self.users.get_by_username(username)
        self.users.update_password(user.id, hash_password(new_password))
        del self._pending_codes[user.username]
        logger.info(f"Password reset for user {user.id}")
