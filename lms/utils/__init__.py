from .passwords import hash_password, check_password
from .email import EmailSender

__all__ = ['hash_password', 'check_password', 'EmailSender']
