from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session

from lms.sa.database import Database
from lms.services import AddressService, AuthService, BookService, TransactionService, UserService
from lms.utils.email import EmailSender

@dataclass
class LibraryApp:
    """Services shared by every menu of one console session"""
    session: Session
    books: BookService
    users: UserService
    addresses: AddressService
    transactions: TransactionService
    auth: AuthService

    @classmethod
    def from_session(cls, session: Session, email_sender: Optional[EmailSender] = None) -> 'LibraryApp':
        return cls(
            session=session,
            books=BookService(session),
            users=UserService(session),
            addresses=AddressService(session),
            transactions=TransactionService(session),
            auth=AuthService(session, email_sender)
        )

    @classmethod
    def from_database(cls, db: Database, email_sender: Optional[EmailSender] = None) -> 'LibraryApp':
        return cls.from_session(db.session, email_sender)
