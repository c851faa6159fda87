# lms/sa/repositories/transaction.py
from datetime import date
from typing import List, Optional
import logging
from sqlalchemy import func, update
from sqlalchemy.orm import Session
from lms.exceptions import InvalidInputError, IntegrityViolationError, NoAvailableCopiesError
from lms.sa.models import Book, Transaction, Status, BorrowingHistory
from .book import BookRepository

logger = logging.getLogger(__name__)

class TransactionRepository:
    """Repository for borrow/return transactions.

    ``create_borrow`` and ``mark_returned`` each write two rows (the
    transaction and the book's available copies) and commit them together or
    not at all.
    """

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session
        self.books = BookRepository(session)

    def create_borrow(
        self,
        user_id: int,
        book_id: int,
        borrow_date: date,
        due_date: Optional[date] = None
    ) -> Transaction:
        """Record a loan and take one copy of the book off the shelf.

        Args:
            user_id: The borrowing user
            book_id: The borrowed book
            borrow_date: Date of the loan
            due_date: Optional expected return date

        Returns:
            The created Transaction with status BORROWED

        Raises:
            NoAvailableCopiesError: If no copy is left (nothing is written)
        """
        try:
            if not self.books.decrement_available(book_id):
                raise NoAvailableCopiesError("Currently there are no copies available for this book.")

            transaction = Transaction(
                user_id=user_id,
                book_id=book_id,
                borrow_date=borrow_date,
                due_date=due_date,
                status=Status.BORROWED
            )
            self.session.add(transaction)
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.warning(f"Borrow of book {book_id} by user {user_id} rolled back")
            raise

        logger.info(f"User {user_id} borrowed book {book_id} (transaction {transaction.id})")
        return transaction

    def mark_returned(self, transaction_id: int, return_date: date) -> Transaction:
        """Close a loan and put the copy back on the shelf.

        Args:
            transaction_id: The loan to close
            return_date: Date the book came back

        Returns:
            The updated Transaction with status RETURNED

        Raises:
            InvalidInputError: If the transaction is not currently BORROWED
            IntegrityViolationError: If the book's copies are already all on the shelf
        """
        try:
            result = self.session.execute(
                update(Transaction)
                .where(Transaction.id == transaction_id, Transaction.status == Status.BORROWED)
                .values(status=Status.RETURNED, return_date=return_date)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise InvalidInputError("Book has already been returned.")

            book_id = (
                self.session.query(Transaction.book_id)
                .filter(Transaction.id == transaction_id)
                .scalar()
            )
            if not self.books.increment_available(book_id):
                raise IntegrityViolationError(
                    f"Book {book_id} already has all of its copies available."
                )
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.warning(f"Return of transaction {transaction_id} rolled back")
            raise

        logger.info(f"Transaction {transaction_id} returned on {return_date.isoformat()}")
        return self.get_by_id(transaction_id)

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self.session.query(Transaction).filter(Transaction.id == transaction_id).one_or_none()

    def count_by_book_id(self, book_id: int) -> int:
        """Count every transaction, open or returned, that references a book"""
        return self.session.query(Transaction).filter(Transaction.book_id == book_id).count()

    def get_active(self) -> List[Transaction]:
        """Get every transaction still in BORROWED status"""
        return (
            self.session.query(Transaction)
            .filter(Transaction.status == Status.BORROWED)
            .order_by(Transaction.id)
            .all()
        )

    def get_by_user_id(self, user_id: int) -> List[Transaction]:
        return (
            self.session.query(Transaction)
            .filter(Transaction.user_id == user_id)
            .order_by(Transaction.id)
            .all()
        )

    def count_active_by_user(self, user_id: int) -> int:
        return (
            self.session.query(func.count(Transaction.id))
            .filter(Transaction.user_id == user_id, Transaction.status == Status.BORROWED)
            .scalar()
        )

    def get_borrowing_history(self, user_id: int) -> List[BorrowingHistory]:
        """Get a user's transactions joined with the borrowed book's title.

        Args:
            user_id: The ID of the user

        Returns:
            List of BorrowingHistory rows, oldest first
        """
        rows = (
            self.session.query(
                Transaction.id,
                Transaction.user_id,
                Transaction.book_id,
                Book.title,
                Transaction.borrow_date,
                Transaction.return_date,
                Transaction.status
            )
            .join(Book, Book.id == Transaction.book_id)
            .filter(Transaction.user_id == user_id)
            .order_by(Transaction.borrow_date, Transaction.id)
            .all()
        )
        return [BorrowingHistory(*row) for row in rows]

    def get_transaction_id(self, user_id: int, book_id: int) -> Optional[int]:
        """Get the most recent transaction of a user for a book, whatever its status"""
        return (
            self.session.query(Transaction.id)
            .filter(Transaction.user_id == user_id, Transaction.book_id == book_id)
            .order_by(Transaction.id.desc())
            .limit(1)
            .scalar()
        )

    def get_active_transaction_id(self, user_id: int, book_id: int) -> Optional[int]:
        """Get the open (BORROWED) transaction of a user for a book"""
        return (
            self.session.query(Transaction.id)
            .filter(
                Transaction.user_id == user_id,
                Transaction.book_id == book_id,
                Transaction.status == Status.BORROWED
            )
            .limit(1)
            .scalar()
        )

    def delete_by_user_id(self, user_id: int, commit: bool = True) -> int:
        """Delete all transactions of a user.

        Args:
            user_id: The ID of the user
            commit: Commit immediately (False when part of a larger unit of work)

        Returns:
            Number of deleted transactions
        """
        deleted = (
            self.session.query(Transaction)
            .filter(Transaction.user_id == user_id)
            .delete(synchronize_session=False)
        )
        if commit:
            self.session.commit()
        return deleted
