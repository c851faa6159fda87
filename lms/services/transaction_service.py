# lms/services/transaction_service.py

from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from lms.config import settings
from lms.exceptions import (
    BookNotFoundError, InvalidInputError, NoAvailableCopiesError,
    TransactionNotFoundError, UserNotFoundError
)
from lms.sa.models import Transaction, BorrowingHistory
from lms.sa.repositories import BookRepository, TransactionRepository, UserRepository

class TransactionService:
    """Borrowing and returning books.

    Every precondition is checked here before the repository performs the
    paired write (transaction row plus the book's available copies) in a
    single database transaction.
    """

    def __init__(self, session: Session, max_active_loans: Optional[int] = None):
        self.session = session
        self.transactions = TransactionRepository(session)
        self.books = BookRepository(session)
        self.users = UserRepository(session)
        self.max_active_loans = settings.max_active_loans if max_active_loans is None else max_active_loans

    def borrow_book(
        self,
        user_id: int,
        book_id: int,
        borrow_date: Optional[date] = None,
        return_date: Optional[date] = None
    ) -> Transaction:
        """Lend one copy of a book to a member.

        Args:
            user_id: The borrowing member
            book_id: The book to lend
            borrow_date: Date of the loan (defaults to today, may not be in the future)
            return_date: Optional expected return date, kept as the loan's due date

        Returns:
            The new BORROWED Transaction

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidInputError: If the user is an administrator, a date is
                invalid, the member already has this book or has reached the
                loan limit
            BookNotFoundError: If the book does not exist
            NoAvailableCopiesError: If no copy is left
        """
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id {user_id} not found.")
        if user.is_admin:
            raise InvalidInputError("Administrators cannot borrow books.")

        book = self.books.get_by_id(book_id)
        if not book:
            raise BookNotFoundError(f"Book with id {book_id} not found.")
        if book.available_copies < 1:
            raise NoAvailableCopiesError("Currently there are no copies available for this book.")

        borrow_date = borrow_date or date.today()
        if borrow_date > date.today():
            raise InvalidInputError("Borrow date cannot be in the future.")
        if return_date is not None and return_date < borrow_date:
            raise InvalidInputError("Return date cannot be before the borrow date.")

        if self.transactions.get_active_transaction_id(user_id, book_id) is not None:
            raise InvalidInputError("You have already borrowed a copy of this book.")
        if self.transactions.count_active_by_user(user_id) >= self.max_active_loans:
            raise InvalidInputError(
                f"Borrowing limit reached: return a book before borrowing more "
                f"than {self.max_active_loans}."
            )

        return self.transactions.create_borrow(user_id, book_id, borrow_date, due_date=return_date)

    def return_book(self, transaction_id: int, return_date: Optional[date] = None) -> Transaction:
        """Close a loan and put the copy back on the shelf.

        Args:
            transaction_id: The loan to close
            return_date: Date the book came back (defaults to today)

        Returns:
            The RETURNED Transaction

        Raises:
            TransactionNotFoundError: If the transaction does not exist
            InvalidInputError: If it was already returned or the date precedes the borrow date
        """
        transaction = self.get_transaction(transaction_id)
        if not transaction.is_active:
            raise InvalidInputError("Book has already been returned.")

        return_date = return_date or date.today()
        if return_date < transaction.borrow_date:
            raise InvalidInputError("Return date cannot be before the borrow date.")

        return self.transactions.mark_returned(transaction_id, return_date)

    def return_book_for_user(self, user_id: int, book_id: int, return_date: Optional[date] = None) -> Transaction:
        """Return the member's open loan of a book"""
        transaction_id = self.transactions.get_active_transaction_id(user_id, book_id)
        if transaction_id is None:
            raise TransactionNotFoundError(f"User {user_id} has not borrowed book {book_id}.")
        return self.return_book(transaction_id, return_date)

    def get_transaction(self, transaction_id: int) -> Transaction:
        transaction = self.transactions.get_by_id(transaction_id)
        if not transaction:
            raise TransactionNotFoundError(f"Transaction with id {transaction_id} not found.")
        return transaction

    def get_borrowing_history(self, user_id: int) -> List[BorrowingHistory]:
        """A member's loans, oldest first.

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidInputError: If the user is an administrator
        """
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id {user_id} not found.")
        if user.is_admin:
            raise InvalidInputError("Administrators have no borrowing history.")
        return self.transactions.get_borrowing_history(user_id)

    def get_transaction_id(self, user_id: int, book_id: int) -> int:
        transaction_id = self.transactions.get_transaction_id(user_id, book_id)
        if transaction_id is None:
            raise TransactionNotFoundError(f"No transaction for user {user_id} and book {book_id}.")
        return transaction_id

    def is_book_borrowed_by_user(self, user_id: int, book_id: int) -> bool:
        return self.transactions.get_active_transaction_id(user_id, book_id) is not None

    def count_active_loans(self, user_id: int) -> int:
        return self.transactions.count_active_by_user(user_id)
