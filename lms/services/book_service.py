# lms/services/book_service.py

from typing import List
from sqlalchemy.orm import Session

from lms.exceptions import (
    BookNotFoundError, InvalidInputError, IntegrityViolationError, OutstandingLoansError,
    UserNotFoundError
)
from lms.schemas.book import (
    BookCreate, BookUpdate, BookFieldUpdate,
    BookTitleUpdate, BookAuthorUpdate, BookGenreUpdate, BookIsbnUpdate, BookTotalCopiesUpdate
)
from lms.sa.models import Book
from lms.sa.repositories import BookRepository, TransactionRepository, UserRepository

class BookService:
    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepository(session)
        self.transactions = TransactionRepository(session)
        self.users = UserRepository(session)

    def add_book(self, book: BookCreate) -> Book:
        """Add a validated book to the catalogue"""
        return self.books.create_book(
            title=book.title,
            author=book.author,
            genre=book.genre,
            isbn=book.isbn,
            total_copies=book.total_copies,
            available_copies=book.available_copies
        )

    def get_book(self, book_id: int) -> Book:
        book = self.books.get_by_id(book_id)
        if not book:
            raise BookNotFoundError(f"Book with id {book_id} not found.")
        return book

    def get_all_books(self) -> List[Book]:
        return self.books.get_all()

    def get_available_books(self) -> List[Book]:
        return self.books.get_available()

    def get_all_borrowed_books(self) -> List[Book]:
        return self.books.get_all_borrowed()

    def get_books_by_genre(self, genre: str) -> List[Book]:
        return self.books.get_by_genre(self._require(genre, "Genre"))

    def get_book_by_title(self, title: str) -> Book:
        book = self.books.get_by_title(self._require(title, "Title"))
        if not book:
            raise BookNotFoundError(f"No book titled '{title.strip()}'.")
        return book

    def get_books_by_author(self, author: str) -> List[Book]:
        return self.books.get_by_author(self._require(author, "Author"))

    def search_books(self, keyword: str) -> List[Book]:
        return self.books.search(self._require(keyword, "Keyword"))

    def get_borrowed_books_by_user(self, user_id: int) -> List[Book]:
        """Books a member currently has on loan.

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidInputError: If the user is an administrator
        """
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id {user_id} not found.")
        if user.is_admin:
            raise InvalidInputError("Administrators do not borrow books.")
        return self.books.get_borrowed_by_user(user_id)

    def update_book(self, book_id: int, update: BookUpdate) -> Book:
        """Replace a book's details.

        Raises:
            BookNotFoundError: If the book does not exist
            OutstandingLoansError: If the new total is below the copies on loan
        """
        book = self.get_book(book_id)
        self._check_total_copies(book, update.total_copies)
        return self.books.update_book(
            book_id,
            title=update.title,
            author=update.author,
            genre=update.genre,
            isbn=update.isbn,
            total_copies=update.total_copies
        )

    def update_book_field(self, book_id: int, update: BookFieldUpdate) -> Book:
        """Apply a single-field update to a book"""
        book = self.get_book(book_id)

        if isinstance(update, BookTitleUpdate):
            return self.books.update_book(book_id, title=update.value)
        elif isinstance(update, BookAuthorUpdate):
            return self.books.update_book(book_id, author=update.value)
        elif isinstance(update, BookGenreUpdate):
            return self.books.update_book(book_id, genre=update.value)
        elif isinstance(update, BookIsbnUpdate):
            return self.books.update_book(book_id, isbn=update.value)
        elif isinstance(update, BookTotalCopiesUpdate):
            self._check_total_copies(book, update.value)
            return self.books.update_book(book_id, total_copies=update.value)

        raise InvalidInputError(f"Unsupported book update: {update!r}")

    def delete_book(self, book_id: int) -> None:
        """Remove a book from the catalogue.

        Raises:
            BookNotFoundError: If the book does not exist
            OutstandingLoansError: If any copy is still on loan
            IntegrityViolationError: If members have borrowed the book before
        """
        book = self.get_book(book_id)
        if book.available_copies < book.total_copies:
            raise OutstandingLoansError("Cannot delete book: Some copies are currently issued.")
        if self.transactions.count_by_book_id(book_id):
            raise IntegrityViolationError("Cannot delete book: It appears in members' borrowing history.")
        self.books.delete_book(book_id)

    def _check_total_copies(self, book: Book, total_copies: int) -> None:
        if total_copies < book.copies_on_loan:
            raise OutstandingLoansError(
                f"Cannot set total copies to {total_copies}: "
                f"{book.copies_on_loan} copies are currently issued."
            )

    @staticmethod
    def _require(value: str, label: str) -> str:
        if value is None or not value.strip():
            raise InvalidInputError(f"{label} must not be blank.")
        return value.strip()
