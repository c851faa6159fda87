# lms/sa/repositories/book.py
from typing import List, Optional
import logging
from sqlalchemy import or_, func, update
from sqlalchemy.orm import Session
from lms.sa.models import Book, Transaction, Status

logger = logging.getLogger(__name__)

class BookRepository:
    """Repository for managing Book entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def create_book(
        self,
        title: str,
        author: str,
        genre: str,
        isbn: str,
        total_copies: int,
        available_copies: Optional[int] = None
    ) -> Book:
        """Create a new book.

        Args:
            title: Title of the book
            author: Author of the book
            genre: Genre of the book
            isbn: ISBN-10 or ISBN-13 without hyphens
            total_copies: Number of copies the library owns
            available_copies: Copies on the shelf (defaults to total_copies)

        Returns:
            The created Book object
        """
        book = Book(
            title=title,
            author=author,
            genre=genre,
            isbn=isbn,
            total_copies=total_copies,
            available_copies=total_copies if available_copies is None else available_copies
        )
        self.session.add(book)
        self.session.commit()
        logger.info(f"Added book {book.id} '{book.title}'")
        return book

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by its ID.

        Args:
            book_id: The ID of the book to retrieve

        Returns:
            The Book object if found, None otherwise
        """
        return self.session.query(Book).filter(Book.id == book_id).one_or_none()

    def get_all(self) -> List[Book]:
        return self.session.query(Book).order_by(Book.id).all()

    def get_available(self) -> List[Book]:
        """Get books with at least one copy on the shelf"""
        return (
            self.session.query(Book)
            .filter(Book.available_copies > 0)
            .order_by(Book.id)
            .all()
        )

    def get_all_borrowed(self) -> List[Book]:
        """Get books with at least one copy out on loan"""
        return (
            self.session.query(Book)
            .filter(Book.available_copies < Book.total_copies)
            .order_by(Book.id)
            .all()
        )

    def get_by_genre(self, genre: str) -> List[Book]:
        return (
            self.session.query(Book)
            .filter(func.lower(Book.genre) == genre.strip().lower())
            .order_by(Book.title)
            .all()
        )

    def get_by_title(self, title: str) -> Optional[Book]:
        """Get the first book whose title matches exactly (case-insensitive)"""
        return (
            self.session.query(Book)
            .filter(func.lower(Book.title) == title.strip().lower())
            .order_by(Book.id)
            .first()
        )

    def get_by_author(self, author: str) -> List[Book]:
        return (
            self.session.query(Book)
            .filter(func.lower(Book.author) == author.strip().lower())
            .order_by(Book.title)
            .all()
        )

    def search(self, keyword: str, limit: Optional[int] = None) -> List[Book]:
        """Search books by keyword in title, author or genre.

        Args:
            keyword: The search string
            limit: Maximum number of results to return (default: no limit)

        Returns:
            List of matching Book objects ordered by title
        """
        pattern = f"%{keyword.strip()}%"
        query = (
            self.session.query(Book)
            .filter(or_(
                Book.title.ilike(pattern),
                Book.author.ilike(pattern),
                Book.genre.ilike(pattern)
            ))
            .order_by(Book.title)
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_borrowed_by_user(self, user_id: int) -> List[Book]:
        """Get books the user currently has on loan.

        Args:
            user_id: The ID of the borrowing user

        Returns:
            List of Book objects with an active (BORROWED) transaction for the user
        """
        return (
            self.session.query(Book)
            .join(Transaction, Transaction.book_id == Book.id)
            .filter(
                Transaction.user_id == user_id,
                Transaction.status == Status.BORROWED
            )
            .order_by(Transaction.borrow_date, Book.id)
            .all()
        )

    def update_book(
        self,
        book_id: int,
        title: Optional[str] = None,
        author: Optional[str] = None,
        genre: Optional[str] = None,
        isbn: Optional[str] = None,
        total_copies: Optional[int] = None
    ) -> Optional[Book]:
        """Update an existing book.

        A new total shifts the available copies by the same amount so the
        number of copies on loan is preserved. Callers must make sure the new
        total is not below the copies on loan.

        Returns:
            The updated Book object if found, None otherwise
        """
        book = self.get_by_id(book_id)
        if not book:
            return None

        if title is not None:
            book.title = title
        if author is not None:
            book.author = author
        if genre is not None:
            book.genre = genre
        if isbn is not None:
            book.isbn = isbn
        if total_copies is not None:
            book.available_copies += total_copies - book.total_copies
            book.total_copies = total_copies

        self.session.commit()
        return book

    def decrement_available(self, book_id: int) -> bool:
        """Take one copy off the shelf if one is left.

        Compare-and-swap: the row only changes while ``available_copies >= 1``.
        Does not commit.

        Returns:
            True if a copy was taken, False if none was available (or no such book)
        """
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies >= 1)
            .values(available_copies=Book.available_copies - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def increment_available(self, book_id: int) -> bool:
        """Put one copy back on the shelf, never above the total. Does not commit."""
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies < Book.total_copies)
            .values(available_copies=Book.available_copies + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def delete_book(self, book_id: int) -> bool:
        """Delete a book.

        Args:
            book_id: The ID of the book to delete

        Returns:
            True if the book was deleted, False if not found
        """
        book = self.get_by_id(book_id)
        if not book:
            return False

        self.session.delete(book)
        self.session.commit()
        logger.info(f"Deleted book {book_id}")
        return True
