# lms/sa/models/book.py
from sqlalchemy import String, Integer, CheckConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Book(Base, TimestampMixin):
    __tablename__ = 'books'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    genre: Mapped[str] = mapped_column(String(50), nullable=False)
    isbn: Mapped[str] = mapped_column(String(20), nullable=False)
    total_copies: Mapped[int] = mapped_column(Integer, nullable=False)
    available_copies: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    transactions = relationship('Transaction', back_populates='book')

    __table_args__ = (
        CheckConstraint('total_copies > 0', name='ck_books_total_positive'),
        CheckConstraint(
            'available_copies >= 0 AND available_copies <= total_copies',
            name='ck_books_available_within_total'
        ),
        Index('idx_books_title', 'title'),
        Index('idx_books_author', 'author'),
        Index('idx_books_genre', 'genre'),
    )

    @property
    def is_available(self) -> bool:
        return self.available_copies > 0

    @property
    def copies_on_loan(self) -> int:
        return self.total_copies - self.available_copies

    def __str__(self) -> str:
        return (
            f"[{self.id}] {self.title} by {self.author} ({self.genre}) "
            f"ISBN {self.isbn} - {self.available_copies}/{self.total_copies} available"
        )
