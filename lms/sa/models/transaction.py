# lms/sa/models/transaction.py
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional
from sqlalchemy import Integer, Date, ForeignKey, CheckConstraint, Index, Enum as SAEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Status(str, Enum):
    BORROWED = "BORROWED"
    RETURNED = "RETURNED"

class Transaction(Base, TimestampMixin):
    __tablename__ = 'transactions'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    book_id: Mapped[int] = mapped_column(ForeignKey('books.id'), nullable=False)
    borrow_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[Status] = mapped_column(SAEnum(Status, native_enum=False, length=10), nullable=False)

    # Relationships
    user = relationship('User', back_populates='transactions')
    book = relationship('Book', back_populates='transactions')

    __table_args__ = (
        CheckConstraint(
            "(status = 'RETURNED' AND return_date IS NOT NULL) OR (status = 'BORROWED' AND return_date IS NULL)",
            name='ck_transactions_status_matches_return_date'
        ),
        CheckConstraint(
            'return_date IS NULL OR return_date >= borrow_date',
            name='ck_transactions_return_after_borrow'
        ),
        CheckConstraint(
            "due_date IS NULL OR due_date >= borrow_date",
            name="ck_transactions_due_after_borrow"
        ),
        Index('idx_transactions_user_id', 'user_id'),
        Index('idx_transactions_book_id', 'book_id'),
        Index('idx_transactions_status', 'status'),
    )

    @property
    def is_active(self) -> bool:
        return self.status == Status.BORROWED

    def __str__(self) -> str:
        returned = self.return_date.isoformat() if self.return_date else "-"
        due = f", due {self.due_date.isoformat()}" if self.due_date else ""
        return (
            f"[{self.id}] user {self.user_id} / book {self.book_id}: "
            f"borrowed {self.borrow_date.isoformat()}{due}, returned {returned} ({self.status.value})"
        )

@dataclass(frozen=True)
class BorrowingHistory:
    """Read-only projection of a transaction joined with its book title"""
    transaction_id: int
    user_id: int
    book_id: int
    title: str
    borrow_date: date
    return_date: Optional[date]
    status: Status

    def __str__(self) -> str:
        returned = self.return_date.isoformat() if self.return_date else "-"
        return (
            f"[{self.transaction_id}] {self.title} (book {self.book_id}) "
            f"borrowed {self.borrow_date.isoformat()}, returned {returned} - {self.status.value}"
        )
