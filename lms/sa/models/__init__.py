# lms/sa/models/__init__.py
from .base import Base, TimestampMixin
from .book import Book
from .user import User, Address, Role, AdminType, Gender
from .transaction import Transaction, Status, BorrowingHistory

__all__ = [
    'Base',
    'TimestampMixin',
    'Book',
    'User',
    'Address',
    'Role',
    'AdminType',
    'Gender',
    'Transaction',
    'Status',
    'BorrowingHistory'
]
