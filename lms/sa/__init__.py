# lms/sa/__init__.py
from .database import Database
from .models import (
    Base, Book, User, Address, Transaction,
    Role, AdminType, Gender, Status, BorrowingHistory
)

__all__ = [
    'Database',
    'Base',
    'Book',
    'User',
    'Address',
    'Transaction',
    'Role',
    'AdminType',
    'Gender',
    'Status',
    'BorrowingHistory'
]
