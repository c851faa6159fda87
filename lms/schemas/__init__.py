# lms/schemas/__init__.py
from .book import (
    BookCreate, BookUpdate, BookFieldUpdate, BOOK_UPDATABLE_FIELDS, parse_book_field_update
)
from .user import (
    AddressCreate, UserCreate, UserProfileUpdate, MemberFieldUpdate,
    MEMBER_UPDATABLE_FIELDS, parse_member_field_update
)

__all__ = [
    'BookCreate',
    'BookUpdate',
    'BookFieldUpdate',
    'BOOK_UPDATABLE_FIELDS',
    'parse_book_field_update',
    'AddressCreate',
    'UserCreate',
    'UserProfileUpdate',
    'MemberFieldUpdate',
    'MEMBER_UPDATABLE_FIELDS',
    'parse_member_field_update'
]
