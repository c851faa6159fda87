from .book import BookRepository
from .user import UserRepository
from .address import AddressRepository
from .transaction import TransactionRepository

__all__ = [
    'BookRepository',
    'UserRepository',
    'AddressRepository',
    'TransactionRepository'
]
