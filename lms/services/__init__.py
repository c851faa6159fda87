from .book_service import BookService
from .user_service import UserService
from .address_service import AddressService
from .transaction_service import TransactionService
from .auth_service import AuthService

__all__ = [
    'BookService',
    'UserService',
    'AddressService',
    'TransactionService',
    'AuthService'
]
