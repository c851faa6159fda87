from .book_operations import BookOperations
from .user_operations import UserOperations

__all__ = ['BookOperations', 'UserOperations']
