# lms/exceptions.py
"""Error hierarchy shared by repositories, services and the console layer.

Three kinds of failure exist:

* ``NotFoundError`` - an id or username has no matching row.
* ``InvalidInputError`` - malformed input or a broken business rule. The
  operation layer reports it and lets the user try again.
* ``IntegrityViolationError`` - an action that is refused outright, such as
  deleting the super administrator.
"""


class LibraryError(Exception):
    """Base class for all library errors"""


class NotFoundError(LibraryError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class BookNotFoundError(NotFoundError):
    pass


class TransactionNotFoundError(NotFoundError):
    pass


class AddressNotFoundError(NotFoundError):
    pass


class InvalidInputError(LibraryError, ValueError):
    pass


class NoAvailableCopiesError(InvalidInputError):
    """Raised when a borrow finds no copy of the book left on the shelf"""


class IntegrityViolationError(LibraryError):
    pass


class SuperAdminError(IntegrityViolationError):
    pass


class OutstandingLoansError(IntegrityViolationError):
    """Raised when copies of a book (or loans of a user) are still out"""
