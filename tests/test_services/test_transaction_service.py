# tests/test_services/test_transaction_service.py

import pytest
from datetime import date, timedelta
from lms.exceptions import (
    BookNotFoundError, InvalidInputError, NoAvailableCopiesError,
    TransactionNotFoundError, UserNotFoundError
)
from lms.sa.models import Book, Transaction, Status
from lms.services.transaction_service import TransactionService
from tests.utils import make_book, make_user

@pytest.fixture
def service(db_session):
    return TransactionService(db_session)

def assert_copies_within_bounds(book):
    assert 0 <= book.available_copies <= book.total_copies

def test_borrow_and_return_scenario(service, db_session, sample_member, sample_book):
    """Book {3,3}: borrow leaves 2, return today restores 3."""
    transaction = service.borrow_book(sample_member.id, sample_book.id)
    db_session.refresh(sample_book)
    assert sample_book.available_copies == 2
    assert transaction.status == Status.BORROWED
    assert transaction.borrow_date == date.today()

    returned = service.return_book(transaction.id, date.today())
    db_session.refresh(sample_book)
    assert sample_book.available_copies == 3
    assert returned.status == Status.RETURNED
    assert returned.return_date == date.today()

def test_borrow_without_available_copies(service, db_session, sample_member, unavailable_book):
    """A borrow of a book with no copy left fails and changes nothing."""
    with pytest.raises(NoAvailableCopiesError):
        service.borrow_book(sample_member.id, unavailable_book.id)
    db_session.refresh(unavailable_book)
    assert unavailable_book.available_copies == 0
    assert db_session.query(Transaction).count() == 0

def test_return_twice_fails(service, db_session, sample_member, sample_book):
    """Returning a RETURNED transaction is an error, not a no-op."""
    transaction = service.borrow_book(sample_member.id, sample_book.id)
    service.return_book(transaction.id)

    with pytest.raises(InvalidInputError, match="already been returned"):
        service.return_book(transaction.id)
    db_session.refresh(sample_book)
    assert sample_book.available_copies == 3

def test_copies_stay_within_bounds(service, db_session, sample_book, sample_member):
    """Available copies stay between 0 and the total across borrows and returns."""
    other_members = [make_user(db_session, name, with_address=False) for name in ("alice", "bob")]

    loans = []
    for member in [sample_member] + other_members:
        loans.append(service.borrow_book(member.id, sample_book.id))
        db_session.refresh(sample_book)
        assert_copies_within_bounds(sample_book)
    assert sample_book.available_copies == 0

    for loan in loans:
        service.return_book(loan.id)
        db_session.refresh(sample_book)
        assert_copies_within_bounds(sample_book)
    assert sample_book.available_copies == 3

def test_borrow_unknown_user(service, sample_book):
    with pytest.raises(UserNotFoundError):
        service.borrow_book(999, sample_book.id)

def test_borrow_unknown_book(service, sample_member):
    with pytest.raises(BookNotFoundError):
        service.borrow_book(sample_member.id, 999)

def test_user_is_checked_before_book(service):
    """A missing user is reported even when the book is missing too."""
    with pytest.raises(UserNotFoundError):
        service.borrow_book(998, 999)

def test_admin_cannot_borrow(service, sample_admin, sample_book):
    with pytest.raises(InvalidInputError, match="Administrators cannot borrow"):
        service.borrow_book(sample_admin.id, sample_book.id)

def test_borrow_date_in_future(service, sample_member, sample_book):
    with pytest.raises(InvalidInputError, match="future"):
        service.borrow_book(sample_member.id, sample_book.id, date.today() + timedelta(days=1))

def test_return_date_before_borrow_date(service, sample_member, sample_book):
    """A supplied return date may not precede the borrow date."""
    borrow_date = date.today() - timedelta(days=3)
    with pytest.raises(InvalidInputError, match="before the borrow date"):
        service.borrow_book(sample_member.id, sample_book.id, borrow_date, borrow_date - timedelta(days=1))

def test_supplied_return_date_is_kept_as_due_date(service, sample_member, sample_book):
    borrow_date = date.today() - timedelta(days=3)
    transaction = service.borrow_book(
        sample_member.id, sample_book.id, borrow_date, borrow_date + timedelta(days=14)
    )
    assert transaction.status == Status.BORROWED
    assert transaction.return_date is None
    assert transaction.due_date == borrow_date + timedelta(days=14)

def test_cannot_borrow_same_book_twice(service, sample_member, sample_book):
    service.borrow_book(sample_member.id, sample_book.id)
    with pytest.raises(InvalidInputError, match="already borrowed"):
        service.borrow_book(sample_member.id, sample_book.id)

def test_loan_limit(db_session, sample_member):
    """A member cannot hold more loans than the configured limit."""
    service = TransactionService(db_session, max_active_loans=2)
    books = [make_book(db_session, f"Book {i}") for i in range(3)]
    service.borrow_book(sample_member.id, books[0].id)
    service.borrow_book(sample_member.id, books[1].id)

    with pytest.raises(InvalidInputError, match="limit"):
        service.borrow_book(sample_member.id, books[2].id)
    assert service.count_active_loans(sample_member.id) == 2

def test_zero_loan_limit_blocks_borrowing(db_session, sample_member, sample_book):
    service = TransactionService(db_session, max_active_loans=0)
    assert service.max_active_loans == 0
    with pytest.raises(InvalidInputError, match="limit"):
        service.borrow_book(sample_member.id, sample_book.id)
    db_session.expire_all()
    assert db_session.get(Book, sample_book.id).available_copies == 3

def test_return_unknown_transaction(service):
    with pytest.raises(TransactionNotFoundError):
        service.return_book(999)

def test_return_before_borrow_date(service, sample_member, sample_book):
    transaction = service.borrow_book(sample_member.id, sample_book.id, date.today() - timedelta(days=1))
    with pytest.raises(InvalidInputError):
        service.return_book(transaction.id, date.today() - timedelta(days=2))
    assert service.get_transaction(transaction.id).status == Status.BORROWED

def test_return_book_for_user(service, sample_member, sample_book):
    service.borrow_book(sample_member.id, sample_book.id)
    returned = service.return_book_for_user(sample_member.id, sample_book.id)
    assert returned.status == Status.RETURNED
    assert not service.is_book_borrowed_by_user(sample_member.id, sample_book.id)

    with pytest.raises(TransactionNotFoundError):
        service.return_book_for_user(sample_member.id, sample_book.id)

def test_borrowing_history(service, sample_member, sample_book):
    transaction = service.borrow_book(sample_member.id, sample_book.id)
    service.return_book(transaction.id)

    history = service.get_borrowing_history(sample_member.id)
    assert [(h.transaction_id, h.title, h.status) for h in history] == [
        (transaction.id, "Test Book", Status.RETURNED)
    ]
    assert service.get_transaction_id(sample_member.id, sample_book.id) == transaction.id

def test_admin_has_no_history(service, sample_admin):
    with pytest.raises(InvalidInputError):
        service.get_borrowing_history(sample_admin.id)
