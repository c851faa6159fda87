# tests/test_repositories/test_transaction_repository.py

import pytest
from datetime import date
from sqlalchemy.exc import IntegrityError
from lms.exceptions import InvalidInputError, IntegrityViolationError, NoAvailableCopiesError
from lms.sa.models import Transaction, Status
from lms.sa.repositories.transaction import TransactionRepository

@pytest.fixture
def transaction_repo(db_session):
    """Fixture to create a TransactionRepository instance."""
    return TransactionRepository(db_session)

@pytest.fixture
def active_loan(transaction_repo, sample_member, sample_book):
    """A BORROWED transaction of the sample book."""
    return transaction_repo.create_borrow(sample_member.id, sample_book.id, date(2024, 3, 1))

def test_create_borrow(transaction_repo, db_session, sample_member, sample_book):
    """Test that a borrow inserts a loan and takes one copy."""
    transaction = transaction_repo.create_borrow(
        sample_member.id, sample_book.id, date(2024, 3, 1), due_date=date(2024, 3, 15)
    )
    assert transaction.id is not None
    assert transaction.status == Status.BORROWED
    assert transaction.return_date is None
    assert transaction.due_date == date(2024, 3, 15)
    db_session.refresh(sample_book)
    assert sample_book.available_copies == 2

def test_create_borrow_without_copies(transaction_repo, db_session, sample_member, unavailable_book):
    """Test that a borrow with no copy left writes nothing."""
    with pytest.raises(NoAvailableCopiesError):
        transaction_repo.create_borrow(sample_member.id, unavailable_book.id, date(2024, 3, 1))
    assert db_session.query(Transaction).count() == 0
    assert unavailable_book.available_copies == 0

def test_create_borrow_rolls_back_decrement(transaction_repo, db_session, sample_book):
    """Test that a failed insert leaves the available copies untouched."""
    with pytest.raises(IntegrityError):
        transaction_repo.create_borrow(99999, sample_book.id, date(2024, 3, 1))
    assert sample_book.available_copies == 3
    assert db_session.query(Transaction).count() == 0

def test_mark_returned(transaction_repo, db_session, sample_book, active_loan):
    """Test that a return closes the loan and puts the copy back."""
    returned = transaction_repo.mark_returned(active_loan.id, date(2024, 3, 10))
    assert returned.status == Status.RETURNED
    assert returned.return_date == date(2024, 3, 10)
    db_session.refresh(sample_book)
    assert sample_book.available_copies == 3

def test_mark_returned_twice(transaction_repo, sample_book, active_loan):
    """Test that returning an already returned loan fails without changes."""
    transaction_repo.mark_returned(active_loan.id, date(2024, 3, 10))
    with pytest.raises(InvalidInputError, match="already been returned"):
        transaction_repo.mark_returned(active_loan.id, date(2024, 3, 11))
    assert sample_book.available_copies == 3
    assert transaction_repo.get_by_id(active_loan.id).return_date == date(2024, 3, 10)

def test_mark_returned_rolls_back_when_shelf_is_full(transaction_repo, db_session, sample_book, active_loan):
    """Test that the status change is undone if the copy cannot go back."""
    sample_book.available_copies = sample_book.total_copies
    db_session.commit()

    with pytest.raises(IntegrityViolationError):
        transaction_repo.mark_returned(active_loan.id, date(2024, 3, 10))

    loan = transaction_repo.get_by_id(active_loan.id)
    assert loan.status == Status.BORROWED
    assert loan.return_date is None

def test_active_queries(transaction_repo, sample_member, sample_book, active_loan):
    """Test the lookups used by the borrow and return workflows."""
    assert transaction_repo.count_active_by_user(sample_member.id) == 1
    assert transaction_repo.get_active_transaction_id(sample_member.id, sample_book.id) == active_loan.id
    assert [t.id for t in transaction_repo.get_active()] == [active_loan.id]

    transaction_repo.mark_returned(active_loan.id, date(2024, 3, 2))
    assert transaction_repo.count_active_by_user(sample_member.id) == 0
    assert transaction_repo.get_active_transaction_id(sample_member.id, sample_book.id) is None
    assert transaction_repo.get_transaction_id(sample_member.id, sample_book.id) == active_loan.id

def test_get_borrowing_history(transaction_repo, sample_member, sample_book, active_loan):
    """Test that the history carries the book title."""
    history = transaction_repo.get_borrowing_history(sample_member.id)
    assert len(history) == 1
    entry = history[0]
    assert entry.transaction_id == active_loan.id
    assert entry.title == "Test Book"
    assert entry.status == Status.BORROWED
    assert "Test Book" in str(entry)

def test_delete_by_user_id(transaction_repo, sample_member, active_loan):
    """Test bulk deleting a user's transactions."""
    assert transaction_repo.delete_by_user_id(sample_member.id) == 1
    assert transaction_repo.get_by_user_id(sample_member.id) == []
