# tests/test_repositories/test_book_repository.py

import pytest
from datetime import date
from lms.sa.models import Book, Transaction, Status
from lms.sa.repositories.book import BookRepository
from tests.utils import make_book

@pytest.fixture
def book_repo(db_session):
    """Fixture to create a BookRepository instance."""
    return BookRepository(db_session)

@pytest.fixture
def catalogue(db_session):
    """Three books across two genres, one fully on loan."""
    return [
        make_book(db_session, "The Hobbit", 2, author="J.R.R. Tolkien", genre="Fantasy", isbn="0261102214"),
        make_book(db_session, "Dune", 1, 0, author="Frank Herbert", genre="Science Fiction"),
        make_book(db_session, "The Silmarillion", 4, 3, author="J.R.R. Tolkien", genre="Fantasy"),
    ]

def test_create_book_defaults_available_to_total(book_repo):
    """Test that a new book starts with every copy on the shelf."""
    book = book_repo.create_book(
        title="Emma", author="Jane Austen", genre="Classic", isbn="9780141439587", total_copies=4
    )
    assert book.id is not None
    assert book.available_copies == 4
    assert book.is_available

def test_get_by_id_nonexistent(book_repo):
    """Test fetching a book that does not exist."""
    assert book_repo.get_by_id(999) is None

def test_get_available(book_repo, catalogue):
    """Test that only books with a copy on the shelf are listed."""
    titles = [book.title for book in book_repo.get_available()]
    assert titles == ["The Hobbit", "The Silmarillion"]

def test_get_all_borrowed(book_repo, catalogue):
    """Test listing books with at least one copy out."""
    titles = [book.title for book in book_repo.get_all_borrowed()]
    assert titles == ["Dune", "The Silmarillion"]

def test_get_by_genre_is_case_insensitive(book_repo, catalogue):
    """Test filtering by genre regardless of case."""
    books = book_repo.get_by_genre("fantasy")
    assert {book.title for book in books} == {"The Hobbit", "The Silmarillion"}

def test_get_by_title(book_repo, catalogue):
    """Test exact title lookup."""
    book = book_repo.get_by_title("  dune ")
    assert book is not None
    assert book.author == "Frank Herbert"
    assert book_repo.get_by_title("Dun") is None

def test_get_by_author(book_repo, catalogue):
    """Test filtering by author."""
    books = book_repo.get_by_author("j.r.r. tolkien")
    assert [book.title for book in books] == ["The Hobbit", "The Silmarillion"]

def test_search_matches_title_author_and_genre(book_repo, catalogue):
    """Test keyword search across title, author and genre."""
    assert [b.title for b in book_repo.search("hobb")] == ["The Hobbit"]
    assert [b.title for b in book_repo.search("HERBERT")] == ["Dune"]
    assert len(book_repo.search("fiction")) == 1
    assert len(book_repo.search("the", limit=1)) == 1

def test_update_book_shifts_available_copies(book_repo, db_session):
    """Test that raising the total keeps the number of copies on loan."""
    book = make_book(db_session, total_copies=3, available_copies=1)
    updated = book_repo.update_book(book.id, title="New Title", total_copies=5)
    assert updated.title == "New Title"
    assert updated.total_copies == 5
    assert updated.available_copies == 3

def test_update_book_nonexistent(book_repo):
    """Test updating a non-existent book."""
    assert book_repo.update_book(999, title="Nothing") is None

def test_decrement_available(book_repo, db_session, sample_book):
    """Test taking a copy off the shelf."""
    assert book_repo.decrement_available(sample_book.id) is True
    db_session.commit()
    db_session.refresh(sample_book)
    assert sample_book.available_copies == 2

def test_decrement_available_with_no_copies(book_repo, db_session, unavailable_book):
    """Test that the guarded update changes nothing when no copy is left."""
    assert book_repo.decrement_available(unavailable_book.id) is False
    db_session.commit()
    db_session.refresh(unavailable_book)
    assert unavailable_book.available_copies == 0

def test_increment_available_never_exceeds_total(book_repo, sample_book):
    """Test that a full shelf cannot take another copy."""
    assert book_repo.increment_available(sample_book.id) is False

def test_get_borrowed_by_user(book_repo, db_session, sample_book, sample_member):
    """Test listing the books a member has on loan."""
    other = make_book(db_session, "Returned Book")
    db_session.add_all([
        Transaction(user_id=sample_member.id, book_id=sample_book.id,
                    borrow_date=date(2024, 1, 1), status=Status.BORROWED),
        Transaction(user_id=sample_member.id, book_id=other.id, borrow_date=date(2024, 1, 1),
                    return_date=date(2024, 1, 5), status=Status.RETURNED),
    ])
    db_session.commit()

    books = book_repo.get_borrowed_by_user(sample_member.id)
    assert [book.id for book in books] == [sample_book.id]

def test_delete_book(book_repo, db_session, sample_book):
    """Test deleting a book."""
    book_id = sample_book.id
    assert book_repo.delete_book(book_id) is True
    assert db_session.query(Book).filter(Book.id == book_id).count() == 0

def test_delete_book_nonexistent(book_repo):
    """Test deleting a book that does not exist."""
    assert book_repo.delete_book(999) is False
