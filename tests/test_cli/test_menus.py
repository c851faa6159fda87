# tests/test_cli/test_menus.py

import pytest
from click.testing import CliRunner
from cli.main import cli
from lms.sa.models import Book, Transaction, Status, User
from tests.utils import MEMBER_PASSWORD, make_book

@pytest.fixture
def runner():
    return CliRunner()

@pytest.fixture
def invoke(runner, database):
    """Run a CLI command against the test database"""
    def _invoke(*args, input=None):
        return runner.invoke(cli, ["--database-url", database.connection_string, *args], input=input)
    return _invoke

def lines(*entries):
    return "\n".join(str(entry) for entry in entries) + "\n"

def test_exit_from_login_menu(invoke):
    result = invoke("run", input=lines(4))
    assert result.exit_code == 0
    assert "Library Management System" in result.output
    assert "Goodbye" in result.output

def test_invalid_choice_is_reprompted(invoke):
    result = invoke("run", input=lines(9, "abc", 4))
    assert result.exit_code == 0
    assert result.output.count("Enter your choice") == 3

def test_failed_login(invoke, sample_member):
    result = invoke("run", input=lines(1, "member", "Wrong@1234", 4))
    assert result.exit_code == 0
    assert "Invalid username or password." in result.output

def test_member_borrows_and_returns(invoke, db_session, sample_member, sample_book):
    # Login, borrow "Test Book", logout, exit
    result = invoke("run", input=lines(1, "member", MEMBER_PASSWORD, 1, "Test", 1, 12, 4))
    assert result.exit_code == 0, result.output
    assert "You borrowed 'Test Book'" in result.output
    assert "You have been logged out." in result.output

    db_session.expire_all()
    assert db_session.get(Book, sample_book.id).available_copies == 2
    loan = db_session.query(Transaction).one()
    assert loan.status == Status.BORROWED

    # Login, view loans, return the only loan, exit from the member menu
    result = invoke("run", input=lines(1, "member", MEMBER_PASSWORD, 3, 2, 1, 13))
    assert result.exit_code == 0, result.output
    assert "You returned 'Test Book'." in result.output

    db_session.expire_all()
    assert db_session.get(Book, sample_book.id).available_copies == 3
    assert db_session.query(Transaction).one().status == Status.RETURNED

def test_member_sees_no_copies_error(invoke, db_session, sample_member, unavailable_book):
    result = invoke("run", input=lines(1, "member", MEMBER_PASSWORD, 1, "Out Of", 1, 13))
    assert result.exit_code == 0
    assert "no copies available" in result.output
    assert db_session.query(Transaction).count() == 0

def test_admin_cannot_delete_book_on_loan(invoke, db_session, sample_admin):
    book = make_book(db_session, total_copies=2, available_copies=1)
    # Login, book operations, remove book, confirm, exit
    result = invoke("run", input=lines(1, "admin", MEMBER_PASSWORD, 2, 5, book.id, "y", 14))
    assert result.exit_code == 0, result.output
    assert "Cannot delete book: Some copies are currently issued." in result.output

    db_session.expire_all()
    assert db_session.get(Book, book.id) is not None

def test_admin_adds_book(invoke, db_session, sample_admin):
    result = invoke("run", input=lines(
        1, "admin", MEMBER_PASSWORD, 2, 1,
        "Dracula", "Bram Stoker", "Horror", "bad-isbn", "9780141439846", 0, 2,
        13, 3, 4
    ))
    assert result.exit_code == 0, result.output
    assert "ISBN must be" in result.output
    assert "Book added with ID" in result.output

    book = db_session.query(Book).filter(Book.title == "Dracula").one()
    assert (book.total_copies, book.available_copies) == (2, 2)

def test_standard_admin_menu_has_no_admin_management(invoke, sample_admin):
    result = invoke("run", input=lines(1, "admin", MEMBER_PASSWORD, 1, 12))
    assert result.exit_code == 0, result.output
    assert "Add a new admin" not in result.output
    assert "Standard Admin Menu" in result.output

def test_super_admin_cannot_remove_self(invoke, db_session, super_admin):
    result = invoke("run", input=lines(1, "root", MEMBER_PASSWORD, 1, 13, super_admin.id, "y", 19))
    assert result.exit_code == 0, result.output
    assert "Super admin cannot be removed." in result.output
    db_session.expire_all()
    assert db_session.get(User, super_admin.id) is not None

def test_sign_up(invoke, db_session):
    result = invoke("run", input=lines(
        2, "newreader", "Reader@2024", "Reader@2024",
        "Nora", "Barnacle", "1990-02-21", "female", "nora@example.com", "+353123456789",
        "7 Eccles Street", "Dublin", "D07 XT95", "Leinster", "Ireland",
        4
    ))
    assert result.exit_code == 0, result.output
    assert "You can now log in as 'newreader'" in result.output

    user = db_session.query(User).filter(User.username == "newreader").one()
    assert user.is_member
    assert user.address.city == "Dublin"

def test_books_command(invoke, db_session, sample_book, unavailable_book):
    result = invoke("books", "list", "--available")
    assert result.exit_code == 0
    assert "Test Book" in result.output
    assert "Out Of Stock" not in result.output

    result = invoke("books", "search", "stock")
    assert result.exit_code == 0
    assert "Out Of Stock" in result.output

def test_create_superadmin(invoke, db_session):
    answers = lines(
        "chief", "Chief@2024", "Chief@2024",
        "Head", "Librarian", "1975-07-04", "male", "chief@example.com", "01234567890",
        "1 Main Road", "Springfield", "12345", "Oregon", "USA"
    )
    result = invoke("create-superadmin", input=answers)
    assert result.exit_code == 0, result.output
    assert db_session.query(User).filter(User.username == "chief").one().is_super_admin

    result = invoke("create-superadmin", input=answers.replace("chief\n", "deputy\n", 1))
    assert result.exit_code == 1
    assert "A super admin already exists." in result.output
