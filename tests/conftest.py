# tests/conftest.py
import os
import pytest
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

from lms.config import settings
from lms.sa.database import Database
from lms.sa.models import Base, Role, AdminType
from tests.utils import make_book, make_user

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_library.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(connection_string=f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    Base.metadata.drop_all(db.engine)
    Base.metadata.create_all(db.engine)

    yield db

    db.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database._SessionFactory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Empty every table before each test"""
    # Children before parents, foreign keys are enforced
    db_session.execute(text("DELETE FROM transactions"))
    db_session.execute(text("DELETE FROM addresses"))
    db_session.execute(text("DELETE FROM users"))
    db_session.execute(text("DELETE FROM books"))
    db_session.commit()
    yield
    db_session.rollback()

@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """bcrypt at its lowest cost keeps the suite fast"""
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)

@pytest.fixture
def sample_book(db_session):
    """A book with three copies, all on the shelf."""
    return make_book(db_session)

@pytest.fixture
def unavailable_book(db_session):
    """A book whose only copy is out (no matching loan row)."""
    return make_book(db_session, title="Out Of Stock", total_copies=1, available_copies=0, isbn="0306406152")

@pytest.fixture
def sample_member(db_session):
    return make_user(db_session, "member")

@pytest.fixture
def sample_admin(db_session):
    return make_user(db_session, "admin", Role.ADMIN, AdminType.STANDARD)

@pytest.fixture
def super_admin(db_session):
    return make_user(db_session, "root", Role.ADMIN, AdminType.SUPER)
