# tests/utils.py
from datetime import date

from lms.sa.models import Book, User, Address, Role, Gender
from lms.utils.passwords import hash_password

MEMBER_PASSWORD = "Secret@123"

def make_user(session, username, role=Role.MEMBER, admin_type=None, password=MEMBER_PASSWORD, with_address=True):
    user = User(
        username=username,
        password=hash_password(password, rounds=4),
        role=role,
        admin_type=admin_type,
        firstname="Test",
        surname=username.capitalize(),
        date_of_birth=date(1990, 5, 17),
        gender=Gender.FEMALE,
        email=f"{username}@example.com",
        phone_number="+441234567890"
    )
    if with_address:
        user.address = Address(
            street="1 Library Lane",
            city="Booktown",
            pincode="AB1 2CD",
            state="Shelfshire",
            country="UK"
        )
    session.add(user)
    session.commit()
    return user

def make_book(session, title="Test Book", total_copies=3, available_copies=None, **fields):
    book = Book(
        title=title,
        author=fields.get("author", "Test Author"),
        genre=fields.get("genre", "Fiction"),
        isbn=fields.get("isbn", "9780306406157"),
        total_copies=total_copies,
        available_copies=total_copies if available_copies is None else available_copies
    )
    session.add(book)
    session.commit()
    return book
