# lms/utils/validators.py
"""Field predicates for console input and schema validation.

Every function takes raw (possibly ``None``) input and returns a bool; none of
them raise.
"""
import re
from datetime import date
from typing import Optional

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9._@-]+$")
PASSWORD_PATTERN = re.compile(r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z])(?=.*[@#$%^&+=!]).+$")
NAME_PATTERN = re.compile(r"^[A-Za-z\-\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")
PINCODE_PATTERN = re.compile(r"^[A-Za-z0-9\s\-]{3,10}$")
ISBN10_PATTERN = re.compile(r"^\d{9}[\dXx]$")
ISBN13_PATTERN = re.compile(r"^\d{13}$")

MAX_GENRE_LENGTH = 50
MIN_AGE_YEARS = 5
MAX_AGE_YEARS = 120


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """Return the integer in ``value`` if it is a positive int, else None"""
    if value is None:
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def is_valid_id(value: Optional[str]) -> bool:
    return parse_positive_int(value) is not None


def is_not_blank(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


# Users

def is_valid_username(username: Optional[str]) -> bool:
    if not is_not_blank(username):
        return False
    username = username.strip()
    if len(username) < 3 or len(username) > 20:
        return False
    return bool(USERNAME_PATTERN.match(username))


def is_valid_password(password: Optional[str]) -> bool:
    """At least 8 characters with a digit, a lower and upper case letter and one of @#$%^&+=!"""
    if not is_not_blank(password) or len(password) < 8:
        return False
    return bool(PASSWORD_PATTERN.match(password))


def is_valid_name(name: Optional[str]) -> bool:
    if not is_not_blank(name):
        return False
    name = name.strip()
    return len(name) >= 2 and bool(NAME_PATTERN.match(name))


def _years_before(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return today.replace(year=today.year - years, day=28)


def is_valid_date_of_birth(value, today: Optional[date] = None) -> bool:
    dob = value if isinstance(value, date) else parse_iso_date(value)
    if dob is None:
        return False
    today = today or date.today()
    earliest = _years_before(today, MAX_AGE_YEARS)
    latest = _years_before(today, MIN_AGE_YEARS)
    return earliest <= dob <= latest


def is_valid_gender(value: Optional[str]) -> bool:
    return is_not_blank(value) and value.strip().upper() in ("MALE", "FEMALE")


def is_valid_role(value: Optional[str]) -> bool:
    return is_not_blank(value) and value.strip().upper() in ("ADMIN", "MEMBER")


def is_valid_admin_type(value: Optional[str]) -> bool:
    return is_not_blank(value) and value.strip().upper() in ("SUPER", "STANDARD")


def is_valid_phone_number(phone_number: Optional[str]) -> bool:
    return is_not_blank(phone_number) and bool(PHONE_PATTERN.match(phone_number.strip()))


# Addresses

def is_valid_pincode(pincode: Optional[str]) -> bool:
    return is_not_blank(pincode) and bool(PINCODE_PATTERN.match(pincode.strip()))


# Books

def normalize_isbn(isbn: Optional[str]) -> str:
    if isbn is None:
        return ""
    return isbn.replace("-", "").strip()


def is_valid_isbn(isbn: Optional[str]) -> bool:
    if isbn is None:
        return False
    normalized = normalize_isbn(isbn)
    return bool(ISBN10_PATTERN.match(normalized) or ISBN13_PATTERN.match(normalized))


def is_valid_genre(genre: Optional[str]) -> bool:
    return is_not_blank(genre) and len(genre.strip()) <= MAX_GENRE_LENGTH


def is_valid_total_copies(value) -> bool:
    return parse_positive_int(value) is not None


def is_valid_available_copies(value, total_copies: int) -> bool:
    try:
        available = int(str(value).strip())
    except (TypeError, ValueError):
        return False
    return 0 <= available <= total_copies


# Transactions

def is_valid_borrow_date(value, today: Optional[date] = None) -> bool:
    borrow_date = value if isinstance(value, date) else parse_iso_date(value)
    if borrow_date is None:
        return False
    return borrow_date <= (today or date.today())


def is_valid_return_date(borrow_value, return_value) -> bool:
    """An empty return date is valid; otherwise it must not precede the borrow date"""
    borrow_date = borrow_value if isinstance(borrow_value, date) else parse_iso_date(borrow_value)
    if borrow_date is None:
        return False
    if return_value is None or (isinstance(return_value, str) and not return_value.strip()):
        return True
    return_date = return_value if isinstance(return_value, date) else parse_iso_date(return_value)
    if return_date is None:
        return False
    return return_date >= borrow_date


def is_valid_status(value: Optional[str]) -> bool:
    return is_not_blank(value) and value.strip().upper() in ("BORROWED", "RETURNED")
