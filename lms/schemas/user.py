# lms/schemas/user.py
from datetime import date
from typing import Annotated, Literal, Optional, Union
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, TypeAdapter

from lms.sa.models import Gender
from lms.utils import validators


def _check_username(value: str) -> str:
    if not validators.is_valid_username(value):
        raise ValueError("Username must be 3-20 characters of letters, digits, '.', '_', '@' or '-'")
    return value.strip()

def _check_password(value: str) -> str:
    if not validators.is_valid_password(value):
        raise ValueError(
            "Password must be at least 8 characters and contain a digit, "
            "a lower and upper case letter and one of @#$%^&+=!"
        )
    return value

def _check_name(value: str) -> str:
    if not validators.is_valid_name(value):
        raise ValueError("Names must be at least 2 letters (hyphens and spaces allowed)")
    return value.strip()

def _check_date_of_birth(value: date) -> date:
    if not validators.is_valid_date_of_birth(value):
        raise ValueError(
            f"Date of birth must be between {validators.MIN_AGE_YEARS} and "
            f"{validators.MAX_AGE_YEARS} years ago"
        )
    return value

def _check_phone_number(value: str) -> str:
    if not validators.is_valid_phone_number(value):
        raise ValueError("Phone number must be 10 to 15 digits with an optional leading +")
    return value.strip()

def _check_required(value: str) -> str:
    if not validators.is_not_blank(value):
        raise ValueError("Value must not be blank")
    return value.strip()

def _check_pincode(value: str) -> str:
    if not validators.is_valid_pincode(value):
        raise ValueError("Pincode must be 3-10 letters, digits, spaces or hyphens")
    return value.strip()

def _upper(value):
    return value.strip().upper() if isinstance(value, str) else value


Username = Annotated[str, AfterValidator(_check_username)]
Password = Annotated[str, AfterValidator(_check_password)]
Name = Annotated[str, AfterValidator(_check_name)]
DateOfBirth = Annotated[date, AfterValidator(_check_date_of_birth)]
PhoneNumber = Annotated[str, AfterValidator(_check_phone_number)]
Required = Annotated[str, AfterValidator(_check_required)]
Pincode = Annotated[str, AfterValidator(_check_pincode)]
GenderField = Annotated[Gender, BeforeValidator(_upper)]


class AddressCreate(BaseModel):
    street: Required
    city: Required
    pincode: Pincode
    state: Required
    country: Required

    model_config = ConfigDict(from_attributes=True)


class UserProfile(BaseModel):
    firstname: Name
    surname: Name
    date_of_birth: DateOfBirth
    gender: GenderField
    email: EmailStr
    phone_number: PhoneNumber


class UserCreate(UserProfile):
    username: Username
    password: Password
    address: Optional[AddressCreate] = None


class UserProfileUpdate(UserProfile):
    """Replacement of a user's personal details and, optionally, address"""
    address: Optional[AddressCreate] = None


# Single-field member updates, discriminated on ``field``

class UsernameUpdate(BaseModel):
    field: Literal["username"] = "username"
    value: Username


class PasswordUpdate(BaseModel):
    field: Literal["password"] = "password"
    value: Password


class FirstnameUpdate(BaseModel):
    field: Literal["firstname"] = "firstname"
    value: Name


class SurnameUpdate(BaseModel):
    field: Literal["surname"] = "surname"
    value: Name


class DateOfBirthUpdate(BaseModel):
    field: Literal["date_of_birth"] = "date_of_birth"
    value: DateOfBirth


class GenderUpdate(BaseModel):
    field: Literal["gender"] = "gender"
    value: GenderField


class EmailUpdate(BaseModel):
    field: Literal["email"] = "email"
    value: EmailStr


class PhoneNumberUpdate(BaseModel):
    field: Literal["phone_number"] = "phone_number"
    value: PhoneNumber


class AddressUpdate(BaseModel):
    field: Literal["address"] = "address"
    value: AddressCreate


MemberFieldUpdate = Annotated[
    Union[
        UsernameUpdate, PasswordUpdate, FirstnameUpdate, SurnameUpdate,
        DateOfBirthUpdate, GenderUpdate, EmailUpdate, PhoneNumberUpdate, AddressUpdate,
    ],
    Field(discriminator="field"),
]

MEMBER_UPDATABLE_FIELDS = (
    "username", "password", "firstname", "surname",
    "date_of_birth", "gender", "email", "phone_number", "address",
)

_member_field_update_adapter = TypeAdapter(MemberFieldUpdate)


def parse_member_field_update(field: str, value) -> MemberFieldUpdate:
    """Build the update variant for ``field``.

    Raises pydantic.ValidationError for an unknown field or a bad value.
    """
    return _member_field_update_adapter.validate_python({"field": field, "value": value})
