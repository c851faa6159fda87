# lms/sa/models/user.py
from datetime import date
from enum import Enum
from typing import Optional
from sqlalchemy import Integer, String, Date, ForeignKey, CheckConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Role(str, Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"

class AdminType(str, Enum):
    SUPER = "SUPER"
    STANDARD = "STANDARD"

class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"

class User(Base, TimestampMixin):
    """A library account.

    ``role`` is the discriminant: administrators carry an ``admin_type``,
    members never do (enforced by ``ck_users_admin_type_matches_role``).
    """
    __tablename__ = 'users'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(SAEnum(Role, native_enum=False, length=10), nullable=False)
    admin_type: Mapped[Optional[AdminType]] = mapped_column(
        SAEnum(AdminType, native_enum=False, length=10), nullable=True
    )
    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[Gender] = mapped_column(SAEnum(Gender, native_enum=False, length=10), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    address = relationship('Address', back_populates='user', uselist=False, cascade='all, delete-orphan')
    transactions = relationship('Transaction', back_populates='user')

    __table_args__ = (
        CheckConstraint(
            "(role = 'ADMIN' AND admin_type IS NOT NULL) OR (role = 'MEMBER' AND admin_type IS NULL)",
            name='ck_users_admin_type_matches_role'
        ),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_member(self) -> bool:
        return self.role == Role.MEMBER

    @property
    def is_super_admin(self) -> bool:
        return self.is_admin and self.admin_type == AdminType.SUPER

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.surname}"

    def __str__(self) -> str:
        role = self.role.value if self.is_member else f"{self.role.value} ({self.admin_type.value})"
        lines = [
            f"User ID      : {self.id}",
            f"Username     : {self.username}",
            f"Role         : {role}",
            f"Name         : {self.full_name}",
            f"Date of birth: {self.date_of_birth.isoformat()}",
            f"Gender       : {self.gender.value}",
            f"Email        : {self.email}",
            f"Phone        : {self.phone_number}",
        ]
        if self.address is not None:
            lines.append(f"Address      : {self.address}")
        return "\n".join(lines)

class Address(Base):
    __tablename__ = 'addresses'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    pincode: Mapped[str] = mapped_column(String(10), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    user = relationship('User', back_populates='address')

    def __str__(self) -> str:
        return f"{self.street}, {self.city} {self.pincode}, {self.state}, {self.country}"
