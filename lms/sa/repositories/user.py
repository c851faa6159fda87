# lms/sa/repositories/user.py
from datetime import date
from typing import Any, List, Mapping, Optional
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from lms.exceptions import InvalidInputError
from lms.sa.models import User, Address, Role, AdminType, Gender, Transaction, Status
from .book import BookRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("firstname", "surname", "date_of_birth", "gender", "email", "phone_number")
ADDRESS_FIELDS = ("street", "city", "pincode", "state", "country")

class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def create_user(
        self,
        username: str,
        password_hash: str,
        firstname: str,
        surname: str,
        date_of_birth: date,
        gender: Gender,
        email: str,
        phone_number: str,
        role: Role = Role.MEMBER,
        admin_type: Optional[AdminType] = None,
        address: Optional[Mapping[str, Any]] = None
    ) -> User:
        """Create a new user, with its address if one is given.

        Args:
            username: Unique login name
            password_hash: Already hashed password
            firstname: First name
            surname: Surname
            date_of_birth: Date of birth
            gender: Gender
            email: E-mail address
            phone_number: Phone number
            role: MEMBER or ADMIN
            admin_type: SUPER or STANDARD, required for administrators
            address: Mapping with street, city, pincode, state and country

        Returns:
            The created User object

        Raises:
            InvalidInputError: If the username is already taken
        """
        existing = self.get_by_username(username)
        if existing:
            raise InvalidInputError(f"Username '{username}' is already taken")

        user = User(
            username=username,
            password=password_hash,
            role=role,
            admin_type=admin_type if role == Role.ADMIN else None,
            firstname=firstname,
            surname=surname,
            date_of_birth=date_of_birth,
            gender=gender,
            email=email,
            phone_number=phone_number
        )
        if address:
            user.address = Address(**{key: address[key] for key in ADDRESS_FIELDS})

        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise InvalidInputError(f"Username '{username}' is already taken")

        logger.info(f"Created {role.value.lower()} {user.id} '{username}'")
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID, with its address loaded.

        Args:
            user_id: The ID of the user

        Returns:
            The User object if found, None otherwise
        """
        return (
            self.session.query(User)
            .options(joinedload(User.address))
            .filter(User.id == user_id)
            .one_or_none()
        )

    def get_by_username(self, username: str) -> Optional[User]:
        return (
            self.session.query(User)
            .options(joinedload(User.address))
            .filter(User.username == username.strip())
            .one_or_none()
        )

    def get_all(self) -> List[User]:
        return self.session.query(User).options(joinedload(User.address)).order_by(User.id).all()

    def get_members(self) -> List[User]:
        return (
            self.session.query(User)
            .options(joinedload(User.address))
            .filter(User.role == Role.MEMBER)
            .order_by(User.id)
            .all()
        )

    def get_admins(self) -> List[User]:
        return (
            self.session.query(User)
            .options(joinedload(User.address))
            .filter(User.role == Role.ADMIN)
            .order_by(User.id)
            .all()
        )

    def get_super_admin(self) -> Optional[User]:
        return (
            self.session.query(User)
            .filter(User.role == Role.ADMIN, User.admin_type == AdminType.SUPER)
            .order_by(User.id)
            .first()
        )

    def count_users(self) -> int:
        return self.session.query(func.count(User.id)).scalar()

    def update_profile(self, user_id: int, **fields) -> Optional[User]:
        """Update a user's personal details.

        Args:
            user_id: The ID of the user to update
            **fields: Any of firstname, surname, date_of_birth, gender, email,
                phone_number; ``None`` values are ignored

        Returns:
            The updated User object if found, None otherwise
        """
        user = self.get_by_id(user_id)
        if not user:
            return None

        for name, value in fields.items():
            if name not in PROFILE_FIELDS:
                raise InvalidInputError(f"'{name}' is not a profile field")
            if value is not None:
                setattr(user, name, value)

        self.session.commit()
        return user

    def update_username(self, user_id: int, username: str) -> Optional[User]:
        """Rename a user.

        Raises:
            InvalidInputError: If another user already has the username
        """
        user = self.get_by_id(user_id)
        if not user:
            return None

        user.username = username
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise InvalidInputError(f"Username '{username}' is already taken")
        return user

    def update_password(self, user_id: int, password_hash: str) -> bool:
        user = self.get_by_id(user_id)
        if not user:
            return False

        user.password = password_hash
        self.session.commit()
        return True

    def update_role(self, user_id: int, role: Role, admin_type: Optional[AdminType] = None) -> Optional[User]:
        """Change a user's role.

        A user becoming an administrator loses its loan history; the caller
        checks that no loan is still open.

        Args:
            user_id: The ID of the user
            role: The new role
            admin_type: Admin type for administrators (defaults to STANDARD)

        Returns:
            The updated User object if found, None otherwise
        """
        user = self.get_by_id(user_id)
        if not user:
            return None

        try:
            if role == Role.ADMIN and user.role == Role.MEMBER:
                self.session.query(Transaction).filter(
                    Transaction.user_id == user_id
                ).delete(synchronize_session=False)
            user.role = role
            user.admin_type = (admin_type or AdminType.STANDARD) if role == Role.ADMIN else None
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"User {user_id} is now {role.value}")
        return user

    def update_admin_type(self, user_id: int, admin_type: AdminType) -> Optional[User]:
        user = self.get_by_id(user_id)
        if not user:
            return None

        user.admin_type = admin_type
        self.session.commit()
        return user

    def delete_user(self, user_id: int) -> bool:
        """Delete a user with its address and transactions.

        Copies of books still on loan to the user go back on the shelf. All
        writes are committed together.

        Args:
            user_id: The ID of the user to delete

        Returns:
            True if the user was deleted, False if not found
        """
        user = self.get_by_id(user_id)
        if not user:
            return False

        books = BookRepository(self.session)
        try:
            open_loans = (
                self.session.query(Transaction.book_id)
                .filter(Transaction.user_id == user_id, Transaction.status == Status.BORROWED)
                .all()
            )
            for (book_id,) in open_loans:
                books.increment_available(book_id)

            self.session.query(Transaction).filter(
                Transaction.user_id == user_id
            ).delete(synchronize_session=False)
            self.session.delete(user)
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.warning(f"Delete of user {user_id} rolled back")
            raise

        logger.info(f"Deleted user {user_id} ({len(open_loans)} open loans restored)")
        return True
