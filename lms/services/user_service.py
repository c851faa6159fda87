# lms/services/user_service.py

from typing import List
import logging
from sqlalchemy.orm import Session

from lms.exceptions import InvalidInputError, SuperAdminError, UserNotFoundError, OutstandingLoansError
from lms.schemas.user import (
    UserCreate, UserProfileUpdate, MemberFieldUpdate,
    UsernameUpdate, PasswordUpdate, AddressUpdate
)
from lms.sa.models import User, Role, AdminType
from lms.sa.repositories import UserRepository, AddressRepository, TransactionRepository
from lms.utils import validators
from lms.utils.passwords import hash_password

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepository(session)
        self.addresses = AddressRepository(session)
        self.transactions = TransactionRepository(session)

    def register_member(self, user: UserCreate) -> User:
        """Create a member account from a validated sign-up"""
        return self._create(user, Role.MEMBER, None)

    def add_admin(self, user: UserCreate, admin_type: AdminType = AdminType.STANDARD) -> User:
        """Create an administrator account.

        Raises:
            SuperAdminError: If a SUPER administrator is requested and one exists
        """
        if admin_type == AdminType.SUPER and self.users.get_super_admin():
            raise SuperAdminError("A super admin already exists.")
        return self._create(user, Role.ADMIN, admin_type)

    def _create(self, user: UserCreate, role: Role, admin_type) -> User:
        return self.users.create_user(
            username=user.username,
            password_hash=hash_password(user.password),
            firstname=user.firstname,
            surname=user.surname,
            date_of_birth=user.date_of_birth,
            gender=user.gender,
            email=user.email,
            phone_number=user.phone_number,
            role=role,
            admin_type=admin_type,
            address=user.address.model_dump() if user.address else None
        )

    def get_user(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id {user_id} not found.")
        return user

    def get_user_by_username(self, username: str) -> User:
        if not validators.is_not_blank(username):
            raise InvalidInputError("Username must not be blank.")
        user = self.users.get_by_username(username)
        if not user:
            raise UserNotFoundError(f"User '{username.strip()}' not found.")
        return user

    def get_all_users(self) -> List[User]:
        return self.users.get_all()

    def get_members(self) -> List[User]:
        return self.users.get_members()

    def get_admins(self) -> List[User]:
        return self.users.get_admins()

    def user_exists(self, username: str) -> bool:
        return validators.is_not_blank(username) and self.users.get_by_username(username) is not None

    def get_user_type(self, user_id: int) -> Role:
        return self.get_user(user_id).role

    def get_admin_type(self, user_id: int) -> AdminType:
        user = self.get_user(user_id)
        if not user.is_admin:
            raise InvalidInputError(f"User {user_id} is not an administrator.")
        return user.admin_type

    def update_profile(self, user_id: int, update: UserProfileUpdate) -> User:
        """Replace a user's personal details and, when given, its address"""
        user = self.get_user(user_id)
        fields = update.model_dump(exclude={"address"})
        self.users.update_profile(user_id, **fields)
        if update.address is not None:
            self._save_address(user, update.address.model_dump())
        return self.get_user(user_id)

    def update_username(self, user_id: int, username: str) -> User:
        if not validators.is_valid_username(username):
            raise InvalidInputError(f"'{username}' is not a valid username.")
        user = self.get_user(user_id)
        username = username.strip()
        if username == user.username:
            return user
        if self.users.get_by_username(username):
            raise InvalidInputError(f"Username '{username}' is already taken")
        return self.users.update_username(user_id, username)

    def update_password(self, user_id: int, password: str) -> None:
        """Store a new password after checking its strength"""
        if not validators.is_valid_password(password):
            raise InvalidInputError(
                "Password must be at least 8 characters and contain a digit, "
                "a lower and upper case letter and one of @#$%^&+=!"
            )
        self.get_user(user_id)
        self.users.update_password(user_id, hash_password(password))
        logger.info(f"Password changed for user {user_id}")

    def update_member_field(self, user_id: int, update: MemberFieldUpdate) -> User:
        """Apply a single-field update to a user"""
        user = self.get_user(user_id)

        if isinstance(update, UsernameUpdate):
            return self.update_username(user_id, update.value)
        elif isinstance(update, PasswordUpdate):
            self.update_password(user_id, update.value)
            return user
        elif isinstance(update, AddressUpdate):
            self._save_address(user, update.value.model_dump())
            return self.get_user(user_id)

        self.users.update_profile(user_id, **{update.field: update.value})
        return self.get_user(user_id)

    def update_role(self, user_id: int, role: Role) -> User:
        """Change a user's role.

        A member becoming an administrator must have returned every book; its
        loan history is then removed.

        Raises:
            SuperAdminError: If the user is the SUPER administrator
            OutstandingLoansError: If a member with open loans is promoted
        """
        user = self.get_user(user_id)
        if user.is_super_admin:
            raise SuperAdminError("The role of the super admin cannot be changed.")
        if user.role == role:
            raise InvalidInputError(f"User {user_id} is already {role.value}.")
        if role == Role.ADMIN and self.transactions.count_active_by_user(user_id):
            raise OutstandingLoansError(
                "Cannot promote a member who still has borrowed books."
            )
        return self.users.update_role(user_id, role, AdminType.STANDARD if role == Role.ADMIN else None)

    def update_admin_type(self, user_id: int, admin_type: AdminType) -> User:
        """Change an administrator's type.

        Raises:
            InvalidInputError: If the user is not an administrator
            SuperAdminError: If the user is the SUPER administrator, or
                another SUPER administrator already exists
        """
        user = self.get_user(user_id)
        if not user.is_admin:
            raise InvalidInputError(f"User {user_id} is not an administrator.")
        if user.is_super_admin:
            raise SuperAdminError("The admin type of the super admin cannot be changed.")
        if admin_type == AdminType.SUPER and self.users.get_super_admin():
            raise SuperAdminError("A super admin already exists.")
        return self.users.update_admin_type(user_id, admin_type)

    def delete_user(self, user_id: int) -> None:
        """Remove a user, returning any borrowed copies to the shelf.

        Raises:
            UserNotFoundError: If the user does not exist
            SuperAdminError: If the user is the SUPER administrator
        """
        user = self.get_user(user_id)
        if user.is_super_admin:
            raise SuperAdminError("Super admin cannot be removed.")
        self.users.delete_user(user_id)

    def _save_address(self, user: User, fields: dict) -> None:
        if user.address is None:
            self.addresses.create_address(user.id, **fields)
        else:
            self.addresses.update_by_user_id(user.id, **fields)
