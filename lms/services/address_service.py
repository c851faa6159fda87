# lms/services/address_service.py

from sqlalchemy.orm import Session

from lms.exceptions import AddressNotFoundError, InvalidInputError, UserNotFoundError
from lms.schemas.user import AddressCreate
from lms.sa.models import Address
from lms.sa.repositories import AddressRepository, UserRepository

class AddressService:
    def __init__(self, session: Session):
        self.session = session
        self.addresses = AddressRepository(session)
        self.users = UserRepository(session)

    def add_address(self, user_id: int, address: AddressCreate) -> Address:
        if not self.users.get_by_id(user_id):
            raise UserNotFoundError(f"User with id {user_id} not found.")
        if self.addresses.get_by_user_id(user_id):
            raise InvalidInputError(f"User {user_id} already has an address.")
        return self.addresses.create_address(user_id, **address.model_dump())

    def get_address(self, address_id: int) -> Address:
        address = self.addresses.get_by_id(address_id)
        if not address:
            raise AddressNotFoundError(f"Address with id {address_id} not found.")
        return address

    def get_address_by_user(self, user_id: int) -> Address:
        address = self.addresses.get_by_user_id(user_id)
        if not address:
            raise AddressNotFoundError(f"No address for user {user_id}.")
        return address

    def update_address(self, user_id: int, address: AddressCreate) -> Address:
        self.get_address_by_user(user_id)
        return self.addresses.update_by_user_id(user_id, **address.model_dump())

    def delete_address(self, address_id: int) -> None:
        if not self.addresses.delete_address(address_id):
            raise AddressNotFoundError(f"Address with id {address_id} not found.")
