# lms/sa/repositories/address.py
from typing import Optional
from sqlalchemy.orm import Session
from lms.sa.models import Address

class AddressRepository:
    """Repository for the one-to-one user addresses."""

    def __init__(self, session: Session):
        self.session = session

    def create_address(
        self,
        user_id: int,
        street: str,
        city: str,
        pincode: str,
        state: str,
        country: str
    ) -> Address:
        address = Address(
            user_id=user_id,
            street=street,
            city=city,
            pincode=pincode,
            state=state,
            country=country
        )
        self.session.add(address)
        self.session.commit()
        return address

    def get_by_id(self, address_id: int) -> Optional[Address]:
        return self.session.query(Address).filter(Address.id == address_id).one_or_none()

    def get_by_user_id(self, user_id: int) -> Optional[Address]:
        return self.session.query(Address).filter(Address.user_id == user_id).one_or_none()

    def update_by_user_id(self, user_id: int, **fields) -> Optional[Address]:
        """Update the address of a user.

        Args:
            user_id: The owning user
            **fields: Any of street, city, pincode, state, country

        Returns:
            The updated Address if the user has one, None otherwise
        """
        address = self.get_by_user_id(user_id)
        if not address:
            return None

        for name in ("street", "city", "pincode", "state", "country"):
            value = fields.get(name)
            if value is not None:
                setattr(address, name, value)

        self.session.commit()
        return address

    def delete_address(self, address_id: int) -> bool:
        address = self.get_by_id(address_id)
        if not address:
            return False

        self.session.delete(address)
        self.session.commit()
        return True

    def delete_by_user_id(self, user_id: int) -> bool:
        deleted = (
            self.session.query(Address)
            .filter(Address.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0
