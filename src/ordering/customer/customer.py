"""Customer aggregate — the shopper profile attached to exactly one user."""

from datetime import datetime
from enum import Enum

from protean.fields import Date, DateTime, Identifier, String

from ordering.customer.events import (
    CustomerAddressChanged,
    CustomerProfileUpdated,
    CustomerRegistered,
)
from ordering.domain import ordering

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class Gender(Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "O"


@ordering.aggregate
class Customer:
    """Contact and shipping details for a shopper.

    ``user_id`` is unique: a user owns at most one customer profile.
    """

    user_id: Identifier(required=True, unique=True)
    name: String(required=True, max_length=100)
    phone: String(max_length=20)
    address: String(max_length=255)
    city: String(max_length=50)
    postal_code: String(max_length=20)
    country: String(max_length=50)
    birthday: Date()
    gender: String(choices=Gender)
    registered_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, user_id, name, phone=None, birthday=None, gender=None, **address):
        now = datetime.now()
        customer = cls(
            user_id=user_id,
            name=name,
            phone=phone,
            birthday=birthday,
            gender=gender,
            address=address.get("address"),
            city=address.get("city"),
            postal_code=address.get("postal_code"),
            country=address.get("country"),
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=customer.id,
                user_id=customer.user_id,
                name=customer.name,
                registered_at=now,
            )
        )
        return customer

    def full_address(self) -> str:
        """Single-line postal address, e.g. ``"1 Main St, Springfield 00000, US"``.

        Missing parts are skipped along with their separator.
        """
        full = ""
        for part, separator in (
            (self.address, ""),
            (self.city, ", "),
            (self.postal_code, " "),
            (self.country, ", "),
        ):
            if not part:
                continue
            if full:
                full += separator
            full += part
        return full

    def update_profile(self, name=_UNSET, phone=_UNSET, birthday=_UNSET, gender=_UNSET):
        if name is not _UNSET:
            self.name = name
        if phone is not _UNSET:
            self.phone = phone
        if birthday is not _UNSET:
            self.birthday = birthday
        if gender is not _UNSET:
            self.gender = gender

        self.raise_(
            CustomerProfileUpdated(
                customer_id=self.id,
                name=self.name,
                phone=self.phone,
                birthday=self.birthday,
                gender=self.gender,
            )
        )

    def change_address(self, address=None, city=None, postal_code=None, country=None):
        """Replace the whole postal address. Parts left as ``None`` are cleared."""
        self.address = address
        self.city = city
        self.postal_code = postal_code
        self.country = country
        self.raise_(CustomerAddressChanged(customer_id=self.id, full_address=self.full_address()))
