"""User aggregate — the login account a customer profile hangs off."""

from datetime import datetime
from enum import Enum

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError
from protean.fields import Boolean, DateTime, String, ValueObject

from ordering.customer.email import EmailAddress
from ordering.customer.events import UserDisabled, UserEnabled, UserRegistered
from ordering.domain import ordering

_hasher = PasswordHasher()


class UserRole(Enum):
    USER = "User"
    ADMIN = "Admin"


def hash_password(password: str) -> str:
    """Argon2id hash in PHC string form, salt included."""
    return _hasher.hash(password)


@ordering.aggregate
class User:
    """A platform account with a role and an enabled flag.

    Disabling an account keeps the record and its customer profile; it only
    marks the account as unable to sign in.
    """

    username: String(required=True, max_length=50, unique=True)
    email: ValueObject(EmailAddress, required=True)
    password_hash: String(required=True, max_length=255)
    enabled: Boolean(default=True)
    role: String(choices=UserRole, default=UserRole.USER.value)
    registered_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, username, email, password, role=None):
        now = datetime.now()
        user = cls(
            username=username,
            email=EmailAddress(address=email),
            password_hash=hash_password(password),
            role=role or UserRole.USER.value,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                username=user.username,
                email=email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def check_password(self, password: str) -> bool:
        try:
            return _hasher.verify(self.password_hash, password)
        except (VerifyMismatchError, InvalidHashError):
            return False

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def enable(self):
        if self.enabled:
            return
        self.enabled = True
        self.raise_(UserEnabled(user_id=self.id))

    def disable(self):
        if not self.enabled:
            return
        self.enabled = False
        self.raise_(UserDisabled(user_id=self.id))
