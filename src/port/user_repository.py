from datetime import datetime
from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise PersistenceError when the store fails.
    """
    def create(
        self,
        email: str,
        password_hash: str,
        otp: str,
        otp_expires_at: datetime,
    ) -> User:
        """Create a new unverified user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def consume_otp(self, user_id: str, code: str, now: datetime) -> bool:
        """Atomically clear a matching, unexpired OTP and flag the user verified.

        Return False if the code no longer matches or has expired, so concurrent
        callers presenting the same code get True at most once.
        """
        ...

    def set_refresh_token(self, user_id: str, refresh_token: str | None) -> bool:
        """Overwrite the stored refresh token. Return True if updated."""
        ...
