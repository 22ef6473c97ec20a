"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from datetime import datetime, timezone
from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, otp: str, otp_expires_at: datetime) -> User:
        if any(u.email == email for u in self.store.values()):
            raise DuplicateError("User already exists")

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
            otp=otp,
            otp_expires_at=otp_expires_at,
        )
        self.store[user_id] = user
        return user

    def consume_otp(self, user_id: str, code: str, now: datetime) -> bool:
        with self._lock:
            user = self.store.get(user_id)
            if not user or not user.otp_is_valid(code, now):
                return False

            user.otp = None
            user.otp_expires_at = None
            user.is_verified = True
            user.updated_at = datetime.now(timezone.utc)
            return True

    def set_refresh_token(self, user_id: str, refresh_token: str | None) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.refresh_token = refresh_token
        user.updated_at = datetime.now(timezone.utc)
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)
