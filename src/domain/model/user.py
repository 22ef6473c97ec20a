import hmac
from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing an account."""
    id: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    otp: str | None = None
    otp_expires_at: datetime | None = None
    refresh_token: str | None = None
    is_verified: bool = False

    def otp_is_valid(self, code: str, now: datetime) -> bool:
        """Return True if ``code`` matches the pending OTP and it has not expired."""
        if not self.otp or not self.otp_expires_at or not code:
            return False
        if self.otp_expires_at < now:
            return False
        return hmac.compare_digest(self.otp.encode('utf-8'), code.encode('utf-8'))

    def holds_refresh_token(self, token: str) -> bool:
        """Return True if ``token`` is the currently stored refresh token."""
        if not self.refresh_token or not token:
            return False
        return hmac.compare_digest(self.refresh_token.encode('utf-8'), token.encode('utf-8'))
