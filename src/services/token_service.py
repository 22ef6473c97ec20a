"""JWT issuance and verification for access and refresh tokens."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TTL = timedelta(hours=1)
REFRESH_TOKEN_TTL = timedelta(days=7)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenIssuer:
    """Signs and verifies tokens. Access and refresh tokens use separate secrets."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
    ):
        if not access_secret or not refresh_secret:
            raise ValueError("Both access and refresh token secrets are required")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    def _encode(self, user_id: str, token_type: str, secret: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "type": token_type,
            "iat": now,
            "exp": now + ttl,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    def _decode(self, token: str, token_type: str, secret: str) -> str | None:
        try:
            payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None
        if payload.get("type") != token_type:
            return None
        user_id = payload.get("sub")
        return user_id if isinstance(user_id, str) and user_id else None

    def create_access_token(self, user_id: str) -> str:
        return self._encode(user_id, "access", self._access_secret, self.access_ttl)

    def create_refresh_token(self, user_id: str) -> str:
        return self._encode(user_id, "refresh", self._refresh_secret, self.refresh_ttl)

    def issue_pair(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self.create_access_token(user_id),
            refresh_token=self.create_refresh_token(user_id),
        )

    def verify_access_token(self, token: str) -> str | None:
        """Return the user id carried by a valid access token, else None."""
        return self._decode(token, "access", self._access_secret)

    def verify_refresh_token(self, token: str) -> str | None:
        """Return the user id carried by a valid refresh token, else None."""
        return self._decode(token, "refresh", self._refresh_secret)
