"""JWT configuration and the bearer-token guard."""

import os
import logging

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPBearer

from api.interceptors import RequestContext
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
JWT_REFRESH_SECRET_KEY = os.getenv("JWT_REFRESH_SECRET_KEY")
if not JWT_SECRET_KEY or not JWT_REFRESH_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY and JWT_REFRESH_SECRET_KEY environment variables are required. "
        "Generate secure keys with: openssl rand -hex 32"
    )

token_issuer = TokenIssuer(JWT_SECRET_KEY, JWT_REFRESH_SECRET_KEY)


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class BearerGuard:
    """Interceptor requiring a valid access token; stores its user id on the context."""

    def __init__(self, issuer: TokenIssuer):
        self.issuer = issuer
        self.bearer = HTTPBearer(auto_error=False)

    async def __call__(self, request: Request, ctx: RequestContext) -> None:
        credentials = await self.bearer(request)
        if not credentials:
            raise _unauthorized("Not authenticated")

        user_id = self.issuer.verify_access_token(credentials.credentials)
        if not user_id:
            raise _unauthorized("Invalid or expired token")

        ctx.user_id = user_id


require_user = BearerGuard(token_issuer)
