"""Authentication routes (signup, OTP verification, login, token refresh).

All four endpoints share one per-IP rate limiter.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_mail_sender, get_user_repo
from api.errors import to_http_exception
from api.interceptors import intercept
from api.models import (
    AccessTokenResponse,
    LoginRequest,
    MessageResponse,
    RefreshTokenRequest,
    SignupRequest,
    TokenPairResponse,
    VerifyOtpRequest,
)
from api.rate_limit import auth_limiter
from api.security import get_token_issuer
from domain.model.errors import DomainError
from port.mail_sender import MailSender
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

throttled = intercept(auth_limiter)


@router.post("/signup", response_model=MessageResponse, dependencies=[Depends(throttled)])
def signup(
    request: SignupRequest,
    repo: UserRepository = Depends(get_user_repo),
    mailer: MailSender = Depends(get_mail_sender),
):
    """Create an account and email it a one-time password."""
    try:
        auth_service.signup(repo, mailer, request.email, request.password)
    except DomainError as e:
        raise to_http_exception(e)

    return MessageResponse(message="OTP sent to email")


@router.post("/verify-otp", response_model=TokenPairResponse, dependencies=[Depends(throttled)])
def verify_otp(
    request: VerifyOtpRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Verify the emailed code and return an access/refresh token pair."""
    try:
        pair = auth_service.verify_otp(repo, tokens, request.email, request.otp)
    except DomainError as e:
        raise to_http_exception(e)

    return TokenPairResponse(token=pair.access_token, refresh_token=pair.refresh_token)


@router.post("/login", response_model=TokenPairResponse, dependencies=[Depends(throttled)])
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Login and rotate the session tokens."""
    try:
        pair = auth_service.login(repo, tokens, request.email, request.password)
    except DomainError as e:
        raise to_http_exception(e)

    return TokenPairResponse(token=pair.access_token, refresh_token=pair.refresh_token)


@router.post("/refresh-token", response_model=AccessTokenResponse, dependencies=[Depends(throttled)])
def refresh_token(
    request: RefreshTokenRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Exchange the active refresh token for a new access token."""
    try:
        token = auth_service.refresh_access_token(repo, tokens, request.refresh_token)
    except DomainError as e:
        raise to_http_exception(e)

    return AccessTokenResponse(token=token)
