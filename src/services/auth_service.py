"""Auth service — signup, OTP verification, login and token refresh.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
import secrets
from functools import lru_cache
from datetime import datetime, timedelta, timezone

import bcrypt
from email_validator import EmailNotValidError, validate_email

from domain.model.errors import (
    DuplicateError,
    InvalidCredentialsError,
    InvalidOrExpiredError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from port.mail_sender import MailSender
from port.user_repository import UserRepository
from services.token_service import TokenIssuer, TokenPair

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
MIN_PASSWORD_LENGTH = 6
OTP_TTL = timedelta(minutes=10)

OTP_SUBJECT = "Verify Your Email - RentSetu"


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Hash checked against when the email is unknown, so both login failures cost one bcrypt round."""
    return _hash_password(secrets.token_hex(16))


def _validate_signup(email: str, password: str) -> None:
    errors = []
    try:
        validate_email(email or "", check_deliverability=False)
    except EmailNotValidError:
        errors.append({"field": "email", "message": "Please include a valid email"})
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors.append({"field": "password", "message": "Password must be 6 or more characters"})
    if errors:
        raise ValidationError("Validation failed", errors=errors)


def generate_otp() -> str:
    """Six-digit numeric code, never starting with zero."""
    return str(100000 + secrets.randbelow(900000))


def signup(repo: UserRepository, mailer: MailSender, email: str, password: str) -> None:
    """Create an unverified account and mail it a one-time password.

    Raises:
        ValidationError: malformed email or short password
        DuplicateError: email already registered
        UpstreamError: the code could not be delivered
    """
    _validate_signup(email, password)

    if repo.get_by_email(email):
        raise DuplicateError("User already exists")

    otp = generate_otp()
    expires_at = datetime.now(timezone.utc) + OTP_TTL
    user = repo.create(
        email=email,
        password_hash=_hash_password(password),
        otp=otp,
        otp_expires_at=expires_at,
    )

    mailer.send(
        to=email,
        subject=OTP_SUBJECT,
        body=f"Your OTP is {otp}. It expires in 10 minutes.",
    )
    logger.info("Signup OTP sent", extra={"userId": user.id, "email": email})


def _start_session(repo: UserRepository, tokens: TokenIssuer, user_id: str) -> TokenPair:
    pair = tokens.issue_pair(user_id)
    repo.set_refresh_token(user_id, pair.refresh_token)
    return pair


def verify_otp(repo: UserRepository, tokens: TokenIssuer, email: str, code: str) -> TokenPair:
    """Consume the pending OTP and open a session.

    Raises:
        NotFoundError: no account for ``email``
        InvalidOrExpiredError: wrong, reused or expired code
    """
    user = repo.get_by_email(email)
    if not user:
        raise NotFoundError("User not found")

    now = datetime.now(timezone.utc)
    if not user.otp_is_valid(code, now) or not repo.consume_otp(user.id, code, now):
        logger.info("OTP rejected", extra={"userId": user.id})
        raise InvalidOrExpiredError("Invalid or expired OTP")

    pair = _start_session(repo, tokens, user.id)
    logger.info("User verified", extra={"userId": user.id})
    return pair


def login(repo: UserRepository, tokens: TokenIssuer, email: str, password: str) -> TokenPair:
    """Authenticate and rotate the session tokens.

    Doesn't reveal whether the email exists.

    Raises:
        InvalidCredentialsError: unknown email or wrong password
    """
    user = repo.get_by_email(email)
    if not user:
        _verify_password(password or "", _dummy_hash())
        raise InvalidCredentialsError("Invalid credentials")
    if not _verify_password(password or "", user.password_hash):
        raise InvalidCredentialsError("Invalid credentials")

    pair = _start_session(repo, tokens, user.id)
    logger.info("User logged in", extra={"userId": user.id})
    return pair


def refresh_access_token(repo: UserRepository, tokens: TokenIssuer, refresh_token: str | None) -> str:
    """Mint a new access token from the currently active refresh token.

    The refresh token itself is not rotated.

    Raises:
        UnauthorizedError: token missing, invalid, expired or not the stored one
    """
    if not refresh_token:
        raise UnauthorizedError("No refresh token provided")

    user_id = tokens.verify_refresh_token(refresh_token)
    if not user_id:
        raise UnauthorizedError("Invalid refresh token")

    user = repo.get_by_id(user_id)
    if not user or not user.holds_refresh_token(refresh_token):
        logger.warning("Stale refresh token presented", extra={"userId": user_id})
        raise UnauthorizedError("Invalid refresh token")

    return tokens.create_access_token(user.id)
