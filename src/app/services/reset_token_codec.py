"""
Password Reset Token Codec

Generates the secret that is emailed to the user and the digest that is
stored in its place. Only the digest ever reaches the database.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from src.domain.base import utcnow

SECRET_BYTES = 32
DEFAULT_TTL_MINUTES = 30


class IssuedResetToken(BaseModel):
    """Secret for the email, digest + expiry for storage"""

    secret: str
    digest: str
    expires_at: datetime


def generate_secret(num_bytes: int = SECRET_BYTES) -> str:
    """Hex encoded CSPRNG output, 64 characters for the default 32 bytes"""
    return secrets.token_hex(num_bytes)


def digest_secret(secret: str) -> str:
    """SHA-256 hex digest of a secret"""
    return hashlib.sha256(secret.encode()).hexdigest()


def issue_password_reset_token(
    ttl_minutes: int = DEFAULT_TTL_MINUTES, now: Optional[datetime] = None
) -> IssuedResetToken:
    """
    Issue a new password reset token.

    Args:
        ttl_minutes: Minutes until the token expires
        now: Issue time (naive UTC), defaults to the current time

    Returns:
        IssuedResetToken with the plain secret, its digest and expiry

    Raises:
        ValueError: ttl_minutes is not positive
    """
    if ttl_minutes <= 0:
        raise ValueError("ttl_minutes must be positive")

    secret = generate_secret()
    issued_at = now or utcnow()
    return IssuedResetToken(
        secret=secret,
        digest=digest_secret(secret),
        expires_at=issued_at + timedelta(minutes=ttl_minutes),
    )
