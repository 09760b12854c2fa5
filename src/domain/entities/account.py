"""
Account Entity

The user record of the maintenance API, reduced to the fields the password
reset flow reads and writes.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import AccountStatus


class Account(SQLModel, table=True):
    """
    Account entity - a person who owns vehicles in the maintenance API.

    Business Rules:
    - Email is unique and stored lower-case
    - Password stored as bcrypt hash
    - password_reset_token holds the SHA-256 digest of the emailed secret,
      never the secret itself
    - password_reset_token and password_reset_expires are set and cleared
      together
    - login_attempts / locked_until are reset by a successful password reset
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=50)
    email: str = Field(unique=True, index=True, max_length=100)
    password_hash: str = Field(max_length=255)

    status: AccountStatus = Field(default=AccountStatus.active)

    # Login lockout
    login_attempts: int = Field(default=0)
    locked_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Password reset (digest + expiry)
    password_reset_token: Optional[str] = Field(default=None, max_length=64, index=True)
    password_reset_expires: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_users_password_reset_expires", "password_reset_expires"),)

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.active

    def has_pending_reset(self, now: datetime) -> bool:
        """True while a reset digest is stored and has not expired"""
        return (
            self.password_reset_token is not None
            and self.password_reset_expires is not None
            and now < self.password_reset_expires
        )
