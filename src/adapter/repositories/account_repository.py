from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.domain.base import utcnow
from src.domain.entities import Account, AccountStatus


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address (case-insensitive)"""
        stmt = select(Account).where(func.lower(Account.email) == email.strip().lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_valid_reset_digest(self, digest: str, now: datetime) -> Optional[Account]:
        """Get the active account whose unexpired reset digest matches"""
        stmt = select(Account).where(
            Account.password_reset_token == digest,
            Account.password_reset_expires > now,
            Account.status == AccountStatus.active,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update_reset_token(
        self, account_id: int, digest: str, expires_at: datetime
    ) -> None:
        """Store a reset digest and expiry, replacing any pending one"""
        if not digest or expires_at is None:
            raise ValueError("Reset digest and expiry must be set together")

        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(
                password_reset_token=digest,
                password_reset_expires=expires_at,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def consume_reset_and_set_password(
        self, account_id: int, digest: str, password_hash: str, now: datetime
    ) -> bool:
        """
        Set the new password hash and clear the reset token in one update.

        The WHERE clause re-checks the digest, so of two concurrent resets
        with the same token only the first matches a row.
        """
        stmt = (
            update(Account)
            .where(
                Account.id == account_id,
                Account.password_reset_token == digest,
                Account.password_reset_expires > now,
                Account.status == AccountStatus.active,
            )
            .values(
                password_hash=password_hash,
                password_reset_token=None,
                password_reset_expires=None,
                login_attempts=0,
                locked_until=None,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def clear_expired_reset_tokens(self, now: datetime) -> int:
        """Clear reset digests whose expiry has passed, returns rows cleared"""
        stmt = (
            update(Account)
            .where(
                Account.password_reset_token.is_not(None),
                Account.password_reset_expires <= now,
            )
            .values(password_reset_token=None, password_reset_expires=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
