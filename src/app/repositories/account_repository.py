from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_valid_reset_digest(self, digest: str, now: datetime) -> Optional[Account]:
        """Get the active account whose unexpired reset digest matches"""
        pass

    @abstractmethod
    async def update_reset_token(
        self, account_id: int, digest: str, expires_at: datetime
    ) -> None:
        """Store a reset digest and expiry, replacing any pending one"""
        pass

    @abstractmethod
    async def consume_reset_and_set_password(
        self, account_id: int, digest: str, password_hash: str, now: datetime
    ) -> bool:
        """
        Set the new password hash and clear the reset token in one update.

        The update only applies while the stored digest still matches, is
        unexpired and the account is active. Returns False when no row
        matched.
        """
        pass

    @abstractmethod
    async def clear_expired_reset_tokens(self, now: datetime) -> int:
        """Clear reset digests whose expiry has passed, returns rows cleared"""
        pass
