"""
Reset Password Use Case

Consumes a password reset token and sets the new password.
"""

import asyncio
import logging

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.reset_token_codec import digest_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import INVALID_TOKEN_MESSAGE, ResetPasswordResponse
from .settings import PasswordResetSettings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


class ResetPasswordUseCase:
    """
    Use case for resetting a password with a reset token.

    Business Rules:
    - New password needs at least 8 characters
    - Token must match a stored digest, be unexpired and belong to an active account
    - Password hash, token clearing and lockout reset happen in one conditional update
    - Of two concurrent resets with the same token only one succeeds
    """

    def __init__(self, uow: UnitOfWork, settings: PasswordResetSettings):
        self.uow = uow
        self.settings = settings

    def _validate_password(self, password: str) -> Result[None]:
        """
        Validate password length.

        Args:
            password: Password to validate

        Returns:
            Result with None if valid, or Error if invalid
        """
        if len(password) < self.settings.min_password_length:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {self.settings.min_password_length} characters long",
                )
            )

        if len(password.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long",
                )
            )

        return Return.ok(None)

    async def _hash_password(self, password: str) -> str:
        # bcrypt is CPU bound, keep it off the event loop
        hashed = await asyncio.to_thread(
            bcrypt.hashpw, password.encode(), bcrypt.gensalt(self.settings.bcrypt_rounds)
        )
        return hashed.decode()

    async def execute(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            token: Plain reset token from the email link
            new_password: New password to set

        Returns:
            Result with confirmation message, or Error

        Errors:
            - VALIDATION_ERROR: Token or password missing
            - INVALID_PASSWORD: Password too short or too long
            - INVALID_TOKEN: Token unknown, expired, already used or account inactive
        """
        if not token or not new_password:
            return Return.err(Error("VALIDATION_ERROR", "Token and new password are required"))

        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        digest = digest_secret(token)

        async with self.uow:
            now = utcnow()
            account = await self.uow.accounts.get_by_valid_reset_digest(digest, now)
            if account is None:
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            account_id = account.id
            password_hash = await self._hash_password(new_password)

            consumed = await self.uow.accounts.consume_reset_and_set_password(
                account_id, digest, password_hash, now
            )
            if not consumed:
                # Another request consumed or replaced the token after our lookup
                logger.info("Password reset for account %s lost a concurrent update", account_id)
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            await self.uow.commit()

        logger.info("Password reset completed for account %s", account_id)

        return Return.ok(
            ResetPasswordResponse(
                message="Password reset successfully. You can now log in with your new password."
            )
        )
