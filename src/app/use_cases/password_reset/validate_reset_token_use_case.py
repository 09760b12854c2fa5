"""
Validate Reset Token Use Case

Tells the frontend whether a reset link is still usable before the user
types a new password.
"""

from libs.result import Error, Result, Return
from src.app.services.reset_token_codec import digest_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import INVALID_TOKEN_MESSAGE, ValidateResetTokenResponse


class ValidateResetTokenUseCase:
    """
    Use case for validating a password reset token.

    Read-only: the token stays usable after validation.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[ValidateResetTokenResponse]:
        if not token:
            return Return.err(Error("VALIDATION_ERROR", "Token is required"))

        async with self.uow:
            account = await self.uow.accounts.get_by_valid_reset_digest(
                digest_secret(token), utcnow()
            )

            # Unknown, expired, consumed and inactive all look the same to the caller
            if account is None:
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            # Leaving the unit of work rolls back and expires the loaded account
            response = ValidateResetTokenResponse(message="Token is valid", email=account.email)

        return Return.ok(response)
