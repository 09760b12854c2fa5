"""
Purge Expired Reset Tokens Use Case

Storage hygiene only: expiry is already enforced on every read.
"""

import logging

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import PurgeExpiredResetTokensResponse

logger = logging.getLogger(__name__)


class PurgeExpiredResetTokensUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[PurgeExpiredResetTokensResponse]:
        async with self.uow:
            cleared = await self.uow.accounts.clear_expired_reset_tokens(utcnow())
            await self.uow.commit()

        logger.info("Cleared %s expired password reset tokens", cleared)
        return Return.ok(PurgeExpiredResetTokensResponse(cleared=cleared))
