"""
Request Password Reset Use Case

Issues a password reset token and emails the reset link.
"""

import logging
from urllib.parse import urlencode

from libs.result import Error, Result, Return
from src.domain.base import utcnow
from src.app.services.email_sender import EmailDeliveryError, EmailMessage, IEmailSender
from src.app.services.password_reset_email import build_password_reset_email
from src.app.services.reset_token_codec import issue_password_reset_token
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RequestPasswordResetResponse, ResetDebugInfo
from .settings import PasswordResetSettings

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Email is matched case-insensitively
    - Unknown email gets the same response as a known one (no enumeration)
    - Inactive accounts are told so explicitly (403)
    - 256-bit secret is emailed, only its SHA-256 digest is stored
    - A new request overwrites any pending token
    - Token expires after settings.ttl_minutes (30 by default)
    - Plain token is echoed back only outside production
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        settings: PasswordResetSettings,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.settings = settings

    def _build_reset_url(self, secret: str) -> str:
        return f"{self.settings.frontend_url.rstrip('/')}/reset-password?{urlencode({'token': secret})}"

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address the reset is requested for

        Returns:
            Result with the generic response, or Error

        Errors:
            - VALIDATION_ERROR: Email is blank
            - ACCOUNT_INACTIVE: Account exists but is not active
            - EMAIL_DELIVERY_FAILED: Reset email could not be sent
        """
        normalized_email = (email or "").strip().lower()
        if not normalized_email:
            return Return.err(Error("VALIDATION_ERROR", "Email is required"))

        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalized_email)

            if account is None:
                logger.info("Password reset requested for an unknown email")
                return Return.ok(RequestPasswordResetResponse())

            if not account.is_active:
                logger.info(
                    "Password reset refused for account %s with status %s",
                    account.id,
                    account.status.value,
                )
                return Return.err(
                    Error(
                        "ACCOUNT_INACTIVE",
                        "This account is inactive. Please contact support.",
                    )
                )

            if account.has_pending_reset(utcnow()):
                logger.info("Replacing pending password reset for account %s", account.id)

            issued = issue_password_reset_token(self.settings.ttl_minutes)

            await self.uow.accounts.update_reset_token(
                account.id, issued.digest, issued.expires_at
            )
            account_id, recipient, first_name = account.id, account.email, account.first_name
            await self.uow.commit()

        reset_url = self._build_reset_url(issued.secret)
        content = build_password_reset_email(
            first_name, reset_url, self.settings.ttl_minutes
        )

        try:
            await self.email_sender.send(EmailMessage(to=recipient, **content))
        except EmailDeliveryError as exc:
            logger.error("Password reset email for account %s failed: %s", account_id, exc)
            return Return.err(
                Error(
                    "EMAIL_DELIVERY_FAILED",
                    "Could not process the password reset request",
                )
            )

        logger.info("Password reset token issued for account %s", account_id)

        response = RequestPasswordResetResponse()
        if self.settings.expose_debug:
            response.debug = ResetDebugInfo(
                token=issued.secret,
                reset_url=reset_url,
                expires_at=issued.expires_at,
            )
        return Return.ok(response)
