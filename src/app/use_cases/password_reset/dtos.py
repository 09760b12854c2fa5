"""
Password Reset Use Case DTOs (Data Transfer Objects)

Response classes for the password reset flow.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

GENERIC_REQUEST_MESSAGE = (
    "If the email exists in our records, you will receive instructions to reset your password"
)
INVALID_TOKEN_MESSAGE = "Invalid or expired token. Please request a new password reset."


class ResetDebugInfo(BaseModel):
    """Plain token details, only returned outside production"""

    token: str
    reset_url: str = Field(serialization_alias="resetUrl")
    expires_at: datetime = Field(serialization_alias="expiresAt")


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    message: str = GENERIC_REQUEST_MESSAGE
    debug: Optional[ResetDebugInfo] = None


class ValidateResetTokenResponse(BaseModel):
    """Response for validate reset token use case"""

    message: str
    email: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    message: str


class PurgeExpiredResetTokensResponse(BaseModel):
    """Response for purge expired reset tokens use case"""

    cleared: int
