"""
Password Reset Use Cases

Request, validate and consume password reset tokens.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .purge_expired_reset_tokens_use_case import PurgeExpiredResetTokensUseCase
from .settings import PasswordResetSettings
from .dtos import (
    RequestPasswordResetResponse,
    ResetDebugInfo,
    ValidateResetTokenResponse,
    ResetPasswordResponse,
    PurgeExpiredResetTokensResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    "PurgeExpiredResetTokensUseCase",
    # Settings
    "PasswordResetSettings",
    # DTOs - Responses
    "RequestPasswordResetResponse",
    "ResetDebugInfo",
    "ValidateResetTokenResponse",
    "ResetPasswordResponse",
    "PurgeExpiredResetTokensResponse",
]
