"""
Use Cases

Organized into domain folders:
- password_reset/: Password reset token lifecycle
"""

from .password_reset import (
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    ResetPasswordUseCase,
    PurgeExpiredResetTokensUseCase,
)

__all__ = [
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    "PurgeExpiredResetTokensUseCase",
]
