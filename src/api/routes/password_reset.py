from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset import (
    PasswordResetSettings,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    ResetPasswordUseCase,
    RequestPasswordResetResponse,
    ValidateResetTokenResponse,
    ResetPasswordResponse,
)
from src.depends import get_email_sender, get_password_reset_settings, get_unit_of_work

router = APIRouter(prefix="/password-reset", tags=["Password Reset"])

CLIENT_ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
    "ACCOUNT_INACTIVE": status.HTTP_403_FORBIDDEN,
}


def _raise_for_error(error):
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is not None:
        raise ClientError(error, status_code=status_code)
    raise ServerError(error)


class RequestPasswordResetRequest(BaseModel):
    """
    Request password reset HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/request",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    response_model_exclude_none=True,
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    settings: PasswordResetSettings = Depends(get_password_reset_settings),
):
    """
    Request Password Reset

    Emails a single-use reset link valid for 30 minutes.

    Security:
        - Same response for unknown and known emails
        - Only the SHA-256 digest of the token is stored
        - Plain token is echoed in `debug` outside production only

    Raises:
        - 400 Bad Request: Missing or malformed email
        - 403 Forbidden: Account inactive
        - 500 Internal Server Error: Storage or email failure
    """
    use_case = RequestPasswordResetUseCase(uow, email_sender, settings)
    result = await use_case.execute(request.email)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


class ValidateResetTokenRequest(BaseModel):
    """
    Validate reset token HTTP request payload
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")


@router.post(
    "/validate-token",
    status_code=status.HTTP_200_OK,
    response_model=ValidateResetTokenResponse,
)
async def validate_reset_token(
    request: ValidateResetTokenRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Validate Password Reset Token

    Confirms a token is usable and returns the account email. Does not
    consume the token.

    Raises:
        - 400 Bad Request: Missing, invalid or expired token
        - 500 Internal Server Error: Storage failure
    """
    use_case = ValidateResetTokenUseCase(uow)
    result = await use_case.execute(request.token)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload

    Password length is checked by the use case so the error carries
    INVALID_PASSWORD.
    """

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(
        ..., alias="newPassword", min_length=1, description="New password (min 8 chars)"
    )


@router.post("/reset", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: PasswordResetSettings = Depends(get_password_reset_settings),
):
    """
    Reset Password

    Sets the new password and invalidates the token in the same update.
    Failed login counters and lockouts are cleared.

    Raises:
        - 400 Bad Request: Missing fields, password too short, invalid or expired token
        - 500 Internal Server Error: Storage failure
    """
    use_case = ResetPasswordUseCase(uow, settings)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value
