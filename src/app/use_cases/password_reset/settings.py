from pydantic import BaseModel, Field


class PasswordResetSettings(BaseModel):
    """Tunables of the password reset flow, built from ApplicationConfig"""

    ttl_minutes: int = Field(default=30, gt=0)
    frontend_url: str = "http://localhost:3000"
    min_password_length: int = Field(default=8, ge=8)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    # Derived from the deployment environment, never set independently in production
    expose_debug: bool = False

    @classmethod
    def from_config(cls, config) -> "PasswordResetSettings":
        return cls(
            ttl_minutes=config.PASSWORD_RESET_TTL_MINUTES,
            frontend_url=config.FRONTEND_URL,
            min_password_length=config.PASSWORD_MIN_LENGTH,
            bcrypt_rounds=config.BCRYPT_ROUNDS,
            expose_debug=not config.is_production(),
        )
