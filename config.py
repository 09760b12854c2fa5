import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("APP_CONFIG_FILE", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

PRODUCTION_ENVIRONMENTS = ("production", "prod")


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./maintenance.db")
    DB_TIMEOUT_SECONDS = float(data.get("DB_TIMEOUT_SECONDS", 10))
    # Mount point of the password reset and admin routers, e.g. "/api"
    API_PREFIX = str(data.get("API_PREFIX", "")).rstrip("/")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    # Unset means production: the reset token is only echoed when a non-production environment is named
    ENVIRONMENT = str(data.get("ENVIRONMENT", "production")).lower()
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Password reset
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    PASSWORD_RESET_TTL_MINUTES = int(data.get("PASSWORD_RESET_TTL_MINUTES", 30))
    PASSWORD_MIN_LENGTH = max(8, int(data.get("PASSWORD_MIN_LENGTH", 8)))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Email delivery
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "console")
    EMAIL_FROM = data.get("EMAIL_FROM", "noreply@api.com")
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10))
    SMTP_HOST = data.get("SMTP_HOST", "localhost")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))

    # Rate limiting
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", 1))
    RATE_LIMIT_BACKEND = data.get("RATE_LIMIT_BACKEND", "memory")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    PASSWORD_RESET_RATE_LIMIT_MAX_REQUESTS = int(
        data.get("PASSWORD_RESET_RATE_LIMIT_MAX_REQUESTS", 5)
    )
    PASSWORD_RESET_RATE_LIMIT_WINDOW_SECONDS = int(
        data.get("PASSWORD_RESET_RATE_LIMIT_WINDOW_SECONDS", 3600)
    )

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT in PRODUCTION_ENVIRONMENTS
