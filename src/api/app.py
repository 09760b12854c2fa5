from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
from .middleware import RateLimitMiddleware, RequestLoggingMiddleware, build_rate_limit_backend
import logging

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO"):
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Prevent duplicate handlers
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = exc.to_dict()
    logger.warning(f"Client error on {request.url.path}: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = exc.to_dict()
    logger.error(f"Server error on {request.url.path}: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # Request bodies carry tokens and passwords, only field locations are reported
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
    message = f"Invalid or missing fields: {', '.join(f for f in fields if f)}" if fields else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": {"code": "VALIDATION_ERROR", "message": message}},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)

    if ApplicationConfig.is_production() and str(ApplicationConfig.EMAIL_BACKEND).lower() == "console":
        raise RuntimeError("EMAIL_BACKEND=console is not allowed in production")

    app = FastAPI(title="Vehicle Maintenance API - Password Reset", version="0.1.0")
    app.state.config = ApplicationConfig

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if ApplicationConfig.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimitMiddleware,
            backend=build_rate_limit_backend(ApplicationConfig),
            path_prefixes=[f"{ApplicationConfig.API_PREFIX}/password-reset/"],
            max_requests=ApplicationConfig.PASSWORD_RESET_RATE_LIMIT_MAX_REQUESTS,
            window_seconds=ApplicationConfig.PASSWORD_RESET_RATE_LIMIT_WINDOW_SECONDS,
            key_prefix="rl:password-reset",
        )

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    from src.api.routes import admin, health_check, password_reset

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(
        password_reset.router, prefix=ApplicationConfig.API_PREFIX, tags=["Password Reset"]
    )
    app.include_router(admin.router, prefix=ApplicationConfig.API_PREFIX, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    if not ApplicationConfig.is_production():
        logger.warning("Running in %s mode: reset tokens are echoed in responses", ApplicationConfig.ENVIRONMENT)

    return app
