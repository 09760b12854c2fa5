from functools import lru_cache

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_sender import build_email_sender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.use_cases.password_reset import PasswordResetSettings


def _engine_options(db_uri: str, timeout: float) -> dict:
    # SQLite waits on its file lock, pooled drivers wait on a free connection
    if db_uri.startswith("sqlite"):
        return {"connect_args": {"timeout": timeout}}
    return {"pool_timeout": timeout, "pool_pre_ping": True}


engine = create_async_engine(
    ApplicationConfig.DB_URI,
    echo=False,
    future=True,
    **_engine_options(ApplicationConfig.DB_URI, ApplicationConfig.DB_TIMEOUT_SECONDS),
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_email_sender() -> IEmailSender:
    return build_email_sender(ApplicationConfig)


def get_password_reset_settings() -> PasswordResetSettings:
    return PasswordResetSettings.from_config(ApplicationConfig)
