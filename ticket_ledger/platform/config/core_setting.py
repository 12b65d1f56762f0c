import json
from pathlib import Path
from typing import Annotated, List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Ticket Ledger'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'ticket_ledger'

    # Full async URL override (e.g. sqlite+aiosqlite:///./ledger.db)
    DATABASE_URL: str = ''

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a free connection
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_PRE_PING: bool = True
    DB_COMMAND_TIMEOUT: float = 30.0  # asyncpg per-statement timeout (seconds)
    SQLITE_BUSY_TIMEOUT_SECONDS: float = 15.0

    # Pagination
    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100

    # Refunds
    # Refunds paid with these methods are settled to the credit ledger
    CREDIT_SETTLED_PAYMENT_METHODS: Annotated[List[str], NoDecode] = ['credits', 'card']
    DEFAULT_REFUND_WINDOW_DAYS: int = 1

    @field_validator('CREDIT_SETTLED_PAYMENT_METHODS', mode='before')
    @classmethod
    def assemble_payment_methods(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str):
            if not v.startswith('['):
                return [i.strip().lower() for i in v.split(',') if i.strip()]
            v = json.loads(v)
        if isinstance(v, list):
            return [str(i).lower() for i in v]
        return ['credits', 'card']

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )


settings = Settings()  # type: ignore
