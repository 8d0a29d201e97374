from pathlib import Path
from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Event Ticketing'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Logging
    SERVICE_NAME: str = 'ticketing'
    DEPLOY_ENV: str = 'local_dev'
    LOG_DIR: str = str(_PROJECT_ROOT / 'logs')
    LOG_TO_FILE: bool = True  # stdout only in production, the collector ships it
    LOG_FILE_PREFIX: str = ''
    LOG_RETENTION_DAYS: int = 7

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    ALGORITHM: str = 'HS256'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'ticketing'

    # Full override, e.g. sqlite+aiosqlite:///./ticketing.db for local runs
    DATABASE_URL: Optional[str] = None

    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 10  # seconds waiting for a free connection
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # Upper bound for a single statement / lock wait (seconds)
    DB_COMMAND_TIMEOUT: float = 10.0

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Tickets / QR
    QR_IMAGE_WIDTH: int = 400
    QR_IMAGE_HEIGHT: int = 400
    QR_IMAGE_MAX_SIZE: int = 2000  # per side, bounds the decoded RGB buffer
    QR_ATTACHMENT_FILENAME: str = 'tickets-qr.png'

    # Event lifecycle
    EVENT_DEFAULT_TIMEZONE: str = 'Asia/Kathmandu'  # applied to timestamps without offset
    EVENT_EXPIRY_GRACE_DAYS: int = 1
    EXPIRY_SWEEP_INTERVAL_SECONDS: int = 3600
    EXPIRY_SWEEP_ENABLED: bool = True

    # Staff applications
    STAFF_DECISION_BASE_URL: str = 'http://localhost:8000/api/staff'

    # Transactional email (HTTP API, Brevo-compatible payload)
    EMAIL_API_URL: str = 'https://api.brevo.com/v3/smtp/email'
    EMAIL_API_KEY: SecretStr = SecretStr('')
    EMAIL_SENDER_NAME: str = 'Event Ticketing'
    EMAIL_SENDER_ADDRESS: str = 'no-reply@example.com'
    EMAIL_TIMEOUT_SECONDS: float = 10.0


settings = Settings()  # type: ignore
