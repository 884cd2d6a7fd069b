from pathlib import Path
from typing import List

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

    PROJECT_NAME: str = 'Gift Wave'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    SESSION_COOKIE_NAME: str = 'giftwaveauth'

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
    POSTGRES_DB: str = 'gift_wave'

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # asyncpg pool
    ASYNCPG_POOL_MIN_SIZE: int = 2
    ASYNCPG_POOL_MAX_SIZE: int = 10
    ASYNCPG_POOL_COMMAND_TIMEOUT: float = 10.0  # Per-statement timeout (seconds)
    ASYNCPG_POOL_TIMEOUT: float = 10.0  # Connection acquire timeout (seconds)
    ASYNCPG_POOL_MAX_INACTIVE_LIFETIME: float = 300.0
    STORE_TIMEOUT_SECONDS: float = 15.0  # Upper bound for a whole store call

    # OTP
    OTP_LENGTH: int = 6
    OTP_TTL_MINUTES: int = 5
    OTP_MAX_ATTEMPTS: int = 3

    # Sign-in lockout
    MAX_LOGIN_ATTEMPTS: int = 5

    # Media storage
    MEDIA_ROOT: str = 'static/media'
    MEDIA_BASE_URL: str = '/static/media'

    # Rider matching
    DEFAULT_SEARCH_RADIUS_KM: float = 10.0

    # Security audit trail
    SECURITY_EVENT_PAGE_LIMIT: int = 200


settings = Settings()  # type: ignore
