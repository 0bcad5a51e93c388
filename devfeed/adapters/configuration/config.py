# devfeed/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import PostgresDsn, Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings

MIN_SECRET_BYTES = 32
# Token lifetime bounds in milliseconds. Tokens carry whole seconds, so anything
# under a second would be issued already expired.
MIN_TOKEN_TTL_MS = 1_000
MAX_TOKEN_TTL_MS = 365 * 86_400_000
SYMMETRIC_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Database
    DB_DRIVER: str = "asyncpg"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "devfeed"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = Field(None, validate_default=True)

    # Auth
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION: int = 86_400_000  # milliseconds
    BCRYPT_ROUNDS: int = 12

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        return str(PostgresDsn.build(
            scheme=f"postgresql+{data.get('DB_DRIVER', 'asyncpg')}",
            username=data["POSTGRES_USER"],
            password=data["POSTGRES_PASSWORD"],
            host=data["POSTGRES_HOST"],
            port=data["POSTGRES_PORT"],
            path=data["POSTGRES_DB"],
        ))

    @field_validator("JWT_SECRET")
    def validate_jwt_secret(cls, v: str) -> str:
        """The HMAC key must be non-blank and at least 32 bytes long."""
        if not v or not v.strip():
            raise ValueError("JWT_SECRET must not be empty")
        if len(v.encode("utf-8")) < MIN_SECRET_BYTES:
            raise ValueError(f"JWT_SECRET must be at least {MIN_SECRET_BYTES} bytes")
        return v

    @field_validator("JWT_ALGORITHM", mode="before")
    def validate_jwt_algorithm(cls, v: str) -> str:
        alg = v.upper()
        if alg not in SYMMETRIC_ALGORITHMS:
            raise ValueError(f"JWT_ALGORITHM must be one of {', '.join(SYMMETRIC_ALGORITHMS)}")
        return alg

    @field_validator("JWT_EXPIRATION")
    def validate_jwt_expiration(cls, v: int) -> int:
        if not MIN_TOKEN_TTL_MS <= v <= MAX_TOKEN_TTL_MS:
            raise ValueError(
                f"JWT_EXPIRATION must be between {MIN_TOKEN_TTL_MS} and {MAX_TOKEN_TTL_MS} milliseconds"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Make sure the value is a level known to logging."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @property
    def token_ttl_seconds(self) -> int:
        return self.JWT_EXPIRATION // 1000

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
