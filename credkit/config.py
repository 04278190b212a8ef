"""
Settings loaded from ``CREDKIT_*`` environment variables and ``.env``.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from credkit.adapters.bcrypt_hasher import DEFAULT_ROUNDS, MAX_ROUNDS, MIN_ROUNDS
from credkit.domain.session import DEFAULT_TOKEN_BYTES, MIN_TOKEN_BYTES

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class HashingConfig(BaseSettings):
    rounds: int = Field(
        DEFAULT_ROUNDS, ge=MIN_ROUNDS, le=MAX_ROUNDS, alias="CREDKIT_BCRYPT_ROUNDS"
    )

    model_config = _SECTION_CONFIG


class SessionConfig(BaseSettings):
    ttl_seconds: int = Field(3600, ge=1, alias="CREDKIT_SESSION_TTL")
    token_bytes: int = Field(DEFAULT_TOKEN_BYTES, ge=MIN_TOKEN_BYTES, alias="CREDKIT_TOKEN_BYTES")
    expiry_grace_seconds: int = Field(300, ge=0, alias="CREDKIT_SESSION_EXPIRY_GRACE")

    model_config = _SECTION_CONFIG


class RedisConfig(BaseSettings):
    url: str = Field("redis://localhost:6379/0", alias="CREDKIT_REDIS_URL")
    prefix: str = Field("credkit:", alias="CREDKIT_REDIS_PREFIX")

    model_config = _SECTION_CONFIG


class DynamoDBConfig(BaseSettings):
    users_table: str = Field("credkit-users", alias="CREDKIT_DYNAMODB_USERS_TABLE")
    sessions_table: str = Field("credkit-sessions", alias="CREDKIT_DYNAMODB_SESSIONS_TABLE")
    region_name: str = Field("us-east-1", alias="CREDKIT_DYNAMODB_REGION")

    model_config = _SECTION_CONFIG


def _hashing_config_factory() -> HashingConfig:
    return HashingConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _redis_config_factory() -> RedisConfig:
    return RedisConfig()  # type: ignore[call-arg]


def _dynamodb_config_factory() -> DynamoDBConfig:
    return DynamoDBConfig()  # type: ignore[call-arg]


class CredkitSettings(BaseSettings):
    log_level: str = Field("INFO", alias="CREDKIT_LOG_LEVEL")

    hashing: HashingConfig = Field(default_factory=_hashing_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    redis: RedisConfig = Field(default_factory=_redis_config_factory)
    dynamodb: DynamoDBConfig = Field(default_factory=_dynamodb_config_factory)

    model_config = _SECTION_CONFIG

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> CredkitSettings:
    return CredkitSettings()  # type: ignore[call-arg]
