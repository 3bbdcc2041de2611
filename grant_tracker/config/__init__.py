import os
from enum import Enum
from pathlib import Path
from typing import Tuple, Type

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from grant_tracker.types import LogFormats, LogLevels

# Publicly known; only acceptable for local development and tests.
INSECURE_DEFAULT_ADMIN_PASSWORD = "grants2024"  # pragma: allowlist secret


class Environment(str, Enum):
    UNIT_TEST = "unit_test"
    LOCAL = "local"
    PROD = "prod"


class _BaseConfig(BaseSettings):
    """
    Stop pydantic-settings from reading configuration from anywhere other than the environment.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (env_settings,)


class _SharedConfig(_BaseConfig):
    """Shared configuration that is acceptable to be present in all environments (but we'd never expect to instantiate
    this class directly).

    Default values here must be acceptable public values, considering they will be in source control. The admin
    password default is the one exception: it keeps a fresh checkout usable, and `create_app` logs a warning if it is
    still in use outside of local/test environments.
    """

    # Flask app
    FLASK_ENV: Environment
    PORT: int = 3000

    # Database
    DB_PATH: str = "./grants.db"

    @property
    def SQLALCHEMY_ENGINES(self) -> dict[str, str]:
        # flask-sqlalchemy-lite puts relative sqlite paths under the instance folder; DB_PATH is relative to the cwd
        return {
            "default": f"sqlite:///{Path(self.DB_PATH).resolve()}",
        }

    # Admin API
    ADMIN_PASSWORD: str = INSECURE_DEFAULT_ADMIN_PASSWORD

    # Logging
    LOG_LEVEL: LogLevels = "INFO"
    LOG_FORMATTER: LogFormats = "json"


class LocalConfig(_SharedConfig):
    """
    Overrides / default configuration for local developer environments.
    """

    FLASK_ENV: Environment = Environment.LOCAL

    # Logging
    LOG_LEVEL: LogLevels = "DEBUG"
    LOG_FORMATTER: LogFormats = "plaintext"


class UnitTestConfig(LocalConfig):
    """
    Overrides / default configuration for running unit tests.
    """

    FLASK_ENV: Environment = Environment.UNIT_TEST
    LOG_LEVEL: LogLevels = "INFO"


class ProdConfig(_SharedConfig):
    """
    Overrides / default configuration for deployed environments.
    """

    FLASK_ENV: Environment = Environment.PROD


def get_settings() -> _SharedConfig:
    environment = os.getenv("FLASK_ENV", Environment.PROD.value)
    match Environment(environment):
        case Environment.UNIT_TEST:
            return UnitTestConfig()  # type: ignore[call-arg]
        case Environment.LOCAL:
            return LocalConfig()  # type: ignore[call-arg]
        case Environment.PROD:
            return ProdConfig()  # type: ignore[call-arg]

    raise ValueError(f"Unknown environment: {environment}")
