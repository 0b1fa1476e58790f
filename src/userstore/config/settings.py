from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase

class Settings(BaseSettings):
    """
    Application settings loaded from environment.

    Every field has a default that points at a local MySQL instance
    (`root` with an empty password, database `practice`), so the live backend
    works out of the box against a throwaway server and tests that never touch
    the network can build Settings without any environment at all.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration (live backend)
    DB_DIALECT: str = "mysql"
    DB_DRIVER: str = "aiomysql"
    DB_USERNAME: str = "root"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "practice"

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Disposable container backend
    CONTAINER_IMAGE: str = "mysql:8"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/userstore")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the SQLAlchemy URL of the live database.

        Shape: ``{dialect}+{driver}://{user}:{password}@{host}:{port}/{db}``.
        An empty password yields ``root:@localhost``, which both SQLAlchemy and
        the MySQL drivers accept.
        """
        return (
            f"{self.DB_DIALECT}+{self.DB_DRIVER}://"
            f"{self.DB_USERNAME}:{self.DB_PASSWORD}@"
            f"{self.DB_HOST}:{self.DB_PORT}/"
            f"{self.DB_NAME}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.

        The logging system expects level names in uppercase ("DEBUG", "INFO"),
        so `LOG_LEVEL=debug` in a .env file is accepted as well.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", "DB_DIALECT", mode="before")
    def normalize_lowercase(cls, v: str | None) -> str | None:
        """
        Normalize LOG_FORMAT and DB_DIALECT to lowercase.
        """
        return to_lowercase(v)

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        # Load environment variables from the .env file at the repository root.
        env_file=str(Path(__file__).resolve().parents[3] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is good for performance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
