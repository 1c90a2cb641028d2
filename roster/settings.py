from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    # Database settings (credentials MUST be provided via environment)
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_USER: str
    DB_PASSWORD: SecretStr
    DB_HOST: str = "roster-db"
    DB_PORT: int = 5432
    DB_NAME: str = "roster"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_ECHO: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """Construct the database URL from individual components."""
        if self.DB_DRIVER.startswith("sqlite"):
            return f"{self.DB_DRIVER}:///{self.DB_NAME}"
        password = self.DB_PASSWORD.get_secret_value()
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    # Database initialization settings
    DB_INIT_RETRY_INTERVAL: int = 2
    DB_INIT_MAX_RETRIES: int = 5

    # Pagination defaults
    DEFAULT_PAGE_SIZE: int = 20
    # One of "A" (single call), "B" (dual query), "C" (count skip)
    DEFAULT_PAGINATION_STRATEGY: str = "C"

    # Queries slower than this (seconds) are logged as warnings
    SLOW_QUERY_THRESHOLD: float = 0.1

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str | None = None
    ENVIRONMENT: str = "development"


app_settings = Settings()
