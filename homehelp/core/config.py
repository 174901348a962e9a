# homehelp/core/config.py
from pydantic_settings import BaseSettings
from typing import Literal, Optional

class Settings(BaseSettings):
    """
    Application settings, validated by Pydantic.
    Secrets come from environment variables or the .env file.
    """
    # --- environment ---
    ENVIRONMENT: Literal["dev", "test", "prod"] = "prod"
    PROJECT_NAME: str = "HomeHelp Backend"
    LOG_LEVEL: str = "INFO"

    # --- security ---
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # --- app server ---
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost,http://localhost:3000,http://localhost:5173"

    # --- database ---
    MYSQL_USERNAME: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    DB_NAME: str = "homehelp"
    # Full SQLAlchemy URL, takes precedence over the MYSQL_* values
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = False

    @property
    def DATABASE_URI(self) -> str:
        """Computed: explicit DATABASE_URL or a MySQL URI built from the parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+asyncmy://{self.MYSQL_USERNAME}:{self.MYSQL_PASSWORD}@"
            f"{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.DB_NAME}"
        )

    # --- redis ---
    REDIS_URL: str = "redis://localhost:6379"
    CACHE_ENABLED: bool = True
    CACHE_EXPIRE_SECONDS: int = 300
    TASK_QUEUE_ENABLED: bool = False

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        case_sensitive = True
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
