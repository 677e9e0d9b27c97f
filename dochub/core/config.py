
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "DocHub API"
    app_env: str = Field(default="development", alias="APP_ENV")
    frontend_url: str = "http://localhost:4000"

    # Database (SQLite for local dev; any async SQLAlchemy URL in production)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./dochub_dev.db",
        alias="DATABASE_URL",
    )

    # Auth
    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expire_minutes: int = Field(default=60, alias="JWT_EXPIRE_MINUTES")
    password_hash_iterations: int = Field(
        default=100_000, alias="PASSWORD_HASH_ITERATIONS",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
