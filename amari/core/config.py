
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Amari Experience API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:5173"
    max_upload_size_mb: int = 4

    # Database (PostgreSQL via asyncpg, or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./amari_dev.db",
        alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Session cookie (issued by the auth service, verified here)
    jwt_secret: str | None = Field(default=None, alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    session_cookie_name: str = Field(default="amari_session", alias="SESSION_COOKIE_NAME")
    session_ttl_days: int = Field(default=7, alias="SESSION_TTL_DAYS")

    # Public directory defaults
    vendor_placeholder_image: str = Field(
        default="/beach.jpeg", alias="VENDOR_PLACEHOLDER_IMAGE",
    )
    default_price_range: str = Field(default="$$$", alias="DEFAULT_PRICE_RANGE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

settings = Settings()
