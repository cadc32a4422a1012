# portfolio_contact/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_title: str = Field(default="Portfolio Contact API", alias="API_TITLE")
    cors_origins: str = Field(default="http://localhost:5173", alias="CORS_ORIGINS")

    # "development" exposes storage error detail in 500 responses
    app_env: str = Field(default="production", alias="APP_ENV")

    # Hosted Postgres connection string; no default, startup fails without it
    database_url: str = Field(alias="DATABASE_URL")
    db_pool_min_size: int = Field(default=1, alias="DB_POOL_MIN_SIZE")
    db_pool_max_size: int = Field(default=10, alias="DB_POOL_MAX_SIZE")

    # Run db/init/*.sql in the app lifespan
    auto_create_schema: bool = Field(default=False, alias="AUTO_CREATE_SCHEMA")

    # SMTP relay used for operator notifications
    email_host: Optional[str] = Field(default=None, alias="EMAIL_HOST")
    email_port: int = Field(default=587, alias="EMAIL_PORT")
    email_user: Optional[str] = Field(default=None, alias="EMAIL_USER")
    email_pass: Optional[str] = Field(default=None, alias="EMAIL_PASS")
    email_from: Optional[str] = Field(default=None, alias="EMAIL_FROM")
    email_to: Optional[str] = Field(default=None, alias="EMAIL_TO")

    @property
    def is_development(self) -> bool:
        return self.app_env.strip().lower() == "development"

    @property
    def email_configured(self) -> bool:
        return bool(self.email_host and self.email_from and self.email_to)

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()
