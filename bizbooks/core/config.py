from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from the process + optionally from .env
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="bizbooks", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Storage
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./bizbooks.db",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    # Auth (demo credentials; tokens are signed HS256 JWTs)
    JWT_SECRET: str = Field(default="change-this-in-production", validation_alias=AliasChoices("JWT_SECRET", "jwt_secret"))
    JWT_ALGORITHM: str = Field(default="HS256", validation_alias=AliasChoices("JWT_ALGORITHM", "jwt_algorithm"))
    JWT_ACCESS_EXPIRE_MINUTES: int = Field(
        default=12 * 60,
        validation_alias=AliasChoices("JWT_ACCESS_EXPIRE_MINUTES", "jwt_access_expire_minutes"),
    )
    DEMO_PASSWORD: str = Field(default="demo123", validation_alias=AliasChoices("DEMO_PASSWORD", "demo_password"))

    # Expense attachments
    MAX_ATTACHMENT_BYTES: int = Field(
        default=5 * 1024 * 1024,
        validation_alias=AliasChoices("MAX_ATTACHMENT_BYTES", "max_attachment_bytes"),
    )

    # Load the demo firms / clients / invoices into an empty store on startup
    SEED_DEMO_DATA: bool = Field(
        default=True,
        validation_alias=AliasChoices("SEED_DEMO_DATA", "DEMO_MODE"),
    )


settings = Settings()
