"""Application settings loaded from .env file."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Connection defaults
    DB_HOST: str = "localhost"
    DB_PORT: int = 1433
    DB_SCHEMA: str = "dbo"
    DB_DRIVER: str = "mssql+pymssql"

    # Output
    OUTPUT_DIR: str = "."
    SCRIPTS_DIR: str = "scripts"
    TABLES_SUBDIR: str = "tables"
    TOOL_NAME: str = "tablescript"

    # Logging
    LOG_LEVEL: str = "WARNING"


settings = Settings()
