"""Pydantic schema for SQL Server connection requests."""
from typing import Optional
from pydantic import BaseModel, Field
from sqlalchemy.engine import URL

from tablescript.config import settings


class ConnectionRequest(BaseModel):
    host: str = Field(default_factory=lambda: settings.DB_HOST, description="Server hostname or IP")
    port: int = Field(default_factory=lambda: settings.DB_PORT, description="Server port")
    instance_name: Optional[str] = Field(None, description="Named instance, if any")
    database: str = Field("", description="Database name")
    username: str = Field("", description="Username")
    password: str = Field("", description="Password")
    schema_name: str = Field(default_factory=lambda: settings.DB_SCHEMA, description="Schema to script")

    def has_connection_info(self) -> bool:
        return bool(self.database and self.username and self.password)

    def get_sqlalchemy_url(self) -> URL:
        host = f"{self.host}\\{self.instance_name}" if self.instance_name else self.host
        return URL.create(
            settings.DB_DRIVER,
            username=self.username,
            password=self.password,
            host=host,
            port=self.port,
            database=self.database,
        )

    def describe(self) -> str:
        """Connection target without credentials, for display."""
        host = f"{self.host}\\{self.instance_name}" if self.instance_name else self.host
        return f"{host}:{self.port}/{self.database}"
