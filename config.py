"""
Runtime configuration

Values come from environment variables, falling back to a ``.env`` file in
the working directory. get_settings() builds them once and reuses the
result for the life of the process.
"""

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "https://inflective-61d79.web.app",
    "https://inflective-61d79.firebaseapp.com",
]

CLUSTER_HOST = "cluster0.yyrxfdz.mongodb.net"


class Settings(BaseSettings):
    database_url: str = "mongodb://localhost:27017"
    database_name: str = "InflectiveDB"
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    access_token_secret: str = "supersecretkey"
    port: int = 5000
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "NODE_ENV"),
    )
    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_ORIGINS))
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    @model_validator(mode="after")
    def _cluster_url(self):
        # An explicit DATABASE_URL always wins over the hosted cluster credentials
        if "database_url" not in self.model_fields_set and self.db_user and self.db_pass:
            self.database_url = (
                f"mongodb+srv://{self.db_user}:{self.db_pass}@{CLUSTER_HOST}/"
                "?retryWrites=true&w=majority&appName=Cluster0"
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
