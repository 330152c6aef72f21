# config.py
"""
Application settings loaded from the environment (and .env when present).

Settings are built once and handed to the pieces that need them; the
billing bridge in particular receives its credentials through its
constructor instead of reading the environment itself.
"""
from decimal import Decimal
from functools import lru_cache
from typing import List, Optional, Union
from urllib.parse import quote_plus

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SQLITE_URL = "sqlite:///./rentledger.db"


class Settings(BaseSettings):
     model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore", frozen=True)

     # ---- Database ----
     # DATABASE_URL wins; otherwise DB_* describe a SQL Server, else local SQLite
     database_url: Optional[str] = None
     db_server: Optional[str] = None
     db_port: str = "1433"
     db_user: Optional[str] = None
     db_pass: Optional[str] = None
     db_name: Optional[str] = None
     sql_echo: bool = False
     auto_create_tables: bool = True
     seed_demo_data: bool = False

     # ---- CORS (comma separated in the environment) ----
     cors_origins: Union[List[str], str] = []

     # ---- Billing provider ----
     billing_api_key: Optional[str] = None
     billing_base_url: str = "https://sandbox.asaas.com/api/v3"
     billing_timeout_seconds: float = 20.0
     billing_max_retries: int = 3
     billing_owner_split_percent: Decimal = Decimal("90")
     billing_webhook_token: Optional[str] = None

     @field_validator("cors_origins", mode="before")
     @classmethod
     def _split_origins(cls, value):
          if isinstance(value, str):
               return [origin.strip() for origin in value.split(",") if origin.strip()]
          return value

     def model_post_init(self, __context) -> None:
          if self.database_url:
               return
          if self.db_server:
               user = quote_plus(self.db_user or "")
               password = quote_plus(self.db_pass or "")
               url = f"mssql+pymssql://{user}:{password}@{self.db_server}:{self.db_port}/{self.db_name}"
          else:
               url = SQLITE_URL
          object.__setattr__(self, "database_url", url)


@lru_cache
def get_settings() -> Settings:
     """FastAPI dependency / accessor for the process-wide settings."""
     return Settings()
