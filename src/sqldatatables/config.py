"""
Settings for sqldatatables, loaded from the environment or a .env file
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library and demo settings, prefixed with DATATABLES_ in the environment"""

    model_config = SettingsConfigDict(
        env_prefix="DATATABLES_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "mysql+aiomysql://root:@127.0.0.1:3306/datatables"
    echo_sql: bool = False

    # Logging
    log_level: str = "info"

    # Requests
    default_length: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
