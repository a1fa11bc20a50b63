import logging
from functools import cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # logging config
    log_level: int = logging.DEBUG
    log_format: str = "%(asctime)s [%(process)d] [%(levelname)s] %(name)-16s %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"

    # observability config
    metrics_enabled: bool = False
    victoria_metrics_host: str | None = None
    metrics_flush_interval_seconds: int = 30

    # connection string for the marketplace database
    database_url: str = "sqlite:///hamfest.db"

    # page sizes used when querying the store
    listings_page_size: int = 24
    ratings_page_size: int = 5

    # autocomplete only activates once the query is at least this long
    suggestion_min_length: int = 2
    # closed lists (e.g. country names) suggest from the first character
    country_suggestion_min_length: int = 1

    # durable client-side preferences (view mode) are stored in this JSON file
    client_storage_path: str = ".hamfest/client_storage.json"


@cache
def get_settings() -> Settings:
    return Settings()
