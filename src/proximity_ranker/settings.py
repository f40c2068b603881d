from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    user_agent: str = "proximity-ranker/0.1"
    request_timeout_s: float = 10.0

    # Nominatim asks for no more than one request per second per client
    geocode_delay_s: float = 1.1
    suggest_debounce_s: float = 0.35
    suggestion_limit: int = 5

    # Set country_code to None to geocode without a country restriction
    country_code: Optional[str] = "us"
    country_name: str = "United States"
    country_marker: str = "USA"

    top_k: int = 3

    model_config = SettingsConfigDict(
        env_prefix="PROXIMITY_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
