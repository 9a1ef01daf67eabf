from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Museum Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_TO_FILE: bool = False

    # Museum API (ticket types, time slots, bookings)
    API_BASE_URL: str = 'http://localhost:8000/api/v1'
    API_TIMEOUT_SECONDS: float = 30.0

    # Booking
    BOOKING_SOURCE: str = 'ONLINE'
    MAX_CONCURRENT_AVAILABILITY_PROBES: int = 31  # One month worth of days

    # Fallback locale for ticket names
    BASE_LOCALE: str = 'it'

    @field_validator('MAX_CONCURRENT_AVAILABILITY_PROBES')
    @classmethod
    def check_probe_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError('MAX_CONCURRENT_AVAILABILITY_PROBES must be at least 1')
        return v


settings = Settings()  # type: ignore
