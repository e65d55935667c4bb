from datetime import date, datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo
from pydantic import HttpUrl
from pydantic.types import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_comma_separated_origins(comma_list: str) -> list[HttpUrl]:
    """
    Turn BACKEND_CORS_ORIGINS ("http://a, http://b") into validated URLs.

    Blank entries are skipped; an empty string gives an empty list.

    Raises:
        ValueError: Naming the first origin that is not a valid URL.
    """
    origins = []
    for raw in (comma_list or "").split(","):
        origin = raw.strip()
        if not origin:
            continue
        try:
            origins.append(HttpUrl(origin))
        except Exception as e:
            raise ValueError(f"Invalid CORS origin '{origin}': {e}") from e
    return origins


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: SecretStr
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    BACKEND_CORS_ORIGINS: str = ""
    ENVIRONMENT: str = "development"
    # IANA zone deciding where "today" and "this month" start for the dashboard
    TIMEZONE: str = "America/Sao_Paulo"

    # Values from the environment win over the .env file, which is not committed
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    def now(self) -> datetime:
        """
        Naive wall-clock time in TIMEZONE.

        Row timestamps are stored naive in this zone so that truncating them
        to a date agrees with `today()`.
        """
        utc_now = datetime.now(timezone.utc)
        return utc_now.astimezone(ZoneInfo(self.TIMEZONE)).replace(tzinfo=None)

    def today(self) -> date:
        """Current calendar date in TIMEZONE."""
        return self.now().date()


@lru_cache()
def get_settings():
    """
    Build Settings once per process.

    Tests that change environment variables must call `get_settings.cache_clear()`.
    """
    return Settings()


def local_now() -> datetime:
    """Default factory for `created_at` style columns."""
    return get_settings().now()
