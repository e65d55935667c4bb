from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from app.core.config import (
    Settings,
    get_settings,
    local_now,
    parse_comma_separated_origins,
)


class TestParseOrigins:
    def test_empty(self):
        assert parse_comma_separated_origins("") == []

    def test_multiple_with_blanks(self):
        origins = parse_comma_separated_origins(
            "http://localhost:3000, https://app.example.com ,"
        )
        assert [str(o).rstrip("/") for o in origins] == [
            "http://localhost:3000",
            "https://app.example.com",
        ]

    def test_invalid_origin(self):
        with pytest.raises(ValueError, match="Invalid CORS origin 'not a url'"):
            parse_comma_separated_origins("not a url")


class TestSettings:
    def test_defaults(self):
        settings = Settings(DATABASE_URL="sqlite://", SECRET_KEY="k")  # type: ignore[arg-type]
        assert settings.ALGORITHM == "HS256"
        assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 30
        assert settings.TIMEZONE == "America/Sao_Paulo"

    def test_secret_not_in_repr(self):
        settings = Settings(DATABASE_URL="sqlite://", SECRET_KEY="super-secret")  # type: ignore[arg-type]
        assert "super-secret" not in repr(settings)

    def test_today_uses_timezone(self):
        settings = Settings(DATABASE_URL="sqlite://", SECRET_KEY="k", TIMEZONE="UTC")  # type: ignore[arg-type]
        assert isinstance(settings.today(), date)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_env_override(self):
        with patch.dict("os.environ", {"TIMEZONE": "Europe/Lisbon"}):
            get_settings.cache_clear()
            try:
                assert get_settings().TIMEZONE == "Europe/Lisbon"
            finally:
                get_settings.cache_clear()


class TestClock:
    # 22:30 on 31 May in Sao Paulo
    UTC_INSTANT = datetime(2024, 6, 1, 1, 30, tzinfo=timezone.utc)

    @patch("app.core.config.datetime")
    def test_now_is_wall_clock_in_timezone(self, mock_datetime):
        mock_datetime.now.return_value = self.UTC_INSTANT
        settings = Settings(DATABASE_URL="sqlite://", SECRET_KEY="k")  # type: ignore[arg-type]

        assert settings.now() == datetime(2024, 5, 31, 22, 30)
        assert settings.today() == date(2024, 5, 31)

    @patch("app.core.config.datetime")
    def test_utc_zone(self, mock_datetime):
        mock_datetime.now.return_value = self.UTC_INSTANT
        settings = Settings(DATABASE_URL="sqlite://", SECRET_KEY="k", TIMEZONE="UTC")  # type: ignore[arg-type]

        assert settings.today() == date(2024, 6, 1)

    @patch("app.core.config.datetime")
    def test_local_now_uses_cached_settings(self, mock_datetime):
        mock_datetime.now.return_value = self.UTC_INSTANT

        assert local_now() == datetime(2024, 5, 31, 22, 30)
