import pytest
from pydantic import ValidationError

from poe_trade.config import Settings


def test_defaults_point_at_official_api() -> None:
    settings = Settings(_env_file=None)
    assert settings.api_base_url == "https://www.pathofexile.com/api/trade/"
    assert settings.exchange_base_url == "https://www.pathofexile.com/trade/exchange/"
    assert settings.retry_interval_seconds == 60


def test_base_urls_gain_trailing_slash() -> None:
    settings = Settings(_env_file=None, search_base_url="https://example.com/trade/search")
    assert settings.search_base_url == "https://example.com/trade/search/"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POE_TRADE_RETRY_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("POE_TRADE_LEAGUE", "Hardcore")
    settings = Settings(_env_file=None)
    assert settings.retry_interval_seconds == 5
    assert settings.league == "Hardcore"


@pytest.mark.parametrize("interval", [0, -1])
def test_retry_interval_must_be_positive(interval: float) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, retry_interval_seconds=interval)
