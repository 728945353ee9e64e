"""
Pytest configuration and shared fixtures.
"""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from faker import Faker
from freezegun import freeze_time

from scoreboard_bot.config.settings import ScoreboardDefaults, Settings
from scoreboard_bot.core.publisher import ScoreboardPublisher
from scoreboard_bot.services.scoreboard_service import ScoreboardService
from scoreboard_bot.storage.json_store import JsonScoreboardRepository
from tests.fixtures.discord_fakes import FakeChannel, make_interaction

FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def seed_faker():
    """Seed Faker for deterministic test data across runs."""
    Faker.seed(12345)
    yield


@pytest.fixture(autouse=True)
def clear_contextvars():
    """
    Clear structlog contextvars between tests.

    This ensures context doesn't leak between tests.
    """
    from structlog.contextvars import clear_contextvars

    clear_contextvars()
    yield
    clear_contextvars()


@pytest.fixture
def test_settings(monkeypatch, tmp_path: Path) -> Settings:
    """
    Provide test settings with minimal configuration.

    Environment variables are reset per test using monkeypatch.
    """
    for key in ("TOKEN", "CLIENT_ID", "GUILD_ID"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SCOREBOARD_DISCORD__TOKEN", "test_token_12345")
    monkeypatch.setenv("SCOREBOARD_DISCORD__APPLICATION_ID", "222333444555666777")
    monkeypatch.setenv("SCOREBOARD_STORAGE__STATE_FILE", str(tmp_path / "state.json"))
    monkeypatch.setenv("SCOREBOARD_APP_ENV", "testing")

    return Settings(_env_file=None)


@pytest.fixture
def defaults() -> ScoreboardDefaults:
    return ScoreboardDefaults()


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "state.json"


@pytest.fixture
def repository(state_file: Path, defaults: ScoreboardDefaults) -> JsonScoreboardRepository:
    """Loaded repository backed by a temporary state file."""
    repo = JsonScoreboardRepository(state_file, defaults=defaults)
    repo.load()
    return repo


@pytest.fixture
def publisher(repository: JsonScoreboardRepository) -> ScoreboardPublisher:
    return ScoreboardPublisher(repository, now=lambda: FIXED_NOW)


@pytest.fixture
def service(
    repository: JsonScoreboardRepository,
    publisher: ScoreboardPublisher,
    defaults: ScoreboardDefaults,
) -> ScoreboardService:
    return ScoreboardService(repository, publisher=publisher, defaults=defaults)


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def interaction(channel: FakeChannel):
    return make_interaction(channel)


@pytest.fixture
def frozen_time():
    """
    Freeze time for consistent testing.

    Uses freezegun to freeze time at a fixed point.
    """
    with freeze_time("2024-01-15 10:30:00"):
        yield FIXED_NOW
