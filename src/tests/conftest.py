from datetime import datetime

import pytest

from ndate.config import ENV_FORMAT, ENV_MAX_LUNAR_SEARCH, ENV_UTC_OFFSET, ResolverConfig
from ndate.logging_setup import reset_logging
from ndate.resolver import DatePhraseResolver
from ndate.utils.date_utils import fixed_offset

# Every fixed-clock test reasons from this day unless it pins another one.
DEFAULT_TODAY = "2025-02-01"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's NDATE_* overrides out of the tests."""
    for name in (ENV_FORMAT, ENV_MAX_LUNAR_SEARCH, ENV_UTC_OFFSET):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixed_clock():
    """Build a clock returning `today` (YYYY-MM-DD) at hh:mm, UTC+8."""
    def _make(today: str = DEFAULT_TODAY, hour: int = 10, minute: int = 30):
        pinned = datetime.fromisoformat(today).replace(hour=hour, minute=minute, tzinfo=fixed_offset(8))
        return lambda: pinned
    return _make


@pytest.fixture
def make_resolver(fixed_clock):
    """Resolver with a pinned clock; keyword args go to ResolverConfig."""
    def _make(today: str = DEFAULT_TODAY, **config):
        return DatePhraseResolver(ResolverConfig(**config), clock=fixed_clock(today))
    return _make


@pytest.fixture
def fresh_logging():
    reset_logging()
    yield
    reset_logging()
