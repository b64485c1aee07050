"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from lazychain import PipelineSettings, get_settings


@pytest.fixture(autouse=True, scope="session")
def isolated_environment():
    """Keep LAZYCHAIN_* variables from the calling shell out of the test run.

    Session scoped so hypothesis tests do not see a function-scoped fixture.
    """
    with pytest.MonkeyPatch.context() as mp:
        mp.delenv("LAZYCHAIN_TAKE_ALL_LIMIT", raising=False)
        get_settings.cache_clear()
        yield
    get_settings.cache_clear()


@pytest.fixture
def settings_cache():
    """Clear the cached default settings around a test that changes the environment."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


@pytest.fixture
def limited_settings():
    """Settings capping take_all() at three results."""
    return PipelineSettings(take_all_limit=3)


@pytest.fixture
def sample():
    """The sample source used throughout the pipeline tests."""
    return [1, 2, 3, 4, 5, 6, 7, 8, 9, 0]


class PullCounter:
    """Generator source that records how many elements were pulled."""

    def __init__(self, items):
        self.items = list(items)
        self.pulled = 0

    def __iter__(self):
        for item in self.items:
            self.pulled += 1
            yield item


@pytest.fixture
def counter_factory():
    return PullCounter
