"""Shared test fixtures and configuration."""

import os

import pytest

from bookmark_search.engine import SearchEngine
from bookmark_search.notifications import RecordingSink


SAMPLE_DATASET = (
    "1\0Rust Guide\0https://example.org/rust\n"
    "2\0Go Guide\0https://example.org/go"
).encode()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep BOOKMARK_SEARCH_* variables and a stray .env file out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("BOOKMARK_SEARCH_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(os.path.dirname(__file__))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def engine(sink) -> SearchEngine:
    return SearchEngine(sink=sink)


@pytest.fixture
def loaded_engine(engine) -> SearchEngine:
    engine.load_dataset(SAMPLE_DATASET)
    return engine


@pytest.fixture
def sample_dataset() -> bytes:
    return SAMPLE_DATASET
