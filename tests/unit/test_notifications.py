"""Unit tests for diagnostic sinks."""

import logging

import pytest

from bookmark_search.engine import SearchEngine
from bookmark_search.notifications import LoggingSink, RecordingSink


pytestmark = pytest.mark.unit


def test_logging_sink_forwards_level_and_context(caplog):
    with caplog.at_level(logging.DEBUG, logger="bookmark_search.engine"):
        LoggingSink().notify("error", "load_dataset failed", operation="load_dataset")

    (record,) = caplog.records
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "load_dataset failed"
    assert record.operation == "load_dataset"


def test_engine_logs_through_default_sink(caplog):
    with caplog.at_level(logging.INFO, logger="bookmark_search.engine"):
        engine = SearchEngine()
        engine.load_dataset(b"\xff")

    messages = [record.getMessage() for record in caplog.records if record.name == "bookmark_search.engine"]
    assert messages == ["building search engine", "load_dataset failed at turning bytes into string"]


def test_recording_sink_filters_by_level():
    sink = RecordingSink()
    sink.notify("info", "a")
    sink.notify("error", "b", detail=1)

    assert sink.messages() == ["a", "b"]
    assert sink.messages("error") == ["b"]
    assert sink.notifications[1] == ("error", "b", {"detail": 1})
