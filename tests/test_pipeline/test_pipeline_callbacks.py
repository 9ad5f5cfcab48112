"""Tests for notify_callbacks."""

from __future__ import annotations

import logging

import pytest

from rag_advisors.models.query import Query
from rag_advisors.pipeline import PipelineCallback, notify_callbacks

logger = logging.getLogger("tests.pipeline_callbacks")


class StartRecorder:
    def __init__(self) -> None:
        self.queries: list[Query] = []

    def on_pipeline_start(self, query: Query) -> None:
        self.queries.append(query)


class ExplodingStart:
    def on_pipeline_start(self, query: Query) -> None:
        msg = "observer failed"
        raise RuntimeError(msg)


class TestNotifyCallbacks:
    def test_delivers_payload(self) -> None:
        recorder = StartRecorder()
        query = Query(text="q")
        notify_callbacks([recorder], "on_pipeline_start", query, logger=logger)
        assert recorder.queries == [query]

    def test_unhandled_event_skipped(self) -> None:
        recorder = StartRecorder()
        notify_callbacks([recorder, object()], "on_pipeline_end", None, logger=logger)
        assert recorder.queries == []

    def test_failure_logged_and_delivery_continues(self, caplog: pytest.LogCaptureFixture) -> None:
        recorder = StartRecorder()
        with caplog.at_level(logging.WARNING, logger="tests.pipeline_callbacks"):
            notify_callbacks(
                [ExplodingStart(), recorder], "on_pipeline_start", Query(text="q"), logger=logger
            )
        assert len(recorder.queries) == 1
        assert any("ExplodingStart.on_pipeline_start failed" in r.message for r in caplog.records)

    def test_unknown_event_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown pipeline event"):
            notify_callbacks([], "on_step_start", logger=logger)

    def test_partial_callback_is_not_a_full_protocol_match(self) -> None:
        assert not isinstance(StartRecorder(), PipelineCallback)
