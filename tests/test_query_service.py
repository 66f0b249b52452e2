from __future__ import annotations

import logging

from citysuggest.application import (
    FAILURE_INTERNAL,
    FAILURE_VALIDATION,
    QueryService,
    SuggestionsResult,
)
from citysuggest.ranking import Ranker, TokenRanker


class FailingRanker:
    def __init__(self) -> None:
        self.calls = 0

    def rank(self, query, latitude=None, longitude=None):
        self.calls += 1
        raise RuntimeError("fake exception")


class RecordingRanker:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def rank(self, query, latitude=None, longitude=None):
        self.calls.append((query, latitude, longitude))
        return []


def test_ranker_implementations_satisfy_protocol(container):
    assert isinstance(TokenRanker(container.dataset), Ranker)
    assert isinstance(FailingRanker(), Ranker)


def test_get_suggestions_returns_ranked_results(container):
    result = container.query_service.get_suggestions("Montreal")

    assert isinstance(result, SuggestionsResult)
    assert result.ok
    assert result.suggestions[0].name == "Montréal, QC, Canada"


def test_get_suggestions_returns_empty_tuple_without_matches(container):
    result = container.query_service.get_suggestions("Atlantis")

    assert result.ok
    assert result.suggestions == ()


def test_blank_query_is_rejected_before_ranking():
    ranker = RecordingRanker()
    service = QueryService(ranker)

    result = service.get_suggestions("   ")

    assert result.failure == FAILURE_VALIDATION
    assert ranker.calls == []


def test_half_location_is_rejected_before_ranking():
    ranker = RecordingRanker()
    service = QueryService(ranker)

    result = service.get_suggestions("York", latitude=45.0)

    assert not result.ok
    assert result.failure == FAILURE_VALIDATION
    assert ranker.calls == []


def test_location_is_forwarded_to_ranker():
    ranker = RecordingRanker()
    service = QueryService(ranker)

    result = service.get_suggestions("York", 45.0, -73.0)

    assert result.ok
    assert ranker.calls == [("York", 45.0, -73.0)]


def test_ranking_failure_becomes_internal_failure(caplog):
    service = QueryService(FailingRanker())

    with caplog.at_level(logging.ERROR, logger="citysuggest.application.query_service"):
        result = service.get_suggestions("Montreal")

    assert not result.ok
    assert result.failure == FAILURE_INTERNAL
    assert result.suggestions == ()
    assert "fake exception" in caplog.text


def test_failed_query_does_not_affect_later_queries(container):
    failing = QueryService(FailingRanker())
    assert not failing.get_suggestions("Montreal").ok

    result = container.query_service.get_suggestions("Montreal")
    assert result.ok
    assert len(container.dataset) == 16
