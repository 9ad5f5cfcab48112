"""Tests for MultiQueryExpander."""

from __future__ import annotations

import pytest

from rag_advisors.exceptions import ConfigurationError, TransformationError
from rag_advisors.models.query import Query
from rag_advisors.protocols.query_transform import QueryExpander
from rag_advisors.query.expander import MultiQueryExpander


def _variations(text: str, n: int) -> list[str]:
    return [f"{text} variant {i}" for i in range(n)]


class TestMultiQueryExpander:
    """Fan-out behaviour of the multi-query expander."""

    def test_protocol_compliance(self) -> None:
        assert isinstance(MultiQueryExpander(_variations), QueryExpander)

    def test_include_original_yields_exact_count(self) -> None:
        expander = MultiQueryExpander(_variations, number_of_queries=3, include_original=True)
        result = expander.expand(Query(text="Q"))
        assert len(result) == 3
        assert result[0].text == "Q"
        assert any(q.text == "Q" for q in result)

    def test_without_original(self) -> None:
        expander = MultiQueryExpander(_variations, number_of_queries=3, include_original=False)
        result = expander.expand(Query(text="Q"))
        assert len(result) == 3
        assert "Q" not in [q.text for q in result]

    def test_requests_only_missing_variations(self) -> None:
        requested: list[int] = []

        def generate(text: str, n: int) -> list[str]:
            requested.append(n)
            return _variations(text, n)

        MultiQueryExpander(generate, number_of_queries=4, include_original=True).expand(Query(text="Q"))
        assert requested == [3]

    def test_single_query_with_original_skips_generation(self) -> None:
        def generate(text: str, n: int) -> list[str]:
            raise AssertionError("should not be called")

        query = Query(text="Q")
        assert MultiQueryExpander(generate, number_of_queries=1, include_original=True).expand(query) == [query]

    def test_short_result_falls_back_to_original(self) -> None:
        expander = MultiQueryExpander(lambda text, n: ["only one"], number_of_queries=3)
        query = Query(text="Q")
        assert expander.expand(query) == [query]

    def test_extra_variations_truncated(self) -> None:
        expander = MultiQueryExpander(lambda text, n: _variations(text, n + 5), number_of_queries=2)
        assert len(expander.expand(Query(text="Q"))) == 2

    def test_blank_variations_ignored(self) -> None:
        expander = MultiQueryExpander(lambda text, n: ["a", " ", "b"], number_of_queries=2)
        assert [q.text for q in expander.expand(Query(text="Q"))] == ["a", "b"]

    def test_expanded_queries_keep_context(self) -> None:
        expander = MultiQueryExpander(_variations, number_of_queries=2)
        result = expander.expand(Query(text="Q", context={"tenant": "t1"}))
        assert all(q.context == {"tenant": "t1"} for q in result)

    def test_invalid_number_of_queries(self) -> None:
        with pytest.raises(ConfigurationError):
            MultiQueryExpander(_variations, number_of_queries=0)

    def test_failure_raises_transformation_error(self) -> None:
        def generate(text: str, n: int) -> list[str]:
            raise RuntimeError("llm down")

        with pytest.raises(TransformationError):
            MultiQueryExpander(generate).expand(Query(text="Q"))

    def test_repr(self) -> None:
        expander = MultiQueryExpander(_variations, number_of_queries=5, include_original=True)
        assert repr(expander) == "MultiQueryExpander(number_of_queries=5, include_original=True)"
