"""Tests for document joiners and the RRF utility."""

from __future__ import annotations

import pytest

from rag_advisors.models.document import Document
from rag_advisors.models.query import Query
from rag_advisors.protocols.joiner import DocumentJoiner
from rag_advisors.retrieval import (
    ConcatenationDocumentJoiner,
    ReciprocalRankFusionDocumentJoiner,
    rrf_fuse,
)
from tests.conftest import make_document


class TestConcatenationDocumentJoiner:
    """First-occurrence-wins deduplication."""

    def test_protocol_compliance(self) -> None:
        assert isinstance(ConcatenationDocumentJoiner(), DocumentJoiner)

    def test_empty_mapping(self) -> None:
        assert ConcatenationDocumentJoiner().join({}) == []

    def test_first_occurrence_wins(self) -> None:
        first = make_document("d1", text="first", score=0.9)
        later = make_document("d1", text="later", score=0.5)
        other = make_document("d2", score=0.7)
        joined = ConcatenationDocumentJoiner().join(
            {Query(text="a"): [[first, other]], Query(text="b"): [[later]]}
        )
        assert [d.id for d in joined] == ["d1", "d2"]
        assert joined[0].score == 0.9
        assert joined[0].text == "first"

    def test_preserves_query_then_list_order(self) -> None:
        d1, d2, d3, d4 = (make_document(f"d{i}") for i in range(1, 5))
        joined = ConcatenationDocumentJoiner().join(
            {Query(text="a"): [[d1, d2], [d3]], Query(text="b"): [[d4, d1]]}
        )
        assert [d.id for d in joined] == ["d1", "d2", "d3", "d4"]

    def test_idempotent(self) -> None:
        docs = [make_document("d1"), make_document("d2"), make_document("d1")]
        joiner = ConcatenationDocumentJoiner()
        once = joiner.join({Query(text="q"): [docs]})
        twice = joiner.join({Query(text="q"): [once]})
        assert twice == once

    def test_documents_not_rescored(self) -> None:
        doc = make_document("d1", score=0.42)
        joined = ConcatenationDocumentJoiner().join({Query(text="q"): [[doc], [doc]]})
        assert joined == [doc]


class TestReciprocalRankFusionDocumentJoiner:
    """Rank-based fusion across queries."""

    def test_protocol_compliance(self) -> None:
        assert isinstance(ReciprocalRankFusionDocumentJoiner(), DocumentJoiner)

    def test_shared_document_ranks_first(self) -> None:
        shared = make_document("shared")
        joined = ReciprocalRankFusionDocumentJoiner().join(
            {
                Query(text="a"): [[make_document("a1"), shared]],
                Query(text="b"): [[make_document("b1"), shared]],
            }
        )
        assert joined[0].id == "shared"
        assert len(joined) == 3

    def test_top_k(self) -> None:
        docs = [make_document(f"d{i}") for i in range(5)]
        joined = ReciprocalRankFusionDocumentJoiner(top_k=2).join({Query(text="q"): [docs]})
        assert [d.id for d in joined] == ["d0", "d1"]

    def test_invalid_parameters(self) -> None:
        with pytest.raises(ValueError):
            ReciprocalRankFusionDocumentJoiner(k=-1)
        with pytest.raises(ValueError):
            ReciprocalRankFusionDocumentJoiner(top_k=0)


class TestRrfFuse:
    def test_scores(self) -> None:
        d1, d2 = make_document("d1"), make_document("d2")
        fused = rrf_fuse([[d1, d2], [d1]], k=60)
        assert fused[0].id == "d1"
        assert fused[0].score == pytest.approx(2 / 61)
        assert fused[0].metadata["rrf_score"] == pytest.approx(2 / 61)
        assert fused[1].score == pytest.approx(1 / 62)

    def test_ties_keep_first_seen_order(self) -> None:
        fused = rrf_fuse([[make_document("x")], [make_document("y")]])
        assert [d.id for d in fused] == ["x", "y"]

    def test_keeps_first_seen_content(self) -> None:
        fused = rrf_fuse([[make_document("d", text="one")], [make_document("d", text="two")]])
        assert fused[0].text == "one"

    def test_inputs_untouched(self) -> None:
        doc = Document(id="d", text="t", score=0.3)
        rrf_fuse([[doc]])
        assert doc.score == 0.3
        assert "rrf_score" not in doc.metadata

    def test_negative_k(self) -> None:
        with pytest.raises(ValueError):
            rrf_fuse([], k=-1)
