"""Tests for chat responses and advised envelopes."""

from __future__ import annotations

from rag_advisors.models.advised import AdvisedRequest, AdvisedResponse
from rag_advisors.models.chat import ChatResponse, Generation
from rag_advisors.models.messages import AssistantMessage
from tests.conftest import make_fragment


class TestChatResponse:
    def test_text_of_first_result(self) -> None:
        assert make_fragment("hello").text == "hello"

    def test_text_empty_without_results(self) -> None:
        assert ChatResponse().text == ""

    def test_terminal_when_finish_reason_present(self) -> None:
        assert make_fragment("x", finish_reason="stop").is_terminal

    def test_not_terminal_without_finish_reason(self) -> None:
        assert not make_fragment("x").is_terminal
        assert not make_fragment("x", finish_reason="  ").is_terminal
        assert not ChatResponse().is_terminal

    def test_terminal_if_any_generation_finishes(self) -> None:
        response = ChatResponse(
            results=[
                Generation(output=AssistantMessage(text="a")),
                Generation(output=AssistantMessage(text="b"), finish_reason="length"),
            ]
        )
        assert response.is_terminal

    def test_with_metadata_copies(self) -> None:
        response = ChatResponse(metadata={"a": 1})
        updated = response.with_metadata("b", 2)
        assert updated.metadata == {"a": 1, "b": 2}
        assert response.metadata == {"a": 1}


class TestAdvisedEnvelopes:
    """The advise context is copied on every derivation."""

    def test_of_builds_user_prompt(self) -> None:
        request = AdvisedRequest.of("question", tenant="t1")
        assert request.user_text == "question"
        assert request.advise_context == {"tenant": "t1"}

    def test_with_context_does_not_alias(self) -> None:
        request = AdvisedRequest.of("q", a=1)
        derived = request.with_context(b=2)
        derived.advise_context["c"] = 3
        assert request.advise_context == {"a": 1}
        assert derived.advise_context == {"a": 1, "b": 2, "c": 3}

    def test_response_from_request_copies_context(self) -> None:
        request = AdvisedRequest.of("q", a=1)
        response = AdvisedResponse.from_request(request, make_fragment("r"))
        response.advise_context["a"] = 99
        assert request.advise_context["a"] == 1

    def test_response_terminal(self) -> None:
        assert AdvisedResponse(response=make_fragment("r", finish_reason="stop")).is_terminal
        assert not AdvisedResponse().is_terminal
