"""Tests for ContextualQueryAugmenter and the template renderer."""

from __future__ import annotations

import pytest

from rag_advisors.augmentation import (
    DEFAULT_REFUSAL_PROMPT_TEMPLATE,
    ContextualQueryAugmenter,
    FormatTemplateRenderer,
)
from rag_advisors.exceptions import ConfigurationError
from rag_advisors.models.messages import UserMessage
from rag_advisors.models.query import Query
from rag_advisors.protocols.augmenter import QueryAugmenter
from rag_advisors.protocols.template import TemplateRenderer
from tests.conftest import make_document


class TestContextualQueryAugmenter:
    """Template selection and rendering."""

    def test_protocol_compliance(self) -> None:
        assert isinstance(ContextualQueryAugmenter(), QueryAugmenter)

    def test_embeds_documents_and_query(self) -> None:
        docs = [
            make_document("d1", text="Copenhagen is the capital of Denmark."),
            make_document("d2", text="Denmark is in Scandinavia."),
        ]
        result = ContextualQueryAugmenter().augment(
            Query(text="What is the capital of Denmark?"), docs
        )
        assert "Copenhagen is the capital of Denmark.\nDenmark is in Scandinavia." in result.text
        assert "Query: What is the capital of Denmark?" in result.text

    def test_keeps_history_and_context(self) -> None:
        query = Query(text="q", history=[UserMessage(text="earlier")], context={"k": 1})
        result = ContextualQueryAugmenter().augment(query, [make_document("d1")])
        assert result.history == query.history
        assert result.context == {"k": 1}

    def test_empty_context_refuses_by_default(self) -> None:
        result = ContextualQueryAugmenter().augment(Query(text="Who won in 1998?"), [])
        assert result.text == DEFAULT_REFUSAL_PROMPT_TEMPLATE
        assert "can't answer" in result.text

    def test_empty_context_allowed_keeps_query(self) -> None:
        augmenter = ContextualQueryAugmenter(allow_empty_context=True)
        result = augmenter.augment(Query(text="Who won in 1998?"), [])
        assert "Who won in 1998?" in result.text
        assert "can't answer" not in result.text

    def test_custom_templates(self) -> None:
        augmenter = ContextualQueryAugmenter(
            prompt_template="[{context}] {query}",
            empty_context_prompt_template="none: {query}",
            allow_empty_context=True,
        )
        assert augmenter.augment(Query(text="q"), [make_document("d", text="ctx")]).text == "[ctx] q"
        assert augmenter.augment(Query(text="q"), []).text == "none: q"

    def test_custom_document_formatter(self) -> None:
        augmenter = ContextualQueryAugmenter(
            prompt_template="{context}|{query}",
            document_formatter=lambda docs: ";".join(d.id for d in docs),
        )
        result = augmenter.augment(Query(text="q"), [make_document("a"), make_document("b")])
        assert result.text == "a;b|q"

    def test_braces_in_documents_are_safe(self) -> None:
        augmenter = ContextualQueryAugmenter(prompt_template="{context} {query}")
        result = augmenter.augment(Query(text="{query}"), [make_document("d", text="{x}")])
        assert result.text == "{x} {query}"

    def test_missing_context_placeholder(self) -> None:
        with pytest.raises(ConfigurationError, match="context"):
            ContextualQueryAugmenter(prompt_template="Only {query}")

    def test_missing_query_placeholder_in_empty_template(self) -> None:
        with pytest.raises(ConfigurationError, match="empty_context_prompt_template"):
            ContextualQueryAugmenter(empty_context_prompt_template="nothing found")

    def test_augment_does_not_mutate_input(self) -> None:
        query = Query(text="q")
        ContextualQueryAugmenter().augment(query, [make_document("d")])
        assert query.text == "q"


class TestFormatTemplateRenderer:
    def test_protocol_compliance(self) -> None:
        assert isinstance(FormatTemplateRenderer(), TemplateRenderer)

    def test_placeholders(self) -> None:
        assert FormatTemplateRenderer().placeholders("{a} and {b} but {{c}}") == {"a", "b"}

    def test_malformed_template(self) -> None:
        with pytest.raises(ConfigurationError):
            FormatTemplateRenderer().placeholders("unclosed {brace")

    def test_unbound_placeholder(self) -> None:
        with pytest.raises(ConfigurationError):
            FormatTemplateRenderer().render("{missing}", {})

    def test_extra_variables_ignored(self) -> None:
        assert FormatTemplateRenderer().render("{a}", {"a": 1, "b": 2}) == "1"

    @pytest.mark.parametrize("field", ["{}", "{0}", "{1.attr}"])
    def test_positional_placeholder_rejected(self, field: str) -> None:
        with pytest.raises(ConfigurationError, match="Positional placeholder"):
            FormatTemplateRenderer().placeholders(f"{{query}} {field}")

    def test_positional_field_in_render_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            FormatTemplateRenderer().render("{query} {}", {"query": "q"})

    def test_attribute_lookup_on_value_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            FormatTemplateRenderer().render("{query.missing}", {"query": "q"})


class RenderOnlyRenderer:
    """Renderer implementing only ``render``."""

    def render(self, template: str, variables: dict) -> str:
        return template.replace("<query>", variables["query"]).replace(
            "<context>", variables.get("context", "")
        )


class TestTemplateValidation:
    def test_augmenter_rejects_positional_placeholder_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            ContextualQueryAugmenter(prompt_template="{context} {query} {}")

    def test_render_only_renderer_accepted(self) -> None:
        renderer = RenderOnlyRenderer()
        assert isinstance(renderer, TemplateRenderer)
        augmenter = ContextualQueryAugmenter(
            prompt_template="<context> / <query>",
            empty_context_prompt_template="none: <query>",
            renderer=renderer,
        )
        result = augmenter.augment(Query(text="q"), [make_document("d", text="ctx")])
        assert result.text == "ctx / q"
