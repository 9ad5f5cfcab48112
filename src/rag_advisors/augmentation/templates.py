"""Prompt templates and the default template renderer."""

from __future__ import annotations

import logging
import string
from collections.abc import Mapping
from typing import Any

from rag_advisors.exceptions import ConfigurationError
from rag_advisors.protocols.template import TemplateRenderer

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_TEMPLATE = """\
Context information is below.

---------------------
{context}
---------------------

Given the context information and no prior knowledge, answer the query.

Follow these rules:

1. If the answer is not in the context, just say that you don't know.
2. Avoid statements like "Based on the context..." or "The provided information...".

Query: {query}

Answer:
"""

DEFAULT_REFUSAL_PROMPT_TEMPLATE = """\
The user query is outside your knowledge base.
Politely inform the user that you can't answer it.
"""

DEFAULT_EMPTY_CONTEXT_PROMPT_TEMPLATE = """\
No context information was found for this query.

Answer the query using only the conversation history.
If the history does not contain the answer, just say that you don't know.

Query: {query}

Answer:
"""

DEFAULT_QUESTION_ANSWER_TEMPLATE = """
Context information is below, surrounded by ---------------------

---------------------
{question_answer_context}
---------------------

Given the context and provided history information and not prior knowledge,
reply to the user comment. If the answer is not in the context, inform
the user that you can't answer the question.
"""


class FormatTemplateRenderer:
    """Renders ``str.format`` style templates (``{name}`` placeholders).

    Literal braces in a template must be doubled.  Bound values are inserted
    verbatim, so braces inside documents or queries need no escaping.

    Implements the ``TemplateRenderer`` protocol.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "FormatTemplateRenderer()"

    def placeholders(self, template: str) -> set[str]:
        """Return the named placeholders of ``template``.

        Raises:
            ConfigurationError: If the template is malformed or uses
                positional placeholders (``{}`` or ``{0}``), which can never
                be bound from a mapping.
        """
        names: set[str] = set()
        try:
            for _, field, _, _ in string.Formatter().parse(template):
                if field is None:
                    continue
                name = field.split(".")[0].split("[")[0]
                if not name or name.isdigit():
                    msg = f"Positional placeholder {{{field}}} is not supported; use a named one"
                    raise ConfigurationError(msg)
                names.add(name)
        except ConfigurationError:
            raise
        except ValueError as e:
            msg = f"Malformed template: {e}"
            raise ConfigurationError(msg) from e
        return names

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        try:
            return template.format_map(dict(variables))
        except KeyError as e:
            msg = f"Template placeholder {e} has no bound value"
            raise ConfigurationError(msg) from e
        except (IndexError, ValueError, AttributeError) as e:
            msg = f"Template cannot be rendered: {e}"
            raise ConfigurationError(msg) from e


def validate_template(
    renderer: TemplateRenderer, template: str, required: set[str], name: str
) -> None:
    """Raise ``ConfigurationError`` if ``template`` lacks a required placeholder.

    Renderers without a ``placeholders`` method cannot be inspected; their
    templates are accepted as-is and checked only when rendered.
    """
    placeholders = getattr(renderer, "placeholders", None)
    if not callable(placeholders):
        logger.debug(
            "%s cannot list placeholders; skipping validation of %s",
            type(renderer).__name__,
            name,
        )
        return
    missing = required - placeholders(template)
    if missing:
        msg = f"{name} is missing placeholders: {', '.join(sorted(missing))}"
        raise ConfigurationError(msg)
