"""Resolution of per-call filter expressions.

A caller may scope one invocation by putting a filter expression into
the advise context (and from there into ``Query.context``) under
``FILTER_EXPRESSION``.  That value wins over any default configured on a
retriever or advisor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rag_advisors.protocols.storage import FilterExpressionParser

FILTER_EXPRESSION = "qa_filter_expression"


def resolve_filter_expression(
    context: Mapping[str, Any],
    default: Any | None,
    parser: FilterExpressionParser | None = None,
) -> Any | None:
    """Pick the filter expression for one call.

    Parameters:
        context: The per-call context, possibly holding ``FILTER_EXPRESSION``.
        default: The configured default expression, used when the context
            holds no value or a blank string.
        parser: Optional parser applied to string overrides.  Without a
            parser, strings are passed through to the store unparsed.

    Returns:
        The per-call expression when present, otherwise ``default``.
    """
    override = context.get(FILTER_EXPRESSION)
    if override is None:
        return default
    if isinstance(override, str):
        if not override.strip():
            return default
        if parser is not None:
            return parser.parse(override)
    return override
