"""Prompt template rendering protocol."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TemplateRenderer(Protocol):
    """Protocol for rendering a prompt template with variable bindings.

    A renderer may also define ``placeholders(template) -> set[str]``.  When
    it does, templates are checked for their required placeholders at
    construction time; otherwise they are only checked when rendered.
    """

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        """Render ``template`` with ``variables`` bound to its placeholders."""
        ...
