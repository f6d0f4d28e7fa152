"""File-based template overrides for resolved blocks.

A template named after a block (``textblock--<name>.j2`` by default) in the
override directory re-renders that block's resolved content. Templates see:

- ``name``         block name as requested
- ``value``        resolved content
- ``format_text``  formats text bound to the active render guard; returns its
                   input unchanged while a render is already in progress
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound

from ..exceptions import TemplateOverrideError

logger = logging.getLogger(__name__)

DEFAULT_NAME_PATTERN = "textblock--{name}.j2"


class TemplateOverrideRenderer:
    """Render block overrides from ``template_dir`` with Jinja2."""

    def __init__(self, template_dir: Path, *, name_pattern: str = DEFAULT_NAME_PATTERN) -> None:
        self.template_dir = Path(template_dir)
        self.name_pattern = name_pattern
        # Override templates are usually tag-only lines around {{ value }}.
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

    def template_name(self, block_name: str) -> str:
        return self.name_pattern.format(name=block_name)

    def render(
        self,
        block_name: str,
        value: str,
        *,
        format_text: Optional[Callable[[str], str]] = None,
        **extra: Any,
    ) -> Optional[str]:
        """Render the override for ``block_name``; None when no override exists."""
        template_name = self.template_name(block_name)
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound:
            return None

        try:
            rendered = template.render(
                name=block_name,
                value=value,
                format_text=format_text or _identity,
                **extra,
            )
        except TemplateError as exc:
            raise TemplateOverrideError(
                f"Template override {template_name} failed: {exc}",
                context={"block": block_name, "template": template_name},
            ) from exc
        logger.debug("Applied template override %s", template_name)
        return rendered


def _identity(text: str) -> str:
    return text


__all__ = ["TemplateOverrideRenderer", "DEFAULT_NAME_PATTERN"]
