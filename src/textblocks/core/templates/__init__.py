"""Template overrides applied to resolved blocks."""
from __future__ import annotations

from .overrides import DEFAULT_NAME_PATTERN, TemplateOverrideRenderer

__all__ = ["TemplateOverrideRenderer", "DEFAULT_NAME_PATTERN"]
