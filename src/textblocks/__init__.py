"""
textblocks - reusable named text blocks for free-form documents

Authors mark a span of a document with ``start_name`` ... ``stop_name`` and
re-project it anywhere else with ``show_name``. The engine extracts, resolves
and substitutes those blocks at render time, and keeps block names unambiguous
at save time.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
