"""Output formatters."""

from macrochef.export.formatters import (
    OUTPUT_FORMATS,
    JSONFormatter,
    MarkdownFormatter,
    TableFormatter,
    format_result,
)

__all__ = [
    "OUTPUT_FORMATS",
    "TableFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "format_result",
]
