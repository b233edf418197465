"""Structural sizing — NZS 3604 style deck member calculator."""

from pricedin.structural.calculator import DeckGeometry, SpanResult, size_deck
from pricedin.structural.span_tables import joist_table_summary, minimum_joist_for_span

__all__ = [
    "DeckGeometry",
    "SpanResult",
    "joist_table_summary",
    "minimum_joist_for_span",
    "size_deck",
]
