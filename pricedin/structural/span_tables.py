"""Simplified NZS 3604 span tables for SG8 radiata pine deck framing.

Each table is an ordered list of ``(upper_bound, size)`` brackets.  A value
equal to a bracket's upper bound selects that bracket; anything above the
last bound gets the table's sentinel label instead of the largest size.
"""

from __future__ import annotations

from collections.abc import Sequence

# Bearer span (m) -> size, doubled?  Between 3.0 and 3.6 m the 190x45 is doubled
BEARER_SPANS: tuple[tuple[float, str, bool], ...] = (
    (1.8, "140x45", False),
    (2.4, "140x45", False),
    (3.0, "190x45", False),
    (3.6, "190x45", True),
)
BEARER_BEYOND_TABLE = "Engineered beam required"

# Joist span (m) at 450 mm centres -> size
JOIST_SPANS: tuple[tuple[float, str], ...] = (
    (2.4, "140x45"),
    (3.6, "190x45"),
    (4.8, "240x45"),
    (5.4, "290x45"),
)
JOIST_BEYOND_TABLE = "LVL or engineered beam required"

# Post height (mm) -> size
POST_HEIGHTS: tuple[tuple[float, str], ...] = (
    (900, "100x100"),
    (1800, "125x125"),
)
POST_BEYOND_TABLE = "150x150 or engineer required"

# Joist centres
JOIST_SPACING_MM = 450
THIN_DECKING_JOIST_SPACING_MM = 400
REFERENCE_DECKING_MM = 32.0

# Bearer spans above this get a post-spacing warning
BEARER_WARNING_SPAN_M = 3.6

# Regulatory thresholds
LIGHTWEIGHT_FOOTING_MAX_HEIGHT_MM = 600
BARRIER_HEIGHT_MM = 1000
EXEMPTION_MAX_AREA_M2 = 30.0


def lookup(table: Sequence[tuple[float, str]], value: float, beyond: str) -> str:
    """Return the size of the first bracket whose bound is >= *value*."""
    for bound, size in table:
        if value <= bound:
            return size
    return beyond


def minimum_joist_for_span(span: float) -> str:
    """Smallest tabulated joist for *span* metres, or the engineered-member label."""
    return lookup(JOIST_SPANS, span, JOIST_BEYOND_TABLE)


def joist_table_summary() -> str:
    """One-line rendering of the joist table, e.g. ``"140x45 up to 2.4m, ..."``."""
    return ", ".join(f"{size} up to {bound:g}m" for bound, size in JOIST_SPANS)


def joist_size_rank(size: str) -> int:
    """Position of *size* in the joist table; the sentinel ranks above every size."""
    sizes = [s for _, s in JOIST_SPANS]
    return sizes.index(size) if size in sizes else len(sizes)
