"""Global configuration: defaults, lookup constants, sanity thresholds."""

from __future__ import annotations

import logging
import os
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Valid NZ timber treatment codes, lowest to highest hazard class
TREATMENT_CODES = ("H1.2", "H3.1", "H3.2", "H4", "H5", "H6")

# Minimum treatment for structural members in ground contact
IN_GROUND_STRUCTURAL_TREATMENT = "H5"

# Interior-only treatment
INTERIOR_TREATMENT = "H1.2"

# Index tokens shorter than this are dropped as noise
MIN_TOKEN_LENGTH = 2

# Ordinary tokens intersected when a request carries no key token
FALLBACK_NARROWING_TOKENS = 3

# High-specificity tokens that narrow catalog candidates on their own
KEY_TOKENS = frozenset({
    # Lining and insulation product lines
    "AQUALINE", "ULTRALINE", "FYRELINE", "BRACELINE", "NOISELINE",
    "STANDARD", "PINK", "EARTHWOOL",
    # Treatment and grade codes
    "H1.2", "H3.1", "H3.2", "H4", "H5", "H6", "SG8", "KD",
    # Hardware product keywords
    "HANGER", "STIRRUP",
})

# Unmatched items carry at most this many search suggestions
MAX_SEARCH_SUGGESTIONS = 4

# Deck geometry defaults (NZS 3604 practice)
DEFAULT_POST_SPACING_M = 1.8
DEFAULT_DECKING_THICKNESS_MM = 32.0

# Fallback pack sizes used when a product name does not state one
DEFAULT_FIXING_BOX = 200
DEFAULT_PAINT_TIN_L = 5.0
DEFAULT_CONCRETE_BAG_KG = 20
DEFAULT_ADHESIVE_TUBE_ML = 300

# Builder hourly rate (NZD) applied to AI labour estimates
DEFAULT_BUILDER_RATE = 95.0

LOG_LEVEL_ENV = "PRICEDIN_LOG_LEVEL"


class SanityThresholds(BaseModel):
    """Advisory magnitudes for the sanity checks.

    Calibrated to NZ residential construction in NZD.  Every comparison is a
    strict ``>`` (or ``<`` for the floor), so a value equal to a threshold
    never warns.
    """

    model_config = ConfigDict(frozen=True)

    box_qty: int = 50
    """Box / pack quantities above this are suspicious."""

    paint_qty: int = 20
    """Paint / stain / coating tins above this are suspicious."""

    bag_qty: int = 100
    """Concrete / cement bags above this are suspicious."""

    line_value: float = 5000.0
    """Single line value (qty x price) above this is flagged."""

    total_floor: float = 500.0
    """A non-zero quote total below this is flagged as too low."""

    total_ceiling: float = 50000.0
    """A quote total above this is flagged when the quote is small."""

    small_quote_items: int = 10
    """Quotes with fewer material lines than this count as small."""

    stale_price_days: int = 182
    """Supplier prices older than this many days are flagged."""

    recalc_factor: float = 2.0
    """AI quantities above this multiple of the package-derived figure are recalculated."""


_ENV_PREFIX = "PRICEDIN_"


def load_thresholds(**overrides: Any) -> SanityThresholds:
    """Return sanity thresholds: defaults -> ``PRICEDIN_*`` env vars -> *overrides*.

    Environment variables use the upper-cased field name, e.g.
    ``PRICEDIN_LINE_VALUE=8000``.
    """
    values: dict[str, Any] = {}
    for field in SanityThresholds.model_fields:
        env_val = os.environ.get(f"{_ENV_PREFIX}{field.upper()}")
        if env_val is not None:
            values[field] = env_val
    values.update(overrides)
    if values:
        logger.debug("Sanity threshold overrides: %s", values)
    return SanityThresholds(**values)


DEFAULT_THRESHOLDS = SanityThresholds()


def configure_logging(level: str | None = None) -> None:
    """Set the ``pricedin`` logger level from *level* or ``PRICEDIN_LOG_LEVEL``."""
    name = (level or os.environ.get(LOG_LEVEL_ENV, "WARNING")).upper()
    logging.getLogger("pricedin").setLevel(getattr(logging, name, logging.WARNING))
