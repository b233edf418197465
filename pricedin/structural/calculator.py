"""Deck member sizing — bearers, joists, posts, footings, compliance notes.

Usage::

    from pricedin.structural import DeckGeometry, size_deck

    result = size_deck(DeckGeometry(length=6, width=4, height=600))
    result.joist_size  # "240x45"
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pricedin.config import DEFAULT_DECKING_THICKNESS_MM, DEFAULT_POST_SPACING_M
from pricedin.structural.span_tables import (
    BARRIER_HEIGHT_MM,
    BEARER_BEYOND_TABLE,
    BEARER_SPANS,
    BEARER_WARNING_SPAN_M,
    EXEMPTION_MAX_AREA_M2,
    JOIST_BEYOND_TABLE,
    JOIST_SPACING_MM,
    JOIST_SPANS,
    LIGHTWEIGHT_FOOTING_MAX_HEIGHT_MM,
    POST_BEYOND_TABLE,
    POST_HEIGHTS,
    REFERENCE_DECKING_MM,
    THIN_DECKING_JOIST_SPACING_MM,
    lookup,
)

logger = logging.getLogger(__name__)

# Compliance and warning texts
HANDRAIL_NOTE = "Handrail required (>1m height)"
BALUSTRADE_NOTE = "Balustrade required (100mm max gap between rails)"
CONSENT_NOTE = "Building consent likely required"
EXEMPTION_NOTE = "Exemption likely applies: Schedule 1 Exemption 39 (<30m², <1m high)"
DOUBLE_BEARER_NOTE = "Double bearers must be nailed together with 90mm nails at 600mm centres staggered"
DPC_NOTE = "DPC tape under all bearers required"
EMBEDMENT_NOTE = "All H5 posts must have 600mm min embedment in concrete"

JOIST_TABLE_WARNING = "Joist span exceeds NZS 3604 tables - engineered member required"
POST_TABLE_WARNING = "Post height exceeds NZS 3604 tables - engineered member required"
BEARER_TABLE_WARNING = "Bearer span exceeds NZS 3604 tables - engineered member required"
BEARER_SPAN_WARNING = "Bearer span large - consider closer post spacing or engineered beams"

LIGHTWEIGHT_FOOTING = "Adjustable lightweight footings (e.g. Nuralock jacks) or H5 posts in concrete"
EMBEDDED_FOOTING = "H5 posts in concrete (600mm min embedment)"


class DeckGeometry(BaseModel):
    """Plan dimensions in metres, height and decking thickness in millimetres.

    ``length``, ``width`` and ``height`` are required; a missing one raises
    pydantic ``ValidationError``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    length: float = Field(gt=0)
    width: float = Field(gt=0)
    """Joist span: joists run across the deck width."""

    height: float = Field(ge=0)
    """Finished deck height above ground, mm."""

    post_spacing: float = Field(
        default=DEFAULT_POST_SPACING_M,
        gt=0,
        validation_alias=AliasChoices("postSpacing", "post_spacing"),
    )
    """Bearer span between posts, m."""

    decking_thickness: float = Field(
        default=DEFAULT_DECKING_THICKNESS_MM,
        gt=0,
        validation_alias=AliasChoices("deckingThickness", "decking_thickness"),
    )

    @property
    def area(self) -> float:
        return self.length * self.width


class SpanResult(BaseModel):
    """Member sizes and the notes that go with them."""

    bearer_size: str
    double_bearer: bool = False
    joist_size: str
    joist_spacing: int
    """Joist centres, mm."""

    post_size: str
    foundation_type: str
    lightweight_footing_allowed: bool = False
    compliance: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    calculations: dict[str, str] = Field(default_factory=dict)

    @property
    def requires_engineer(self) -> bool:
        return (
            self.joist_size == JOIST_BEYOND_TABLE
            or self.post_size == POST_BEYOND_TABLE
            or self.bearer_size == BEARER_BEYOND_TABLE
        )


def _bearer(span: float) -> tuple[str, bool]:
    for bound, size, doubled in BEARER_SPANS:
        if span <= bound:
            return size, doubled
    return BEARER_BEYOND_TABLE, False


def size_deck(geometry: DeckGeometry | Mapping[str, Any]) -> SpanResult:
    """Size deck framing members for *geometry*.

    Parameters
    ----------
    geometry:
        A :class:`DeckGeometry` or a mapping accepted by it (camelCase
        ``postSpacing`` / ``deckingThickness`` allowed).

    Returns
    -------
    SpanResult
    """
    if not isinstance(geometry, DeckGeometry):
        geometry = DeckGeometry.model_validate(geometry)

    joist_span = geometry.width
    bearer_span = geometry.post_spacing
    height = geometry.height

    bearer_size, double_bearer = _bearer(bearer_span)
    joist_size = lookup(JOIST_SPANS, joist_span, JOIST_BEYOND_TABLE)
    joist_spacing = (
        THIN_DECKING_JOIST_SPACING_MM
        if geometry.decking_thickness < REFERENCE_DECKING_MM
        else JOIST_SPACING_MM
    )
    post_size = lookup(POST_HEIGHTS, height, POST_BEYOND_TABLE)

    lightweight = height <= LIGHTWEIGHT_FOOTING_MAX_HEIGHT_MM
    foundation_type = LIGHTWEIGHT_FOOTING if lightweight else EMBEDDED_FOOTING

    warnings: list[str] = []
    if joist_size == JOIST_BEYOND_TABLE:
        warnings.append(JOIST_TABLE_WARNING)
    if post_size == POST_BEYOND_TABLE:
        warnings.append(POST_TABLE_WARNING)
    if bearer_size == BEARER_BEYOND_TABLE:
        warnings.append(BEARER_TABLE_WARNING)
    if bearer_span > BEARER_WARNING_SPAN_M:
        warnings.append(BEARER_SPAN_WARNING)

    compliance: list[str] = []
    if height > BARRIER_HEIGHT_MM:
        compliance.append(HANDRAIL_NOTE)
        compliance.append(BALUSTRADE_NOTE)

    # Consent and exemption are the two outcomes of one check
    if height > BARRIER_HEIGHT_MM or geometry.area > EXEMPTION_MAX_AREA_M2:
        compliance.append(CONSENT_NOTE)
    else:
        compliance.append(EXEMPTION_NOTE)

    if double_bearer:
        compliance.append(DOUBLE_BEARER_NOTE)
    compliance.append(DPC_NOTE)
    compliance.append(EMBEDMENT_NOTE)

    doubled = " (doubled)" if double_bearer else ""
    calculations = {
        "joist_span": f"{joist_span:g}m span requires {joist_size}",
        "bearer_span": f"{bearer_span:g}m span requires {bearer_size}{doubled}",
        "post_height": f"{height:g}mm height requires {post_size} posts",
    }

    logger.debug(
        "Sized deck %gx%gm @ %gmm: bearer=%s%s joist=%s post=%s",
        geometry.length, geometry.width, height,
        bearer_size, doubled, joist_size, post_size,
    )

    return SpanResult(
        bearer_size=bearer_size,
        double_bearer=double_bearer,
        joist_size=joist_size,
        joist_spacing=joist_spacing,
        post_size=post_size,
        foundation_type=foundation_type,
        lightweight_footing_allowed=lightweight,
        compliance=compliance,
        warnings=warnings,
        calculations=calculations,
    )
