"""Quote-side models — AI line-item requests, resolved lines, labour."""

from __future__ import annotations

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pricedin.models.catalog import CatalogRecord


def _number_or_none(value: Any) -> float | None:
    """Coerce an AI-supplied quantity to a finite float, or *None*."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class AISuggestion(BaseModel):
    """One material line as proposed by the AI collaborator.

    Accepts the camelCase keys the assistant emits (``searchTerm``,
    ``qtyToOrder``, ``totalNeeded``, ``packageSize``) as well as the legacy
    ``qty`` key and the snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = ""
    search_term: str | None = Field(default=None, validation_alias=AliasChoices("searchTerm", "search_term"))
    calculation: str = ""
    """Opaque narrative carried through for audit and display."""

    total_needed: float | None = Field(default=None, validation_alias=AliasChoices("totalNeeded", "total_needed"))
    package_size: str | None = Field(default=None, validation_alias=AliasChoices("packageSize", "package_size"))
    """Supplier pack description, carried for display.  Recalculation uses the
    matched record's packaging instead."""

    qty_to_order: float | None = Field(
        default=None, validation_alias=AliasChoices("qtyToOrder", "qty_to_order", "qty", "quantity"),
    )
    unit: str = ""

    @field_validator("total_needed", "qty_to_order", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> float | None:
        return _number_or_none(value)

    @field_validator("name", "calculation", "unit", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("search_term", "package_size", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> str | None:
        return None if value is None else str(value)

    @property
    def query(self) -> str:
        """Text used for catalog lookup: search term, else display name."""
        return (self.search_term or "").strip() or self.name.strip()


class ResolvedLineItem(BaseModel):
    """The outcome of resolving one request against the catalog.

    ``record`` is *None* for an unmatched request; such items always carry
    at least one entry in ``suggestions``.
    """

    record: CatalogRecord | None = None
    quantity: int = Field(default=1, ge=1)
    calculation: str = ""
    warnings: list[str] = Field(default_factory=list)

    name: str = ""
    search_term: str = ""
    reason: str = ""
    """Why the request did not match (empty when matched)."""

    suggestions: list[str] = Field(default_factory=list)
    confidence: float = 0.0
    """Share of request tokens present in the matched record's name."""

    @property
    def matched(self) -> bool:
        return self.record is not None

    @property
    def line_value(self) -> float:
        """Quantity times unit price; zero when unmatched."""
        if self.record is None:
            return 0.0
        return self.quantity * self.record.price


class LabourItem(BaseModel):
    """A labour line supplied alongside material lines."""

    role: str = "Builder"
    hours: float = Field(gt=0)
    rate: float = Field(default=0.0, ge=0)
    description: str = ""

    @property
    def cost(self) -> float:
        return self.hours * self.rate
