"""Core data models — catalog records, AI requests, resolved quote lines."""

from pricedin.models.catalog import CatalogRecord, Packaging, SellUnit
from pricedin.models.quote import AISuggestion, LabourItem, ResolvedLineItem

__all__ = [
    "AISuggestion",
    "CatalogRecord",
    "LabourItem",
    "Packaging",
    "ResolvedLineItem",
    "SellUnit",
]
