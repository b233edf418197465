"""pricedin — catalog-backed quoting core for NZ residential building work."""

__version__ = "1.0.0"

from pricedin.catalog.ai import parse_ai_response
from pricedin.catalog.index import CatalogIndex
from pricedin.catalog.ingest import load_records
from pricedin.catalog.resolver import Resolver
from pricedin.engine import QuoteDraft, QuoteEngine
from pricedin.extraction import MaterialType, ParsedAttributes, extract
from pricedin.models.catalog import CatalogRecord, Packaging, SellUnit
from pricedin.models.quote import AISuggestion, LabourItem, ResolvedLineItem
from pricedin.structural import DeckGeometry, SpanResult, size_deck
from pricedin.validation import ValidationFinding, ValidationReport, Validator

__all__ = [
    "AISuggestion",
    "CatalogIndex",
    "CatalogRecord",
    "DeckGeometry",
    "LabourItem",
    "MaterialType",
    "Packaging",
    "ParsedAttributes",
    "QuoteDraft",
    "QuoteEngine",
    "ResolvedLineItem",
    "Resolver",
    "SellUnit",
    "SpanResult",
    "ValidationFinding",
    "ValidationReport",
    "Validator",
    "extract",
    "load_records",
    "parse_ai_response",
    "size_deck",
]
