"""Catalog lookup — inverted token index, resolver, AI response parsing."""

from pricedin.catalog.ai import extract_payload, parse_ai_labour, parse_ai_response
from pricedin.catalog.index import CatalogIndex, normalize_text, tokenize
from pricedin.catalog.ingest import load_records
from pricedin.catalog.resolver import Resolver
from pricedin.catalog.suggestions import search_suggestions

__all__ = [
    "CatalogIndex",
    "Resolver",
    "extract_payload",
    "load_records",
    "normalize_text",
    "parse_ai_labour",
    "parse_ai_response",
    "search_suggestions",
    "tokenize",
]
