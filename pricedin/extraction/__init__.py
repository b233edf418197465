"""Attribute extraction — parse supplier product names into structured attributes."""

from pricedin.extraction.classify import classify_type
from pricedin.extraction.extractor import extract
from pricedin.extraction.schema import MaterialType, ParsedAttributes

__all__ = ["MaterialType", "ParsedAttributes", "classify_type", "extract"]
