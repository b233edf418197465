"""Attribute extractor — main entry point for parsing catalog product names.

Usage::

    from pricedin.extraction import extract

    attrs = extract("140X45 RAD SG8 H3.2 KD 4.8M")
    attrs.width, attrs.treatment  # (140, "H3.2")
"""

from __future__ import annotations

from typing import Any

from pricedin.extraction.classify import classify_type
from pricedin.extraction.properties import (
    extract_cross_section,
    extract_finish,
    extract_fixing,
    extract_grade,
    extract_length,
    extract_lining_type,
    extract_r_value,
    extract_sheet_dimensions,
    extract_species,
    extract_treatment,
)
from pricedin.extraction.schema import (
    FIXING_TYPES,
    SHEET_TYPES,
    MaterialType,
    ParsedAttributes,
)


def extract(name: str | None) -> ParsedAttributes:
    """Parse a supplier product name into :class:`ParsedAttributes`.

    Never raises: a name with no recognisable pattern gives an all-null
    record with ``type`` set to ``other``.  Pure and idempotent.
    """
    name = (name or "").strip()
    if not name:
        return ParsedAttributes()

    fields: dict[str, Any] = {}

    section = extract_cross_section(name)
    if section:
        fields["width"], fields["depth"] = section

    fields.update(extract_length(name))
    fields["treatment"] = extract_treatment(name)
    fields["grade"] = extract_grade(name)
    fields["species"] = extract_species(name)
    fields["finish"] = extract_finish(name)

    material_type = classify_type(name, fields)
    fields["type"] = material_type

    # Type-specific groups; everything else stays null
    if material_type in FIXING_TYPES:
        fields.update(extract_fixing(name))
    elif material_type in SHEET_TYPES:
        fields.update(extract_sheet_dimensions(name))
        if material_type is MaterialType.GIB:
            fields["lining_type"] = extract_lining_type(name)
    elif material_type is MaterialType.INSULATION:
        fields["r_value"] = extract_r_value(name)

    return ParsedAttributes(**fields)
