"""Search suggestions for requests that found no catalog match.

Suggestions are short terms a user can paste into catalog search.  The
category keyword comes from the extractor's type classifier so a
"JOIST HANGER" never gets a framing keyword.
"""

from __future__ import annotations

import re

from pricedin.catalog.index import tokenize
from pricedin.config import MAX_SEARCH_SUGGESTIONS
from pricedin.extraction import extract
from pricedin.extraction.properties import extract_treatment
from pricedin.extraction.schema import FIXING_TYPES, FRAMING_TYPES, MaterialType

_DIMENSION_RE = re.compile(r"(\d{2,4})\s*[xX×]\s*(\d{2,4})")

# Supplier names rarely say BEARER or JOIST; framing stock is listed by species
_FRAMING_KEYWORD = "RADIATA"

_CATEGORY_KEYWORDS: dict[MaterialType, str] = {
    MaterialType.DECKING: "DECKING",
    MaterialType.POST: "POST",
    MaterialType.FENCE_POST: "POST",
    MaterialType.PILE: "PILE",
    MaterialType.GIB: "GIB",
    MaterialType.PLYWOOD: "PLYWOOD",
    MaterialType.INSULATION: "INSULATION",
    MaterialType.CONCRETE: "CONCRETE",
}

_FINISH_KEYWORDS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"GALV", re.I), "GALV"),
    (re.compile(r"SS316|STAINLESS", re.I), "STAINLESS"),
    (re.compile(r"\bGIB\b", re.I), "GIB"),
    (re.compile(r"AQUA\s*LINE", re.I), "AQUALINE"),
    (re.compile(r"FYRE\s*LINE", re.I), "FYRELINE"),
    (re.compile(r"KWILA", re.I), "KWILA"),
    (re.compile(r"VITEX", re.I), "VITEX"),
]


def category_keyword(text: str) -> str | None:
    """Coarse catalog keyword for *text*, following classifier precedence."""
    material_type = extract(text).type
    if material_type in FIXING_TYPES:
        return material_type.value.upper()
    if material_type in FRAMING_TYPES:
        return _FRAMING_KEYWORD
    return _CATEGORY_KEYWORDS.get(material_type)


def search_suggestions(name: str | None, search_term: str | None = None) -> list[str]:
    """Return 1 to :data:`MAX_SEARCH_SUGGESTIONS` search terms for an unmatched request.

    Order: dimension pair, treatment code, category keyword, named finishes
    and product lines.  When none of those apply, the request's own leading
    tokens are offered instead.
    """
    parts: list[str] = []
    for value in (name, search_term):
        value = (value or "").strip()
        if value and value not in parts:
            parts.append(value)
    combined = " ".join(parts)
    suggestions: list[str] = []

    def add(term: str | None) -> None:
        if term and term not in suggestions:
            suggestions.append(term)

    m = _DIMENSION_RE.search(combined)
    if m:
        add(f"{m.group(1)} X {m.group(2)}")

    add(extract_treatment(combined))
    add(category_keyword(combined))

    for pattern, keyword in _FINISH_KEYWORDS:
        if pattern.search(combined):
            add(keyword)

    if not suggestions:
        for token in tokenize(combined)[:MAX_SEARCH_SUGGESTIONS]:
            add(token)
    if not suggestions:
        add(combined.upper() or "MATERIAL")

    return suggestions[:MAX_SEARCH_SUGGESTIONS]
