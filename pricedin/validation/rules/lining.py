"""Wet-area lining rule."""

from __future__ import annotations

from pricedin.extraction.schema import MaterialType
from pricedin.validation.context import QuoteContext, QuoteLine
from pricedin.validation.jobs import is_wet_area_job
from pricedin.validation.rules.base import ValidationFinding, ValidationRule

_MOISTURE_RATED = ("Aqualine",)
_MOISTURE_WORDS = ("AQUA", "MOISTURE")


def _is_plain_lining(line: QuoteLine) -> bool:
    attrs = line.attributes
    return (
        attrs.type is MaterialType.GIB
        and attrs.lining_type in (None, "Standard")
        and "AQUA" not in line.text
    )


def _is_moisture_rated(line: QuoteLine) -> bool:
    if line.attributes.lining_type in _MOISTURE_RATED:
        return True
    return any(word in line.text for word in _MOISTURE_WORDS)


class StandardLiningInWetArea(ValidationRule):
    """Plain plasterboard in a wet area needs a moisture-rated board alongside it."""

    @property
    def name(self) -> str:
        return "lining.wet_area"

    @property
    def description(self) -> str:
        return "Standard lining in a wet area with no moisture-rated lining quoted."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        if not is_wet_area_job(context.job_type):
            return []

        plain = [line for line in context.lines if _is_plain_lining(line)]
        if not plain or any(_is_moisture_rated(line) for line in context.lines):
            return []

        first = plain[0]
        return [self.finding(
            f"STANDARD GIB IN WET AREA: {len(plain)} standard lining line(s) "
            f"and no moisture-rated lining in the quote.",
            suggestion="Use GIB Aqualine for all walls in wet areas.",
            item=first.index,
            item_name=first.name,
        )]


class LiningRules:
    """Collection of lining rules."""

    @staticmethod
    def all_rules() -> list[ValidationRule]:
        return [StandardLiningInWetArea()]
