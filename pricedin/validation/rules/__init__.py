"""Validation rules — treatment, sizing, lining, completeness, sanity."""

from pricedin.validation.rules.base import ValidationFinding, ValidationRule
from pricedin.validation.rules.completeness import CompletenessRules
from pricedin.validation.rules.lining import LiningRules
from pricedin.validation.rules.sanity import SanityRules
from pricedin.validation.rules.sizing import SizingRules
from pricedin.validation.rules.treatment import TreatmentRules

__all__ = [
    "ValidationFinding",
    "ValidationRule",
    "TreatmentRules",
    "SizingRules",
    "LiningRules",
    "CompletenessRules",
    "SanityRules",
]
