"""Quote validation — treatment, sizing, lining, completeness and sanity rules."""

from pricedin.validation.jobs import (
    is_deck_job,
    is_ground_contact_job,
    is_outdoor_job,
    is_structural_job,
    is_wet_area_job,
    required_treatment,
)
from pricedin.validation.report import ValidationReport
from pricedin.validation.rules.base import ValidationFinding, ValidationRule
from pricedin.validation.validator import Validator

__all__ = [
    "ValidationFinding",
    "ValidationReport",
    "ValidationRule",
    "Validator",
    "is_deck_job",
    "is_ground_contact_job",
    "is_outdoor_job",
    "is_structural_job",
    "is_wet_area_job",
    "required_treatment",
]
