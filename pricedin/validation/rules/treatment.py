"""Treatment-use rules — hazard class against exposure."""

from __future__ import annotations

from pricedin.config import IN_GROUND_STRUCTURAL_TREATMENT, INTERIOR_TREATMENT
from pricedin.extraction.schema import MaterialType
from pricedin.validation.context import QuoteContext
from pricedin.validation.jobs import (
    is_ground_contact_job,
    is_outdoor_job,
    required_treatment,
    treatment_rank,
)
from pricedin.validation.rules.base import ValidationFinding, ValidationRule

# Structural members that go into the ground (fence posts are not structural)
_IN_GROUND_MEMBERS = frozenset({MaterialType.PILE, MaterialType.POST})

# Always exposed to weather, whatever the job label says
_EXTERIOR_MEMBERS = frozenset({
    MaterialType.DECKING,
    MaterialType.WEATHERBOARD,
    MaterialType.POST,
    MaterialType.PILE,
    MaterialType.FENCE_POST,
})

# Exposed when used on an outdoor job
_OUTDOOR_FRAMING = frozenset({MaterialType.BEARER, MaterialType.JOIST})

_UNTREATED_CHECKED = frozenset({
    MaterialType.BEARER,
    MaterialType.JOIST,
    MaterialType.DECKING,
    MaterialType.POST,
    MaterialType.FENCE_POST,
    MaterialType.PILE,
})


class InGroundTreatment(ValidationRule):
    """In-ground piles and posts must carry the in-ground structural grade."""

    @property
    def name(self) -> str:
        return "treatment.in_ground"

    @property
    def description(self) -> str:
        return "In-ground structural piles and posts must be H5 or higher."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        if not is_ground_contact_job(context.job_type):
            return findings

        minimum = treatment_rank(IN_GROUND_STRUCTURAL_TREATMENT)
        for line in context.lines:
            treatment = line.attributes.treatment
            if line.member not in _IN_GROUND_MEMBERS or treatment is None:
                continue
            if treatment_rank(treatment) < minimum:
                findings.append(self.finding(
                    f"{treatment} TIMBER NOT SUITABLE FOR IN-GROUND STRUCTURAL USE: "
                    f"{line.name}. In-ground piles and posts must be "
                    f"{IN_GROUND_STRUCTURAL_TREATMENT} treated; {treatment} is for "
                    f"fence posts and above-ground use.",
                    suggestion="Replace with 125x125 H5 timber pile or use anchor piles.",
                    item=line.index,
                    item_name=line.name,
                ))
        return findings


class InteriorTreatmentOutdoors(ValidationRule):
    """Interior-only treatment must not be used on exposed members."""

    @property
    def name(self) -> str:
        return "treatment.interior_outdoors"

    @property
    def description(self) -> str:
        return "H1.2 is interior-only; exterior members need H3.2 or higher."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        outdoor = is_outdoor_job(context.job_type)

        for line in context.lines:
            if line.attributes.treatment != INTERIOR_TREATMENT:
                continue
            member = line.member
            exposed = member in _EXTERIOR_MEMBERS or (outdoor and member in _OUTDOOR_FRAMING)
            if not exposed:
                continue
            component = member.value.replace("_", " ")
            needed = required_treatment(component, in_ground=member in _IN_GROUND_MEMBERS)
            findings.append(self.finding(
                f"H1.2 TIMBER NOT SUITABLE FOR EXTERIOR USE: {line.name}. "
                f"H1.2 is interior-only treatment.",
                suggestion=f"Replace with {needed} treated timber.",
                item=line.index,
                item_name=line.name,
            ))
        return findings


class MissingTreatment(ValidationRule):
    """Outdoor structural timber should state its treatment."""

    severity = "warning"

    @property
    def name(self) -> str:
        return "treatment.missing"

    @property
    def description(self) -> str:
        return "Outdoor structural members without a recognisable H-code."

    def check(self, context: QuoteContext) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        if not is_outdoor_job(context.job_type):
            return findings

        for line in context.lines:
            if line.member not in _UNTREATED_CHECKED or line.attributes.treatment:
                continue
            findings.append(self.finding(
                f"OUTDOOR TIMBER MAY NEED TREATMENT CHECK: {line.name} has no "
                f"H-treatment specified.",
                suggestion="Ensure all outdoor timber is H3.2 minimum (H5 for in-ground).",
                item=line.index,
                item_name=line.name,
            ))
        return findings


class TreatmentRules:
    """Collection of treatment-use rules."""

    @staticmethod
    def all_rules() -> list[ValidationRule]:
        return [InGroundTreatment(), InteriorTreatmentOutdoors(), MissingTreatment()]
