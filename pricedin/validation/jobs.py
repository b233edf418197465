"""Job-type helpers — which rule subsets apply to a free-text job label.

Job labels come straight from the user ("Deck extension", "ensuite reno"),
so every check is a case-insensitive substring test.
"""

from __future__ import annotations

from pricedin.config import IN_GROUND_STRUCTURAL_TREATMENT, INTERIOR_TREATMENT, TREATMENT_CODES

_STRUCTURAL_JOBS = ("deck", "pergola", "carport", "foundation", "retaining")
_GROUND_CONTACT_JOBS = ("deck", "pergola", "carport", "foundation", "retaining")
_OUTDOOR_JOBS = ("deck", "pergola", "fence", "exterior", "outdoor", "carport", "retaining")
_WET_AREA_JOBS = ("bathroom", "laundry", "wet", "ensuite", "shower")


def _label(job_type: str | None) -> str:
    return (job_type or "").strip().lower()


def _matches(job_type: str | None, keywords: tuple[str, ...]) -> bool:
    label = _label(job_type)
    return any(k in label for k in keywords)


def is_structural_job(job_type: str | None) -> bool:
    return _matches(job_type, _STRUCTURAL_JOBS)


def is_ground_contact_job(job_type: str | None) -> bool:
    """Jobs whose posts and piles go into the ground."""
    return _matches(job_type, _GROUND_CONTACT_JOBS)


def is_outdoor_job(job_type: str | None) -> bool:
    return _matches(job_type, _OUTDOOR_JOBS)


def is_deck_job(job_type: str | None) -> bool:
    return "deck" in _label(job_type)


def is_wet_area_job(job_type: str | None) -> bool:
    return _matches(job_type, _WET_AREA_JOBS)


def required_treatment(component: str | None, in_ground: bool = False) -> str:
    """Minimum treatment code for a component description.

    >>> required_treatment("pile", in_ground=True)
    'H5'
    >>> required_treatment("fence post")
    'H4'
    """
    comp = (component or "").lower()

    if in_ground and any(k in comp for k in ("pile", "post", "retaining")):
        return IN_GROUND_STRUCTURAL_TREATMENT
    if any(k in comp for k in ("bearer", "joist", "decking")):
        return "H3.2"
    if "fence" in comp and "post" in comp:
        return "H4"
    if any(k in comp for k in ("rail", "paling")):
        return "H3.2"
    if any(k in comp for k in ("framing", "stud")):
        return INTERIOR_TREATMENT
    if any(k in comp for k in ("wet", "bathroom")):
        return "H3.1"
    return INTERIOR_TREATMENT


def treatment_rank(code: str | None) -> int:
    """Hazard-class rank of *code*; -1 for unknown or missing codes."""
    if code not in TREATMENT_CODES:
        return -1
    return TREATMENT_CODES.index(code)
