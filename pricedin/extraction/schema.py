"""ParsedAttributes — structured facts extracted from a catalog display name.

Every field is optional: a missing value means the name did not state it,
not that extraction failed.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class MaterialType(str, Enum):
    """Material classification tag."""

    # Timber members
    FRAMING = "framing"
    BEARER = "bearer"
    JOIST = "joist"
    RAFTER = "rafter"
    PURLIN = "purlin"
    BATTEN = "batten"
    DECKING = "decking"
    POST = "post"
    FENCE_POST = "fence_post"
    PILE = "pile"
    WEATHERBOARD = "weatherboard"

    # Sheets
    GIB = "gib"
    PLYWOOD = "plywood"
    PARTICLEBOARD = "particleboard"
    MDF = "mdf"
    CEMENT_BOARD = "cement_board"

    # Fixings
    SCREW = "screw"
    NAIL = "nail"
    BOLT = "bolt"
    HANGER = "hanger"
    BRACKET = "bracket"
    ANCHOR = "anchor"
    STIRRUP = "stirrup"

    # Building materials and finishes
    CONCRETE = "concrete"
    INSULATION = "insulation"
    MEMBRANE = "membrane"
    FLASHING = "flashing"
    ADHESIVE = "adhesive"
    HARDWARE = "hardware"

    OTHER = "other"


FIXING_TYPES = frozenset({
    MaterialType.SCREW,
    MaterialType.NAIL,
    MaterialType.BOLT,
    MaterialType.HANGER,
    MaterialType.BRACKET,
    MaterialType.ANCHOR,
    MaterialType.STIRRUP,
})

SHEET_TYPES = frozenset({
    MaterialType.GIB,
    MaterialType.PLYWOOD,
    MaterialType.PARTICLEBOARD,
    MaterialType.MDF,
    MaterialType.CEMENT_BOARD,
})

FRAMING_TYPES = frozenset({
    MaterialType.FRAMING,
    MaterialType.BEARER,
    MaterialType.JOIST,
    MaterialType.RAFTER,
    MaterialType.PURLIN,
    MaterialType.BATTEN,
})

_FIXING_FIELDS = ("fixing_type", "fixing_material", "diameter", "fixing_length", "pack_size")
_SHEET_FIELDS = ("sheet_width", "sheet_height", "thickness", "lining_type")


class ParsedAttributes(BaseModel):
    """Structured attributes of one catalog product name.

    Dimensions are in millimetres.  Fixing fields are only set for fixing
    types, sheet fields only for sheet types, ``r_value`` only for
    insulation.
    """

    model_config = ConfigDict(frozen=True)

    # Timber cross-section and length
    width: int | None = None
    depth: int | None = None
    length: int | None = None
    length_display: str | None = None
    variable_length: bool = False
    """True for EMS (estimated mill size) stock sold at variable length."""

    # Classification
    type: MaterialType = MaterialType.OTHER
    species: str | None = None
    grade: str | None = None
    treatment: str | None = None
    finish: str | None = None

    # Fixings
    fixing_type: str | None = None
    fixing_material: str | None = None
    diameter: str | None = None
    fixing_length: int | None = None
    pack_size: int | None = None

    # Sheets
    sheet_width: int | None = None
    sheet_height: int | None = None
    thickness: int | None = None
    lining_type: str | None = None

    # Insulation
    r_value: str | None = None

    @property
    def is_fixing(self) -> bool:
        return self.type in FIXING_TYPES

    @property
    def is_sheet(self) -> bool:
        return self.type in SHEET_TYPES

    @property
    def is_framing(self) -> bool:
        return self.type in FRAMING_TYPES

    @property
    def cross_section(self) -> str | None:
        """Return the ``"140x45"`` style section label, if known."""
        if self.width is None or self.depth is None:
            return None
        return f"{self.width}x{self.depth}"

    def describe(self) -> str:
        """Compact description, e.g. ``"140x45 H3.2 SG8 framing Radiata 4.8m"``."""
        parts: list[str] = []
        if self.cross_section:
            parts.append(self.cross_section)
        if self.treatment:
            parts.append(self.treatment)
        if self.grade:
            parts.append(self.grade)
        if self.type is not MaterialType.OTHER:
            parts.append(self.type.value.replace("_", " "))
        if self.species:
            parts.append(self.species)
        if self.length_display:
            parts.append(self.length_display)
        if self.sheet_width and self.sheet_height:
            parts.append(f"{self.sheet_width}x{self.sheet_height}")
            if self.thickness:
                parts.append(f"{self.thickness}mm")
        if self.lining_type:
            parts.append(self.lining_type)
        if self.fixing_type:
            if self.diameter:
                parts.append(self.diameter)
            if self.fixing_length:
                parts.append(f"{self.fixing_length}mm")
            if self.fixing_material:
                parts.append(self.fixing_material)
        if self.pack_size:
            parts.append(f"(box of {self.pack_size})")
        if self.r_value:
            parts.append(self.r_value)
        return " ".join(parts)

    def search_terms(self) -> list[str]:
        """Upper-case search tokens derived from the parsed values."""
        terms: list[str] = []
        for value in (
            self.cross_section,
            self.treatment,
            self.grade,
            self.species,
            self.lining_type,
            self.fixing_material,
            self.r_value,
        ):
            if value:
                terms.append(value.upper())
        if self.type is not MaterialType.OTHER:
            terms.append(self.type.value.upper())
        return terms

    def leaked_fields(self) -> list[str]:
        """Return the names of any group fields set outside their type group."""
        leaked: list[str] = []
        if not self.is_fixing:
            leaked.extend(f for f in _FIXING_FIELDS if getattr(self, f) is not None)
        if not self.is_sheet:
            leaked.extend(f for f in _SHEET_FIELDS if getattr(self, f) is not None)
        if self.type is not MaterialType.INSULATION and self.r_value is not None:
            leaked.append("r_value")
        return leaked
