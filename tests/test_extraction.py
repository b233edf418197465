"""Tests for the attribute extractor and packaging inference.

Covers: cross-sections, lengths, treatment codes, vocabularies, type
classification precedence, fixing / sheet / insulation groups, supplier
units, packaging rules and catalog record ingestion.
"""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from pricedin.extraction import MaterialType, ParsedAttributes, classify_type, extract
from pricedin.extraction.packaging import infer_packaging, normalise_unit
from pricedin.extraction.properties import (
    extract_cross_section,
    extract_length,
    extract_treatment,
)
from pricedin.models.catalog import CatalogRecord, SellUnit


# ---------------------------------------------------------------------------
# End-to-end extraction
# ---------------------------------------------------------------------------


class TestExtractEndToEnd:
    """Full extraction: product name in, ParsedAttributes out."""

    def test_framing_stock_name(self) -> None:
        attrs = extract("140X45 RAD SG8 H3.2 KD 4.8M")
        assert attrs.width == 140
        assert attrs.depth == 45
        assert attrs.species == "Radiata"
        assert attrs.grade == "SG8"
        assert attrs.treatment == "H3.2"
        assert attrs.finish == "KD"
        assert attrs.length == pytest.approx(4800)
        assert attrs.length_display == "4.8m"
        assert attrs.type is MaterialType.FRAMING

    def test_unrecognised_name_is_all_null(self) -> None:
        attrs = extract("MYSTERY ITEM")
        assert attrs == ParsedAttributes()
        assert attrs.type is MaterialType.OTHER

    def test_empty_and_none_names(self) -> None:
        assert extract("") == ParsedAttributes()
        assert extract(None) == ParsedAttributes()

    def test_idempotent(self) -> None:
        name = "DECK SCREW 10G X 65MM SS316 BOX 500"
        assert extract(name) == extract(name)
        assert extract(name).model_dump() == extract(name).model_dump()

    def test_describe_is_compact(self) -> None:
        desc = extract("140X45 RAD SG8 H3.2 KD 4.8M").describe()
        assert desc.startswith("140x45 H3.2 SG8 framing")
        assert "4.8m" in desc

    def test_search_terms(self) -> None:
        attrs = extract("140X45 RAD SG8 H3.2 KD 4.8M")
        assert attrs.is_framing
        assert attrs.search_terms() == ["140X45", "H3.2", "SG8", "RADIATA", "FRAMING"]
        assert extract("MYSTERY ITEM").search_terms() == []


# ---------------------------------------------------------------------------
# Cross-section and length
# ---------------------------------------------------------------------------


class TestCrossSection:

    def test_orders_by_magnitude(self) -> None:
        attrs = extract("45 x 140 RADIATA H3.2")
        assert (attrs.width, attrs.depth) == (140, 45)

    @pytest.mark.parametrize("name", [
        "90X45 H1.2 MSG8",
        "190 x 45 SG8",
        "100×100 H4 POST",
        "290X45 H3.2",
    ])
    def test_width_not_less_than_depth_and_in_range(self, name: str) -> None:
        attrs = extract(name)
        assert attrs.width is not None and attrs.depth is not None
        assert attrs.width >= attrs.depth
        assert 20 <= attrs.depth <= attrs.width <= 300

    def test_out_of_range_dropped(self) -> None:
        assert extract_cross_section("10X10 FILLET") is None
        assert extract_cross_section("450X350 BEAM") is None

    def test_sheet_size_not_read_as_section(self) -> None:
        assert extract_cross_section("GIB STANDARD 2400X1200X10MM") is None

    def test_metre_length(self) -> None:
        assert extract_length("140X45 H3.2 6.0M") == {"length": 6000, "length_display": "6.0m"}

    def test_millimetre_length(self) -> None:
        assert extract_length("90X45 H1.2 2400MM")["length"] == 2400

    def test_overlong_metre_token_ignored(self) -> None:
        assert extract_length("HOSE 30M") == {}

    def test_ems_is_variable_length(self) -> None:
        attrs = extract("90X45 H1.2 MSG8 EMS")
        assert attrs.variable_length is True
        assert attrs.length is None
        assert attrs.length_display == "EMS"
        assert attrs.grade == "MSG8"


# ---------------------------------------------------------------------------
# Treatment
# ---------------------------------------------------------------------------


class TestTreatment:

    @pytest.mark.parametrize("name,expected", [
        ("90X45 H1.2 SG8", "H1.2"),
        ("100X100 H4 POST", "H4"),
        ("125X125 H5 PILE", "H5"),
        ("MARINE PILE H6", "H6"),
        ("150X50 H3.1 FASCIA", "H3.1"),
    ])
    def test_valid_codes(self, name: str, expected: str) -> None:
        assert extract_treatment(name) == expected

    @pytest.mark.parametrize("name", ["100X50 H7 TIMBER", "90X45 H4.5", "H2 BOARD"])
    def test_out_of_set_codes_rejected(self, name: str) -> None:
        assert extract(name).treatment is None

    def test_first_code_only(self) -> None:
        assert extract_treatment("H7 OR H5 POST") is None


# ---------------------------------------------------------------------------
# Type classification precedence
# ---------------------------------------------------------------------------


class TestClassification:

    @pytest.mark.parametrize("name,expected", [
        ("JOIST HANGER 140X45 GALV", MaterialType.HANGER),
        ("POST STIRRUP GALV", MaterialType.STIRRUP),
        ("100X100 H4 FENCE POST 2.4M", MaterialType.FENCE_POST),
        ("125X125 H5 PILE 1.8M", MaterialType.PILE),
        ("100X100 H3.2 PILE", MaterialType.PILE),
        ("100X100 H4 POST", MaterialType.POST),
        ("DECK SCREW 10G X 65MM", MaterialType.SCREW),
        ("PINE DECKING 140X32 H3.2", MaterialType.DECKING),
        ("GIB AQUALINE 2400X1200X10MM", MaterialType.GIB),
        ("PINK BATTS R2.6 WALL", MaterialType.INSULATION),
        ("M12 COACH SCREW 100MM", MaterialType.BOLT),
        ("190X45 H3.2 BEARER", MaterialType.BEARER),
        ("140X45 H3.2 JOIST", MaterialType.JOIST),
        ("90X45 H1.2", MaterialType.FRAMING),
    ])
    def test_first_match_wins(self, name: str, expected: MaterialType) -> None:
        assert extract(name).type is expected

    def test_graded_timber_is_framing(self) -> None:
        assert classify_type("140X45 SG8 BEARER", {"grade": "SG8"}) is MaterialType.FRAMING

    def test_no_attrs_no_guarded_rules(self) -> None:
        assert classify_type("90X45 H1.2") is MaterialType.OTHER


# ---------------------------------------------------------------------------
# Type groups
# ---------------------------------------------------------------------------


class TestTypeGroups:

    def test_fixing_group(self) -> None:
        attrs = extract("DECK SCREW 10G X 65MM SS316 BOX 500")
        assert attrs.fixing_type == "screw"
        assert attrs.fixing_material == "Stainless 316"
        assert attrs.diameter == "10g"
        assert attrs.fixing_length == 65
        assert attrs.pack_size == 500
        assert attrs.is_fixing

    def test_metric_bolt(self) -> None:
        attrs = extract("M12 X 150 GALV BOLT")
        assert attrs.type is MaterialType.BOLT
        assert attrs.diameter == "M12"
        assert attrs.fixing_material == "Galvanised"

    def test_connector_has_no_shank_length(self) -> None:
        attrs = extract("JOIST HANGER 140X45 GALV")
        assert attrs.fixing_type == "hanger"
        assert attrs.fixing_length is None

    def test_sheet_group(self) -> None:
        attrs = extract("GIB STANDARD 2400X1200X10MM")
        assert attrs.sheet_width == 1200
        assert attrs.sheet_height == 2400
        assert attrs.thickness == 10
        assert attrs.lining_type == "Standard"
        assert attrs.is_sheet

    def test_sheet_thickness_fallback(self) -> None:
        attrs = extract("PLYWOOD CD STRUCTURAL 2400X1200 17MM")
        assert attrs.type is MaterialType.PLYWOOD
        assert attrs.thickness == 17

    def test_insulation_r_value(self) -> None:
        assert extract("PINK BATTS R2.6 WALL").r_value == "R2.6"

    @pytest.mark.parametrize("name", [
        "140X45 RAD SG8 H3.2 KD 4.8M",
        "DECK SCREW 10G X 65MM SS316 BOX 500",
        "GIB AQUALINE 2400X1200X10MM",
        "PINK BATTS R2.6 WALL",
        "JOIST HANGER 140X45 GALV",
    ])
    def test_only_active_group_populated(self, name: str) -> None:
        assert extract(name).leaked_fields() == []


# ---------------------------------------------------------------------------
# Supplier units and packaging
# ---------------------------------------------------------------------------


class TestPackaging:

    @pytest.mark.parametrize("raw,expected", [
        ("LGTH", SellUnit.LENGTH),
        ("LM", SellUnit.LINEAL_METRE),
        ("EA", SellUnit.EACH),
        ("SHT", SellUnit.SHEET),
        ("BAG", SellUnit.BAG),
        ("BOX", SellUnit.BOX),
        ("PKT", SellUnit.PACK),
        ("L", SellUnit.LITRE),
        ("m2", SellUnit.SQUARE_METRE),
        ("", SellUnit.EACH),
        (None, SellUnit.EACH),
    ])
    def test_normalise_unit(self, raw: str | None, expected: SellUnit) -> None:
        assert normalise_unit(raw) is expected

    def test_fixings_by_box(self) -> None:
        p = infer_packaging("DECK SCREW 10G X 65MM SS316 BOX 500", "BOX")
        assert (p.unit_type, p.units_per_package, p.sell_unit) == ("box", 500, SellUnit.BOX)

    def test_fixing_box_default(self) -> None:
        assert infer_packaging("TEXTURED DECK SCREWS").units_per_package == 200

    def test_stain_by_tin(self) -> None:
        p = infer_packaging("RESENE DECK STAIN 4L")
        assert p.unit_type == "tin"
        assert p.units_per_package == pytest.approx(4.0)

    def test_concrete_by_bag(self) -> None:
        p = infer_packaging("CONCRETE MIX 25KG")
        assert (p.unit_type, p.units_per_package, p.sell_unit) == ("bag", 25, SellUnit.BAG)

    def test_framing_per_length(self) -> None:
        p = infer_packaging("140X45 RAD SG8 H3.2 KD 4.8M", "LGTH")
        assert p.unit_type == "length"
        assert p.units_per_package == pytest.approx(4.8)
        assert p.sell_unit is SellUnit.LENGTH

    def test_framing_per_metre(self) -> None:
        p = infer_packaging("140X45 RAD SG8 H3.2 KD", "LM")
        assert (p.unit_type, p.units_per_package, p.sell_unit) == ("meter", 1, SellUnit.LINEAL_METRE)

    def test_default_each(self) -> None:
        p = infer_packaging("MYSTERY ITEM", "EA")
        assert (p.unit_type, p.units_per_package, p.sell_unit) == ("each", 1, SellUnit.EACH)


# ---------------------------------------------------------------------------
# Catalog record ingestion
# ---------------------------------------------------------------------------


class TestCatalogRecord:

    def test_from_raw(self) -> None:
        record = CatalogRecord.from_raw({
            "name": "140X45 RAD SG8 H3.2 KD 4.8M",
            "price": 38.5,
            "unit": "LGTH",
            "code": "RAD1404548",
            "supplier": "ITM",
            "priceUpdated": "2025-01-10",
        })
        assert record.id == "rad1404548"
        assert record.unit is SellUnit.LENGTH
        assert record.attributes.width == 140
        assert record.packaging.unit_type == "length"
        assert record.price_updated == date(2025, 1, 10)
        assert record.describe().startswith("140x45 H3.2 SG8 framing")

    def test_id_from_name_without_code(self) -> None:
        record = CatalogRecord.from_raw({"name": "Post Stirrup Galv", "price": 12})
        assert record.id == "post-stirrup-galv"
        assert record.supplier == "Unknown"

    def test_records_are_immutable(self) -> None:
        record = CatalogRecord.from_raw({"name": "POST STIRRUP", "price": 12})
        with pytest.raises(ValidationError):
            record.price = 1.0

    def test_missing_name_raises(self) -> None:
        with pytest.raises(ValidationError):
            CatalogRecord.from_raw({"price": 10})

    def test_negative_price_raises(self) -> None:
        with pytest.raises(ValidationError):
            CatalogRecord.from_raw({"name": "POST STIRRUP", "price": -1})
