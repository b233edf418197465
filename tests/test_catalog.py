"""Tests for catalog ingestion, the inverted index, the resolver and AI parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pricedin.catalog import (
    CatalogIndex,
    Resolver,
    extract_payload,
    load_records,
    normalize_text,
    parse_ai_labour,
    parse_ai_response,
    search_suggestions,
    tokenize,
)
from pricedin.catalog.resolver import REASON_NO_MATCH, REASON_NO_TOKENS
from pricedin.config import load_thresholds
from pricedin.models.quote import AISuggestion


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


class TestLoadRecords:

    def test_loads_every_row(self, records) -> None:
        assert len(records) == 9
        assert records[3].attributes.fixing_type == "hanger"

    def test_duplicate_ids_keep_first(self) -> None:
        rows = [
            {"name": "POST STIRRUP GALV", "price": 12, "code": "PS1"},
            {"name": "POST STIRRUP STAINLESS", "price": 30, "code": "PS1"},
        ]
        records = load_records(rows)
        assert len(records) == 1
        assert records[0].price == 12

    def test_strict_raises_on_bad_row(self) -> None:
        with pytest.raises(ValidationError):
            load_records([{"name": "", "price": 5}])

    def test_lenient_skips_bad_row(self) -> None:
        records = load_records(
            [{"name": "", "price": 5}, {"name": "POST STIRRUP", "price": 12}],
            strict=False,
        )
        assert [r.name for r in records] == ["POST STIRRUP"]


# ---------------------------------------------------------------------------
# Tokenisation and index
# ---------------------------------------------------------------------------


class TestIndex:

    def test_normalize_joins_sections(self) -> None:
        assert normalize_text("140 x 45 Radiata, H3.2") == "140X45 RADIATA H3.2"

    def test_tokenize_drops_noise_and_trailing_dots(self) -> None:
        assert tokenize("140 x 45 H3.2.") == ["140X45", "H3.2"]

    def test_tokenize_dedupes_in_order(self) -> None:
        assert tokenize("L/LOK hanger HANGER x") == ["LOK", "HANGER"]

    def test_tokenize_empty(self) -> None:
        assert tokenize("") == []
        assert tokenize(None) == []

    def test_postings_are_ascending(self, index: CatalogIndex) -> None:
        assert index.positions("H3.2") == (0, 1, 8)
        assert index.positions("RADIATA") == (0, 1, 2)

    def test_unknown_token(self, index: CatalogIndex) -> None:
        assert index.positions("NURALOCK") == ()
        assert "NURALOCK" not in index

    def test_accessors(self, index: CatalogIndex, records) -> None:
        assert len(index) == len(records)
        assert index.record(3) is records[3]
        assert "HANGER" in index.tokens_of(3)
        assert index.get(records[5].id) is records[5]
        assert index.get("missing") is None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolve:

    def test_hanger_beats_framing(self, resolver: Resolver) -> None:
        item = resolver.resolve({"searchTerm": "JOIST HANGER 140X45", "qty": 2})
        assert item.matched
        assert item.record.name == "L/LOK 140 X 45 JOIST HANGER GALV"
        assert item.quantity == 2
        assert item.confidence == pytest.approx(1.0)
        assert item.warnings == []

    def test_key_tokens_narrow(self, resolver: Resolver) -> None:
        item = resolver.resolve({"searchTerm": "140x45 H3.2 SG8 framing", "qtyToOrder": 8})
        assert item.record.name == "140 X 45 RADIATA SG8 H3.2 KD 4.8M"
        assert item.confidence == pytest.approx(0.75)

    def test_moisture_lining_selected(self, resolver: Resolver) -> None:
        item = resolver.resolve({"searchTerm": "GIB AQUALINE 10mm", "qty": 6})
        assert item.record.name == "GIB AQUALINE 2400X1200X10MM"

    def test_missing_key_token_is_unmatched(self, resolver: Resolver) -> None:
        item = resolver.resolve({"name": "140x45 H3.1 Radiata", "qty": 4})
        assert not item.matched
        assert item.reason == REASON_NO_MATCH
        assert item.quantity == 4
        assert item.suggestions == ["140 X 45", "H3.1", "RADIATA"]

    def test_unknown_product_is_unmatched(self, resolver: Resolver) -> None:
        item = resolver.resolve(AISuggestion(name="Nuralock bracket", qty_to_order=3))
        assert not item.matched
        assert item.name == "Nuralock bracket"
        assert 1 <= len(item.suggestions) <= 4
        assert "BRACKET" in item.suggestions

    def test_blank_request(self, resolver: Resolver) -> None:
        item = resolver.resolve({"searchTerm": "  ", "qty": 1})
        assert not item.matched
        assert item.reason == REASON_NO_TOKENS
        assert item.name == "Unknown item"
        assert item.suggestions == ["UNKNOWN", "ITEM"]

    def test_search_term_only_not_repeated(self, resolver: Resolver) -> None:
        item = resolver.resolve({"searchTerm": "a b", "qty": 1})
        assert item.reason == REASON_NO_TOKENS
        assert item.name == "a b"
        assert item.suggestions == ["A B"]

    def test_rejects_non_mapping(self, resolver: Resolver) -> None:
        with pytest.raises(TypeError):
            resolver.resolve("JOIST HANGER")


class TestQuantities:

    def test_rounds_up(self, resolver: Resolver) -> None:
        assert resolver.resolve({"searchTerm": "JOIST HANGER", "qty": 2.2}).quantity == 3

    def test_zero_becomes_one(self, resolver: Resolver) -> None:
        assert resolver.resolve({"searchTerm": "JOIST HANGER", "qty": 0}).quantity == 1

    def test_inflated_quantity_recalculated(self, resolver: Resolver) -> None:
        item = resolver.resolve({
            "searchTerm": "DECK SCREW 10G SS316",
            "qtyToOrder": 400,
            "totalNeeded": 1200,
        })
        assert item.record.packaging.units_per_package == 500
        assert item.quantity == 3
        assert len(item.warnings) == 1
        assert "recalculated" in item.warnings[0]

    def test_package_size_is_display_only(self, resolver: Resolver) -> None:
        item = resolver.resolve({
            "searchTerm": "DECK SCREW 10G SS316",
            "qtyToOrder": 400,
            "totalNeeded": 1200,
            "packageSize": "box of 100",
        })
        assert item.quantity == 3
        assert AISuggestion.model_validate({"packageSize": 100}).package_size == "100"

    def test_reasonable_quantity_kept(self, resolver: Resolver) -> None:
        item = resolver.resolve({
            "searchTerm": "DECK SCREW 10G SS316",
            "qtyToOrder": 5,
            "totalNeeded": 1200,
        })
        assert item.quantity == 5
        assert item.warnings == []

    def test_quantity_from_total(self, resolver: Resolver) -> None:
        item = resolver.resolve({"searchTerm": "DECK SCREW 10G SS316", "totalNeeded": 1200})
        assert item.quantity == 3

    def test_recalc_factor_override(self, index: CatalogIndex) -> None:
        resolver = Resolver(index, load_thresholds(recalc_factor=200))
        item = resolver.resolve({
            "searchTerm": "DECK SCREW 10G SS316",
            "qtyToOrder": 400,
            "totalNeeded": 1200,
        })
        assert item.quantity == 400

    def test_high_value_warning(self, resolver: Resolver) -> None:
        item = resolver.resolve({"searchTerm": "125x125 H5 pile", "qty": 120})
        assert item.line_value == pytest.approx(5400)
        assert len(item.warnings) == 1
        assert item.warnings[0].startswith("High value")


class TestResolveAll:

    def test_merges_same_record(self, resolver: Resolver) -> None:
        items = resolver.resolve_all([
            {"searchTerm": "140x45 H3.2 SG8", "qty": 6, "calculation": "joists"},
            {"name": "Nuralock bracket", "qty": 2},
            {"searchTerm": "140X45 SG8 H3.2 radiata", "qty": 4, "calculation": "blocking"},
        ])
        assert len(items) == 2
        assert items[0].record.name == "140 X 45 RADIATA SG8 H3.2 KD 4.8M"
        assert items[0].quantity == 10
        assert items[0].calculation == "joists; blocking"
        assert not items[1].matched

    def test_unmatched_never_merged(self, resolver: Resolver) -> None:
        items = resolver.resolve_all([
            {"name": "Nuralock bracket", "qty": 2},
            {"name": "Nuralock bracket", "qty": 2},
        ])
        assert len(items) == 2
        assert all(not item.matched for item in items)

    def test_merged_lines_have_distinct_records(self, resolver: Resolver) -> None:
        items = resolver.resolve_all([
            {"searchTerm": "JOIST HANGER", "qty": 4},
            {"searchTerm": "125x125 H5 pile", "qty": 9},
            {"searchTerm": "L/LOK HANGER", "qty": 8},
        ])
        ids = [item.record.id for item in items if item.matched]
        assert len(ids) == len(set(ids))
        assert items[0].quantity == 12

    def test_empty(self, resolver: Resolver) -> None:
        assert resolver.resolve_all([]) == []


# ---------------------------------------------------------------------------
# Search suggestions
# ---------------------------------------------------------------------------


class TestSuggestions:

    def test_hanger_not_framing(self) -> None:
        assert search_suggestions("Joist hanger 190x45") == ["190 X 45", "HANGER"]

    def test_connector_with_finish(self) -> None:
        assert search_suggestions("Post stirrup galv") == ["STIRRUP", "GALV"]

    def test_capped(self) -> None:
        terms = search_suggestions("GIB Aqualine 2400x1200", "GIB AQUALINE H1.2 stainless")
        assert 1 <= len(terms) <= 4

    def test_never_empty(self) -> None:
        assert search_suggestions("", None) == ["MATERIAL"]

    def test_same_name_and_term_used_once(self) -> None:
        assert search_suggestions("a b", "a b") == ["A B"]
        assert search_suggestions(" a b ", "a b") == ["A B"]


# ---------------------------------------------------------------------------
# AI response parsing
# ---------------------------------------------------------------------------


class TestAIParsing:

    def test_fenced_block(self) -> None:
        text = (
            "Here is the list:\n```json\n"
            '{"materials": [{"name": "Joist hanger", "searchTerm": "JOIST HANGER 140X45", "qtyToOrder": 12}]}\n'
            "```\nLet me know."
        )
        [suggestion] = parse_ai_response(text)
        assert suggestion.search_term == "JOIST HANGER 140X45"
        assert suggestion.qty_to_order == 12

    def test_stray_brace_before_payload(self) -> None:
        text = 'Use {braces} sparingly. {"materials": [{"name": "Pile", "qty": 9}]} Thanks.'
        [suggestion] = parse_ai_response(text)
        assert suggestion.name == "Pile"
        assert suggestion.qty_to_order == 9

    def test_braces_inside_strings(self) -> None:
        text = '{"materials": [{"name": "Bracket {galv}", "calculation": "2 per post }"}]}'
        [suggestion] = parse_ai_response(text)
        assert suggestion.name == "Bracket {galv}"

    def test_no_payload(self) -> None:
        assert parse_ai_response("Sorry, I can't help with that.") == []
        assert parse_ai_response(None) == []
        assert extract_payload('{"notes": "no materials here"}') is None

    def test_non_object_entries_skipped(self) -> None:
        text = '{"materials": ["junk", 4, {"name": "Pile", "totalNeeded": "9"}]}'
        [suggestion] = parse_ai_response(text)
        assert suggestion.total_needed == 9

    def test_unparseable_quantity_is_none(self) -> None:
        [suggestion] = parse_ai_response('{"materials": [{"name": "Pile", "qty": "lots"}]}')
        assert suggestion.qty_to_order is None

    def test_labour(self) -> None:
        text = '{"materials": [], "labour": {"totalHours": 16, "description": "Deck build"}}'
        labour = parse_ai_labour(text)
        assert labour is not None
        assert labour.hours == 16
        assert labour.rate == 95
        assert labour.cost == pytest.approx(1520)

    def test_no_labour(self) -> None:
        assert parse_ai_labour('{"materials": []}') is None
        assert parse_ai_labour('{"materials": [], "labour": {"totalHours": 0}}') is None
