"""Tests for the parts catalog text parser."""

import json

from src.etl.catalog_parser import (
    clean_branding,
    is_part_number,
    is_valid_subcategory,
    parse_catalog_lines,
    summarize,
    write_parts_json,
)


class TestPartNumbers:
    def test_recognizes_catalog_forms(self):
        for pn in ("1R0750", "4N8969", "1234567", "600-21-1234", "R12345"):
            assert is_part_number(pn), pn

    def test_rejects_words_and_short_numbers(self):
        for token in ("ENGINE", "GASKET", "1234", "Hello", "TURBOCHARGERS", "D8K,"):
            assert not is_part_number(token), token


class TestSubcategories:
    def test_known_heading(self):
        assert is_valid_subcategory("EXHAUST MANIFOLDS")
        assert is_valid_subcategory("RADIATORS FOR KOMATSU (CONT.)")

    def test_model_lists_are_not_headings(self):
        assert not is_valid_subcategory("D6T, D7R, D8T, D9")

    def test_heading_with_part_word(self):
        assert is_valid_subcategory("SPECIAL HYDRAULIC ADAPTERS")


def test_clean_branding_removes_vendor_name():
    assert clean_branding("Costex Tractor Parts Turbo®") == "Turbo"
    assert clean_branding("CTP Radiator") == "Radiator"


class TestParseCatalogLines:
    def test_extracts_parts_with_columns(self):
        lines = [
            "Turbochargers",
            "C SERIES TURBOCHARGERS",
            "3306  1R0750  4N8969  D8K, 966C",
            "1R0750  repeated",
        ]

        parts = parse_catalog_lines(lines)

        assert [p.part_number for p in parts] == ["1R0750", "4N8969"]
        first = parts[0]
        assert first.category == "Turbochargers"
        assert first.subcategory == "C SERIES TURBOCHARGERS"
        assert first.description == "C SERIES TURBOCHARGERS"
        assert first.engine_model == "3306"
        assert first.gasket == "4N8969"
        assert first.equipment == "D8K, 966C"

    def test_ignores_lines_before_first_category(self):
        lines = ["1R0750  4N8969", "Filters", "9Y4520"]

        parts = parse_catalog_lines(lines)

        assert [p.part_number for p in parts] == ["9Y4520"]
        assert parts[0].category == "Filters"

    def test_skips_branding_and_page_numbers(self):
        lines = ["Bearings", "Costex Tractor Parts 1R0750", "112", "8E6262"]

        parts = parse_catalog_lines(lines)

        assert [p.part_number for p in parts] == ["8E6262"]


def test_write_and_summarize(tmp_path):
    parts = parse_catalog_lines(["Filters", "OIL FILTERS", "1R0750", "1R0751"])
    out = tmp_path / "parts.json"

    write_parts_json(parts, out)

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0]["partNumber"] == "1R0750"
    assert data[0]["engineModel"] == ""
    by_category, by_subcategory = summarize(parts)
    assert by_category["Filters"] == 2
    assert by_subcategory["Filters > OIL FILTERS"] == 2
