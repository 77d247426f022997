"""Tests for the power units spreadsheet import."""

from openpyxl import Workbook

from src.etl.power_units import NA, fix_brand, parse_number, parse_rows, read_workbook

# Column positions of the generator set section
GENSET = {"brand": 1, "model": 2, "year": 5, "condition": 9, "hours": 11, "hp": 14, "kw": 17, "rpm": 20}


def _genset_row(**values) -> list:
    row = [""] * 49
    for field, value in values.items():
        row[GENSET[field]] = value
    return row


def _sheet(*data_rows) -> list[list]:
    return [["INVENTORY"], ["GENERATOR SETS"], *data_rows]


class TestCellCleaning:
    def test_brand_fixes(self):
        assert fix_brand("ummins") == "Cummins"
        assert fix_brand("  aterpillar ") == "Caterpillar"
        assert fix_brand("") == NA
        assert fix_brand("Kohler") == "Kohler"

    def test_parse_number(self):
        assert parse_number("2,500") == 2500
        assert parse_number(1800.0) == 1800
        assert parse_number("N/A") is None
        assert parse_number("") is None
        assert parse_number("approx") is None


class TestParseRows:
    def test_generator_set_row(self):
        rows = _sheet(
            _genset_row(brand="ummins", model="QSK60", year=2015, condition="Used",
                        hours="1,200", hp="2,500", kw=1825, rpm=1800),
        )

        units = parse_rows(rows)

        assert len(units) == 1
        unit = units[0]
        assert unit["stock_number"] == "PU-001"
        assert unit["brand"] == "Cummins"
        assert unit["model"] == "Cummins QSK60"
        assert unit["category"] == "Generator Sets"
        assert unit["year"] == "2015"
        assert unit["hours"] == "1,200"
        assert unit["hp"] == 2500
        assert unit["kw"] == 1825
        assert unit["engine_rpm"] is None
        assert unit["fuel_type"] == NA
        assert unit["price"] == "Call for Price"
        assert unit["image_url"] == "/images/power-units-new/power_unit_001.png"

    def test_sparse_rows_are_skipped(self):
        rows = _sheet(
            _genset_row(brand="A", model="B"),
            _genset_row(brand="", model="SR500", year=2010, condition="New", hours="0", hp=150),
        )

        units = parse_rows(rows)

        assert len(units) == 1
        assert units[0]["brand"] == NA
        assert units[0]["model"] == "SR500"


def test_read_workbook(tmp_path):
    wb = Workbook()
    ws = wb.active
    for row in _sheet(_genset_row(brand="olvo", model="TAD1641", year=2019, condition="Used", hp=600)):
        ws.append(row)
    path = tmp_path / "inventory.xlsx"
    wb.save(path)

    units = read_workbook(path)

    assert len(units) == 1
    assert units[0]["model"] == "Volvo TAD1641"
    assert units[0]["hp"] == 600
