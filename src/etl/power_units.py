"""Power units import — inventory spreadsheet to the power_units table.

The sheet stacks four sections (generator sets, industrial engines, marine
engines, power units), each with its own row range and column layout.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

import structlog
from openpyxl import load_workbook
from sqlalchemy.ext.asyncio import AsyncSession

from src.etl.batch import replace_table
from src.models.catalog import PowerUnit

logger = structlog.get_logger()

NA = "N/A"
IMAGED_UNITS = 95
BATCH_SIZE = 500

# Truncated brand names from the source sheet
BRAND_FIXES = {
    "ummins": "Cummins",
    "aterpillar": "Caterpillar",
    "roy Somer": "Leroy Somer",
    "eneracs": "Generac",
    "itsubishi": "Mitsubishi",
    "ohn Deere": "John Deere",
    "olvo": "Volvo",
    "ohnson & Towers": "Johnson & Towers",
    "etroit Diesel": "Detroit Diesel",
    "an": "MAN",
    "MTU / Detroit Dies": "MTU / Detroit Diesel",
    "ummings": "Cummins",
}

TEXT_FIELDS = (
    "year", "condition", "hours", "tier_rating", "fuel_type", "cooling",
    "enclosure", "volts", "stage", "selling_stage", "unit_type",
)
NUMBER_FIELDS = ("hp", "kw", "rpm", "engine_rpm")


@dataclass(frozen=True)
class Section:
    name: str
    start_row: int
    end_row: int
    columns: dict[str, int]


def _layout(*indexes: int) -> dict[str, int]:
    fields = ("brand", "model") + TEXT_FIELDS[:3] + NUMBER_FIELDS + TEXT_FIELDS[3:]
    return dict(zip(fields, indexes))


# Row numbers are 0-based over the sheet's rows
SECTIONS = [
    Section("Generator Sets", 2, 90, _layout(1, 2, 5, 9, 11, 14, 17, 20, 23, 27, 31, 35, 38, 41, 43, 45, 48)),
    Section("Industrial Engines", 93, 106, _layout(0, 2, 7, 10, 14, 18, 22, 24, 26, 30, 34, 37, 39, 42, 43, 46, 49)),
    Section("Marine Engines", 109, 132, _layout(0, 2, 4, 8, 13, 16, 19, 22, 25, 29, 33, 36, 39, 42, 43, 45, 48)),
    Section("Power Units", 135, 157, _layout(0, 3, 6, 9, 12, 15, 18, 21, 24, 28, 32, 35, 38, 40, 42, 44, 47)),
]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def fix_brand(value: Any) -> str:
    brand = _text(value)
    if not brand or brand == NA:
        return NA
    return BRAND_FIXES.get(brand, brand)


def clean_value(value: Any) -> str:
    return _text(value) or NA


def parse_number(value: Any) -> Optional[int]:
    """Leading integer of a cell, ignoring thousands separators."""
    text = _text(value).replace(",", "")
    if not text or text == NA:
        return None
    match = re.match(r"\s*[-+]?\d+", text)
    return int(match.group(0)) if match else None


def parse_rows(rows: Sequence[Sequence[Any]]) -> list[dict]:
    """Build power unit rows from the sheet's rows (cells as read, blanks as "")."""
    units: list[dict] = []

    for section in SECTIONS:
        for index in range(section.start_row, min(section.end_row + 1, len(rows))):
            row = rows[index]
            # Section headers and letter dividers
            if sum(1 for cell in row if cell not in ("", None)) < 5:
                continue

            def cell(field: str) -> Any:
                col = section.columns[field]
                return row[col] if col < len(row) else None

            brand = fix_brand(cell("brand"))
            model = clean_value(cell("model"))

            number = len(units) + 1
            unit = {
                "stock_number": f"PU-{number:03d}",
                "brand": brand,
                "model": model if brand == NA else f"{brand} {model}",
                "category": section.name,
                "location": "Tampa, FL",
                "price": "Call for Price",
                "image_url": (
                    f"/images/power-units-new/power_unit_{number:03d}.png"
                    if number <= IMAGED_UNITS
                    else None
                ),
            }
            unit.update({f: clean_value(cell(f)) for f in TEXT_FIELDS})
            unit.update({f: parse_number(cell(f)) for f in NUMBER_FIELDS})
            units.append(unit)

    return units


def read_workbook(path: Path) -> list[dict]:
    """Parse the first sheet of the inventory workbook."""
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        rows = [
            ["" if v is None else v for v in values]
            for values in sheet.iter_rows(values_only=True)
        ]
    finally:
        workbook.close()
    return parse_rows(rows)


async def import_power_units(session: AsyncSession, units: list[dict]) -> int:
    inserted = await replace_table(session, PowerUnit, units, BATCH_SIZE, "power_units")
    logger.info(
        "power_units_imported",
        total=inserted,
        sections={s.name: sum(1 for u in units if u["category"] == s.name) for s in SECTIONS},
    )
    return inserted
