"""Single-item quote document, built from an equipment or power-unit row."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from src.models.catalog import Equipment, PowerUnit
from src.repositories.catalog import format_usd

CALL_FOR_PRICE = "Call for Price"
QUOTE_VALID_DAYS = 30

_NUMERIC_PRICE = re.compile(r"^\$?\d[\d,]*(\.\d+)?$")


@dataclass
class SpecLine:
    label: str
    value: str


@dataclass
class QuoteDocument:
    quote_number: str
    quote_date: datetime
    title: str
    identifier: str
    category: str
    price: str
    specs: list[SpecLine] = field(default_factory=list)
    valid_days: int = QUOTE_VALID_DAYS

    @property
    def valid_until(self) -> datetime:
        return self.quote_date + timedelta(days=self.valid_days)

    @property
    def quote_date_label(self) -> str:
        return format_long_date(self.quote_date)

    @property
    def valid_until_label(self) -> str:
        return format_long_date(self.valid_until)

    @property
    def pdf_filename(self) -> str:
        return f"American_Iron_Quote_{self.quote_number}.pdf"


def format_long_date(moment: datetime) -> str:
    """e.g. "October 19, 2026"."""
    return f"{moment:%B} {moment.day}, {moment.year}"


def equipment_quote(item: Equipment, quote_number: str, quote_date: datetime) -> QuoteDocument:
    price = item.price if item.price and item.price != "CALL" else CALL_FOR_PRICE
    location = ", ".join(p for p in (item.city, item.state) if p) or "Tampa, FL"

    return QuoteDocument(
        quote_number=quote_number,
        quote_date=quote_date,
        title=f"{item.make} {item.model}",
        identifier=f"ID: {item.equipment_id}",
        category=item.category,
        price=price,
        specs=[
            SpecLine("Make", item.make),
            SpecLine("Model", item.model),
            SpecLine("Year", str(item.year) if item.year else "N/A"),
            SpecLine("Hours", f"{item.meter:,} hrs" if item.meter else "N/A"),
            SpecLine("Location", location),
        ],
    )


def power_unit_price(value: Optional[str]) -> str:
    """Plain numbers like "12500" become "$12,500"; anything else is Call for Price."""
    text = (value or "").strip()
    if not _NUMERIC_PRICE.match(text):
        return CALL_FOR_PRICE
    return format_usd(float(text.lstrip("$").replace(",", "")))


def power_unit_quote(item: PowerUnit, quote_number: str, quote_date: datetime) -> QuoteDocument:
    price = power_unit_price(item.price)

    specs = [
        SpecLine("Model", item.model),
        SpecLine("Stock Number", item.stock_number),
        SpecLine("Category", item.category),
    ]
    optional = [
        ("Horsepower", f"{item.hp} HP" if item.hp else None),
        ("Kilowatts", f"{item.kw} kW" if item.kw else None),
        ("RPM", str(item.rpm) if item.rpm else None),
        ("Year", item.year),
        ("Condition", item.condition),
        ("Location", item.location),
    ]
    specs.extend(SpecLine(label, value) for label, value in optional if value)

    return QuoteDocument(
        quote_number=quote_number,
        quote_date=quote_date,
        title=item.model,
        identifier=f"SN: {item.stock_number}",
        category=item.category,
        price=price,
        specs=specs,
    )
