"""Tests for quote documents, the PDF renderer and email templates."""

from datetime import datetime
from types import SimpleNamespace

from src.documents.pdf import render_quote_pdf
from src.documents.quote import (
    CALL_FOR_PRICE,
    equipment_quote,
    format_long_date,
    power_unit_price,
    power_unit_quote,
)
from src.notifications.templates import format_submitted_at, render

QUOTE_DATE = datetime(2026, 10, 19, 9, 0)


class TestQuoteDocument:
    def test_equipment_quote(self, sample_equipment):
        doc = equipment_quote(sample_equipment, "Q-1001", QUOTE_DATE)

        assert doc.title == "CAT 320 GC"
        assert doc.identifier == "ID: AI-1042"
        assert doc.price == "$125,000"
        specs = {s.label: s.value for s in doc.specs}
        assert specs["Hours"] == "5,200 hrs"
        assert specs["Year"] == "2019"
        assert specs["Location"] == "Tampa, FL"
        assert doc.pdf_filename == "American_Iron_Quote_Q-1001.pdf"

    def test_call_price_and_missing_values(self, sample_equipment):
        sample_equipment.price = "CALL"
        sample_equipment.meter = None

        doc = equipment_quote(sample_equipment, "Q-1", QUOTE_DATE)

        assert doc.price == CALL_FOR_PRICE
        assert {s.label: s.value for s in doc.specs}["Hours"] == "N/A"

    def test_power_unit_quote(self, sample_power_unit):
        doc = power_unit_quote(sample_power_unit, "Q-2002", QUOTE_DATE)

        assert doc.price == "$12,500"
        assert doc.identifier == "SN: PU-003"
        labels = [s.label for s in doc.specs]
        assert labels[:3] == ["Model", "Stock Number", "Category"]
        assert "Horsepower" in labels and "Kilowatts" in labels

    def test_power_unit_call_price(self, sample_power_unit):
        sample_power_unit.price = "CALL"

        assert power_unit_quote(sample_power_unit, "Q", QUOTE_DATE).price == CALL_FOR_PRICE

    def test_power_unit_non_numeric_prices(self):
        assert power_unit_price(None) == CALL_FOR_PRICE
        assert power_unit_price("") == CALL_FOR_PRICE
        assert power_unit_price("Make offer") == CALL_FOR_PRICE
        assert power_unit_price("Call for Price 2") == CALL_FOR_PRICE

    def test_power_unit_numeric_prices(self):
        assert power_unit_price("12500") == "$12,500"
        assert power_unit_price("$8,750") == "$8,750"
        assert power_unit_price(" 9999.5 ") == "$9,999.5"

    def test_validity_dates(self, sample_equipment):
        doc = equipment_quote(sample_equipment, "Q-1", QUOTE_DATE)

        assert doc.quote_date_label == "October 19, 2026"
        assert doc.valid_until_label == "November 18, 2026"
        assert format_long_date(datetime(2026, 1, 5)) == "January 5, 2026"


def test_pdf_renders(sample_equipment, tmp_path):
    doc = equipment_quote(sample_equipment, "Q-1001", QUOTE_DATE)

    pdf = render_quote_pdf(doc, logo_path=str(tmp_path / "missing.png"))

    assert pdf.startswith(b"%PDF")


class TestTemplates:
    def test_item_quote_email(self, sample_power_unit):
        doc = power_unit_quote(sample_power_unit, "Q-2002", QUOTE_DATE)

        html = render("item_quote.html", doc=doc)

        assert "Quote #Q-2002" in html
        assert "$12,500" in html
        assert "Stock Number" in html

    def test_customer_input_is_escaped(self, sample_quote_request):
        sample_quote_request.name = "<script>alert(1)</script>"

        html = render("quote_business.html", quote=sample_quote_request, submitted_at="now")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_contact_confirmation(self):
        inquiry = SimpleNamespace(id=1, name="Lee", email="lee@example.com", message="Hi & hello")

        html = render("contact_confirmation.html", inquiry=inquiry)

        assert "Thank You, Lee" in html
        assert "Hi &amp; hello" in html

    def test_submitted_at_format(self):
        assert format_submitted_at(datetime(2026, 10, 19, 14, 30)) == "October 19, 2026 at 02:30 PM"
