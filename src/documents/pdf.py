"""Quote PDF rendering with reportlab.

Layout is positioned in points from the top of a LETTER page; `_Page.y`
flips coordinates into reportlab's bottom-left origin.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import structlog
from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from src.config import settings
from src.documents.quote import QuoteDocument

logger = structlog.get_logger()

# Brand colors
BLACK = colors.HexColor("#000000")
CHARCOAL = colors.HexColor("#1a1a1a")
GOLD = colors.HexColor("#FFCD11")
GRAY_TEXT = colors.HexColor("#666666")
GRAY_LIGHT_TEXT = colors.HexColor("#888888")
GRAY_HEADER = colors.HexColor("#999999")
GRAY_CONTACT = colors.HexColor("#CCCCCC")
RULE = colors.HexColor("#CCCCCC")
ZEBRA = colors.HexColor("#F5F5F5")
WHITE = colors.white

LEFT = 50
RIGHT = 562
CONTENT_WIDTH = RIGHT - LEFT

TERMS = [
    "1. This quotation is valid for {days} days from the date of issue.",
    "2. Prices are quoted in USD and are subject to change without notice after the validity period.",
    "3. Shipping, freight, and handling charges are not included unless otherwise stated.",
    "4. Payment terms: Wire transfer or certified check.",
    "5. Equipment is sold as-is, where-is unless otherwise specified.",
    "6. {company} reserves the right to modify or withdraw this quotation prior to acceptance.",
]


class _Page:
    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.width, self.height = LETTER

    def y(self, top: float) -> float:
        return self.height - top

    def fill_rect(self, x: float, top: float, w: float, h: float, color) -> None:
        self.c.setFillColor(color)
        self.c.rect(x, self.y(top + h), w, h, stroke=0, fill=1)

    def text(self, x: float, top: float, value: str, size: float, color,
             font: str = "Helvetica", align: str = "left") -> None:
        # `top` is the top of the text line; baseline sits one cap height lower
        self.c.setFont(font, size)
        self.c.setFillColor(color)
        baseline = self.y(top + size * 0.8)
        if align == "right":
            self.c.drawRightString(x, baseline, value)
        elif align == "center":
            self.c.drawCentredString(x, baseline, value)
        else:
            self.c.drawString(x, baseline, value)

    def rule(self, top: float) -> None:
        self.c.setStrokeColor(RULE)
        self.c.setLineWidth(1)
        self.c.line(LEFT, self.y(top), RIGHT, self.y(top))


def _draw_header(page: _Page, logo_path: Optional[str]) -> None:
    page.fill_rect(0, 0, page.width, 90, CHARCOAL)
    page.fill_rect(0, 86, page.width, 4, GOLD)

    logo_drawn = False
    if logo_path and Path(logo_path).is_file():
        try:
            logo = ImageReader(logo_path)
            img_w, img_h = logo.getSize()
            height = 72
            width = img_w * height / img_h
            page.c.drawImage(logo, 40, page.y(8 + height), width=width, height=height, mask="auto")
            logo_drawn = True
        except Exception as e:
            logger.warning("quote_logo_unreadable", path=logo_path, error=str(e))

    if not logo_drawn:
        page.text(LEFT, 25, settings.company_name.upper(), 22, GOLD, font="Helvetica-Bold")
        page.text(LEFT, 55, "Heavy Equipment & Industrial Parts", 10, GRAY_HEADER)

    page.text(RIGHT, 25, settings.company_phone, 10, GRAY_CONTACT, align="right")
    page.text(RIGHT, 40, settings.company_email, 10, GRAY_CONTACT, align="right")
    page.text(RIGHT, 55, settings.company_address, 10, GRAY_CONTACT, align="right")


def render_quote_pdf(doc: QuoteDocument, logo_path: Optional[str] = None) -> bytes:
    """Render a one-page quotation PDF.

    Args:
        doc: Quote document to render
        logo_path: Optional image for the header band; text is used when
            the file is missing or unreadable

    Returns:
        PDF bytes
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=LETTER)
    c.setTitle(f"Quote {doc.quote_number}")
    c.setAuthor(settings.company_name)
    page = _Page(c)

    _draw_header(page, logo_path)

    # Quote meta
    page.text(LEFT, 110, "QUOTATION", 18, BLACK)
    page.text(RIGHT, 110, f"Quote #: {doc.quote_number}", 10, GRAY_TEXT, align="right")
    page.text(RIGHT, 125, f"Date: {doc.quote_date_label}", 10, GRAY_TEXT, align="right")
    page.text(RIGHT, 140, f"Valid Until: {doc.valid_until_label}", 10, GRAY_TEXT, align="right")
    page.rule(165)

    # Item
    page.text(LEFT, 180, doc.title, 14, BLACK)
    page.text(LEFT, 199, f"{doc.identifier} | {doc.category}", 10, GRAY_TEXT)
    page.rule(222)

    # Specifications
    top = 237
    page.text(LEFT, top, "SPECIFICATIONS", 12, BLACK)
    top += 22
    for i, spec in enumerate(doc.specs):
        if i % 2 == 0:
            page.fill_rect(LEFT, top - 2, CONTENT_WIDTH, 20, ZEBRA)
        page.text(60, top + 2, spec.label, 10, GRAY_TEXT)
        page.text(220, top + 2, spec.value, 10, BLACK)
        top += 22

    top += 12
    page.rule(top)
    top += 10

    # Pricing
    page.text(LEFT, top, "PRICING", 12, BLACK)
    top += 20
    page.fill_rect(LEFT, top, CONTENT_WIDTH, 22, BLACK)
    page.text(60, top + 6, "Item", 10, WHITE)
    page.text(350, top + 6, "Qty", 10, WHITE, align="center")
    page.text(552, top + 6, "Unit Price", 10, WHITE, align="right")

    top += 24
    page.text(60, top + 6, doc.title, 10, BLACK)
    page.text(350, top + 6, "1", 10, BLACK, align="center")
    page.text(552, top + 6, doc.price, 10, BLACK, align="right")

    top += 26
    page.fill_rect(LEFT, top, CONTENT_WIDTH, 26, BLACK)
    page.text(360, top + 7, "Total", 11, WHITE, align="right")
    page.text(552, top + 7, doc.price, 11, GOLD, align="right")

    top += 50
    page.rule(top)
    top += 10

    # Terms
    page.text(LEFT, top, "TERMS & CONDITIONS", 11, BLACK)
    top += 18
    for term in TERMS:
        line = term.format(days=doc.valid_days, company=settings.company_name)
        for wrapped in simpleSplit(line, "Helvetica", 8, CONTENT_WIDTH):
            page.text(LEFT, top, wrapped, 8, GRAY_TEXT)
            top += 10
        top += 2

    top += 12
    page.rule(top)
    top += 10

    # Footer
    center = LEFT + CONTENT_WIDTH / 2
    website = settings.company_website.replace("https://", "").replace("http://", "")
    page.text(center, top, f"{settings.company_name} — {settings.company_city}", 9, GRAY_LIGHT_TEXT, align="center")
    page.text(
        center,
        top + 12,
        f"Phone: {settings.company_phone} | Email: {settings.company_email} | Web: {website}",
        9,
        GRAY_LIGHT_TEXT,
        align="center",
    )

    c.showPage()
    c.save()
    return buffer.getvalue()
