"""HTML email templates (Jinja2, autoescaped)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from jinja2 import DictLoader, Environment, select_autoescape

from src.config import settings

BASE_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"></head>
<body style="margin:0;padding:0;background:#f4f4f4;font-family:Arial,Helvetica,sans-serif;">
  <table width="100%" cellpadding="0" cellspacing="0" style="max-width:600px;margin:0 auto;background:#ffffff;">
    <tr>
      <td style="background:#000000;padding:24px 32px;">
        <h1 style="margin:0;color:#FFCD11;font-size:22px;font-weight:bold;">{{ company.name | upper }}</h1>
        <p style="margin:4px 0 0;color:#cccccc;font-size:13px;">{% block tagline %}Heavy Equipment &amp; Industrial Parts{% endblock %}</p>
      </td>
    </tr>
    <tr>
      <td style="padding:32px;">
{% block content %}{% endblock %}
      </td>
    </tr>
    <tr>
      <td style="background:#f4f4f4;padding:16px 32px;text-align:center;">
        <p style="margin:0;color:#999;font-size:11px;">{{ company.name }} — {{ company.city }} | {{ company.phone }}</p>
      </td>
    </tr>
  </table>
</body>
</html>
"""

FIELD_ROW = """{% macro field(label, value, shaded=False) -%}
<tr><td style="padding:12px 16px;{% if shaded %}background:#f9f9f9;{% endif %}border-bottom:1px solid #eee;"><span style="color:#888;font-size:13px;display:inline-block;width:100px;">{{ label }}</span><span style="color:#000;font-size:14px;font-weight:600;">{{ value }}</span></td></tr>
{%- endmacro %}
{% macro block(label, value, mono=False) -%}
<tr><td style="padding:16px;background:#f9f9f9;border-bottom:1px solid #eee;"><span style="color:#888;font-size:13px;display:block;margin-bottom:8px;">{{ label }}</span><p style="margin:0;color:#000;font-size:14px;line-height:1.5;{% if mono %}font-family:monospace;{% endif %}white-space:pre-wrap;">{{ value }}</p></td></tr>
{%- endmacro %}
{% macro button(href, text) -%}
<a href="{{ href }}" style="display:inline-block;background:#FFCD11;color:#000;padding:10px 24px;text-decoration:none;border-radius:4px;font-weight:bold;font-size:14px;">{{ text }}</a>
{%- endmacro %}
"""

QUOTE_BUSINESS = """{% extends "base.html" %}
{% from "macros.html" import field, block, button %}
{% block tagline %}New Quote Request Received{% endblock %}
{% block content %}
        <h2 style="margin:0 0 16px;color:#000;font-size:18px;">Parts Quote Request</h2>
        <table width="100%" cellpadding="0" cellspacing="0" style="border:1px solid #e0e0e0;border-radius:6px;overflow:hidden;">
          {{ field("Name", quote.name, shaded=True) }}
          <tr><td style="padding:12px 16px;border-bottom:1px solid #eee;"><span style="color:#888;font-size:13px;display:inline-block;width:100px;">Email</span><a href="mailto:{{ quote.email }}" style="color:#FFCD11;font-size:14px;font-weight:600;text-decoration:none;">{{ quote.email }}</a></td></tr>
          {% if quote.phone %}{{ field("Phone", quote.phone, shaded=True) }}{% endif %}
          {% if quote.ship_to %}{{ field("Ship To", quote.ship_to) }}{% endif %}
          {% if quote.items %}{{ block("Parts Requested", quote.items, mono=True) }}{% endif %}
          {% if quote.notes %}{{ block("Notes", quote.notes) }}{% endif %}
        </table>
        <p style="margin:24px 0 0;color:#888;font-size:12px;">Submitted on {{ submitted_at }}</p>
        <p style="margin:12px 0 0;">{{ button("mailto:" ~ quote.email ~ "?subject=" ~ ("RE: Your Parts Quote Request — " ~ company.name) | urlencode, "Reply to " ~ quote.name) }}</p>
{% endblock %}
"""

QUOTE_CONFIRMATION = """{% extends "base.html" %}
{% from "macros.html" import block, button %}
{% block content %}
        <h2 style="margin:0 0 8px;color:#000;font-size:18px;">Quote Request Received</h2>
        <p style="margin:0 0 20px;color:#666;font-size:14px;line-height:1.5;">Thank you, {{ quote.name }}. We've received your parts quote request and will respond within one business day with pricing and availability.</p>
        {% if quote.items %}<table width="100%" cellpadding="0" cellspacing="0" style="border:1px solid #e0e0e0;border-radius:6px;overflow:hidden;">{{ block("Parts Requested", quote.items, mono=True) }}</table>{% endif %}
        <p style="margin:24px 0 0;color:#666;font-size:13px;">Need immediate assistance?</p>
        <p style="margin:8px 0 0;color:#000;font-size:13px;">Phone: {{ company.phone }}</p>
        <p style="margin:4px 0 0;color:#000;font-size:13px;">WhatsApp: {{ company.whatsapp }}</p>
        <p style="margin:16px 0 0;">{{ button(company.website ~ "/parts", "Browse Parts Catalog") }}</p>
{% endblock %}
"""

CONTACT_BUSINESS = """{% extends "base.html" %}
{% from "macros.html" import field, block, button %}
{% block tagline %}New Contact Form Submission{% endblock %}
{% block content %}
        <h2 style="margin:0 0 16px;color:#000;font-size:18px;">New Inquiry Received</h2>
        <table width="100%" cellpadding="0" cellspacing="0" style="border:1px solid #e0e0e0;border-radius:6px;overflow:hidden;">
          {{ field("Name", inquiry.name, shaded=True) }}
          <tr><td style="padding:12px 16px;border-bottom:1px solid #eee;"><span style="color:#888;font-size:13px;display:inline-block;width:100px;">Email</span><a href="mailto:{{ inquiry.email }}" style="color:#FFCD11;font-size:14px;font-weight:600;text-decoration:none;">{{ inquiry.email }}</a></td></tr>
          {{ block("Message", inquiry.message) }}
        </table>
        <p style="margin:24px 0 0;color:#888;font-size:12px;">Submitted on {{ submitted_at }}</p>
        <p style="margin:12px 0 0;">{{ button("mailto:" ~ inquiry.email ~ "?subject=" ~ ("RE: Your Inquiry — " ~ company.name) | urlencode, "Reply to " ~ inquiry.name) }}</p>
{% endblock %}
"""

CONTACT_CONFIRMATION = """{% extends "base.html" %}
{% from "macros.html" import block, button %}
{% block content %}
        <h2 style="margin:0 0 8px;color:#000;font-size:18px;">Thank You, {{ inquiry.name }}</h2>
        <p style="margin:0 0 20px;color:#666;font-size:14px;line-height:1.5;">We've received your inquiry and a specialist will respond within one business day.</p>
        <table width="100%" cellpadding="0" cellspacing="0" style="border:1px solid #e0e0e0;border-radius:6px;overflow:hidden;">{{ block("Your Message", inquiry.message) }}</table>
        <p style="margin:24px 0 0;color:#666;font-size:13px;">In the meantime, you can reach us directly:</p>
        <p style="margin:8px 0 0;color:#000;font-size:13px;">Phone: {{ company.phone }}</p>
        <p style="margin:4px 0 0;color:#000;font-size:13px;">WhatsApp: {{ company.whatsapp }}</p>
        <p style="margin:16px 0 0;">{{ button(company.website, "Browse Our Inventory") }}</p>
{% endblock %}
"""

ITEM_QUOTE = """{% extends "base.html" %}
{% from "macros.html" import button %}
{% block content %}
        <h2 style="margin:0 0 8px;color:#000;font-size:20px;">Your Equipment Quote</h2>
        <p style="margin:0 0 24px;color:#666;font-size:14px;">Quote #{{ doc.quote_number }} | {{ doc.quote_date_label }}</p>
        <table width="100%" cellpadding="0" cellspacing="0" style="border:1px solid #e0e0e0;border-radius:6px;overflow:hidden;">
          <tr>
            <td style="background:#f9f9f9;padding:16px;">
              <p style="margin:0 0 4px;font-size:11px;color:#FFCD11;font-weight:bold;text-transform:uppercase;">{{ doc.category }}</p>
              <h3 style="margin:0 0 4px;color:#000;font-size:16px;">{{ doc.title }}</h3>
              <p style="margin:0;color:#888;font-size:13px;">{{ doc.identifier }}</p>
            </td>
          </tr>
          {% for spec in doc.specs %}
          <tr>
            <td style="padding:10px 16px;border-top:1px solid #eee;background:{{ loop.cycle('#ffffff', '#fafafa') }};">
              <span style="color:#888;font-size:13px;display:inline-block;width:140px;">{{ spec.label }}</span>
              <span style="color:#000;font-size:13px;font-weight:600;">{{ spec.value }}</span>
            </td>
          </tr>
          {% endfor %}
          <tr>
            <td style="background:#000;padding:14px 16px;">
              <span style="color:#fff;font-size:14px;font-weight:bold;">Total: </span>
              <span style="color:#FFCD11;font-size:16px;font-weight:bold;">{{ doc.price }}</span>
            </td>
          </tr>
        </table>
        <p style="margin:24px 0 0;color:#888;font-size:12px;">This quote is valid for {{ doc.valid_days }} days. Shipping charges not included. Please reply to this email or call {{ company.phone }} to proceed.</p>
        <p style="margin:16px 0 0;">{{ button(company.website, "Visit Our Website") }}</p>
{% endblock %}
"""

_env = Environment(
    loader=DictLoader(
        {
            "base.html": BASE_TEMPLATE,
            "macros.html": FIELD_ROW,
            "quote_business.html": QUOTE_BUSINESS,
            "quote_confirmation.html": QUOTE_CONFIRMATION,
            "contact_business.html": CONTACT_BUSINESS,
            "contact_confirmation.html": CONTACT_CONFIRMATION,
            "item_quote.html": ITEM_QUOTE,
        }
    ),
    autoescape=select_autoescape(default=True, default_for_string=True),
)


def _company() -> dict[str, str]:
    return {
        "name": settings.company_name,
        "phone": settings.company_phone,
        "whatsapp": settings.company_whatsapp,
        "email": settings.company_email,
        "city": settings.company_city,
        "website": settings.company_website.rstrip("/"),
    }


def format_submitted_at(moment: Optional[datetime] = None) -> str:
    """e.g. "October 19, 2026 at 02:30 PM"."""
    moment = moment or datetime.now()
    return f"{moment:%B} {moment.day}, {moment.year} at {moment:%I:%M %p}"


def render(template_name: str, **context: Any) -> str:
    """Render an email template with company details in scope."""
    template = _env.get_template(template_name)
    return template.render(company=_company(), **context)
