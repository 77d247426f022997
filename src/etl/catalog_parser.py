"""Parts catalog parser — text dump of the vendor catalog to part records.

The dump is the catalog PDF exported with layout preserved: sidebar labels
name the category, upper-case headings name the subcategory, and table rows
hold part numbers in columns separated by two or more spaces.
"""

from __future__ import annotations

import json
import re
from collections import Counter
from pathlib import Path
from typing import Optional

import structlog
from pydantic import Field

from src.schemas.base import ApiModel

logger = structlog.get_logger()

SIDEBAR_TO_CATEGORY = {
    "air inlet & exhaust system": "Air Inlet & Exhaust",
    "turbochargers": "Turbochargers",
    "bearings": "Bearings",
    "belts & hoses": "Belts & Hoses",
    "braking & friction": "Braking & Friction",
    "cooling system": "Cooling System",
    "electrical parts": "Electrical",
    "diesel engine components": "Engine Components",
    "ground engaging tools": "Ground Engaging Tools",
    "hardware parts": "Hardware",
    "hydraulic system": "Hydraulic System",
    "gaskets & seals": "Gaskets & Seals",
    "filters": "Filters",
    "fluids": "Fluids",
    "fuel system": "Fuel System",
    "undercarriage": "Undercarriage",
    "operator station": "Operator Station",
    "powertrain": "Powertrain",
    "rubber products": "Rubber Products",
    "work tools": "Work Tools",
}

KNOWN_SUBCATEGORIES = frozenset({
    "SINGLE MANIFOLDS", "EXHAUST MANIFOLDS", "GROUP MANIFOLDS", "MUFFLERS",
    "EXHAUST PIPES", "INLET PIPES", "EXHAUST RAIN CAPS", "INLET & EXHAUST PIPES",
    "MUFFLERS FOR KOMATSU", "EXHAUST PIPES FOR KOMATSU",
    "C SERIES TURBOCHARGERS", "D SERIES TURBOCHARGERS",
    "TURBOCHARGERS FOR KOMATSU", "TURBOCHARGER HEAT SHIELDS",
    "AFTERCOOLER GASKETS", "AFTERCOOLER ADAPTERS", "AFTERCOOLERS",
    "TURBOCHARGER CARTRIDGES",
    "COMPOSITE BEARINGS", "BEARING SLEEVES", "BUSHINGS", "BEARINGS",
    "BUSHINGS FOR KOMATSU", "BEARINGS FOR JOHN DEERE",
    "SLEEVES", "SPHERICAL BEARINGS", "SPHERICAL BEARING RACES",
    "SPHERICAL BEARINGS FOR KOMATSU", "TAPERED BEARINGS",
    "TAPERED ROLLER BEARING ASSEMBLIES", "ROLLER BEARINGS",
    "ROLLER BEARINGS FOR KOMATSU", "NEEDLE BEARINGS",
    "V-BELTS", "BELTS BY SIZE", "SERPENTINE BELTS", "BELT TENSIONERS",
    "COGGED V-BELT", "BELTS FOR KOMATSU", "PULLEYS",
    "RADIATOR HOSES", "RUBBER HOSES", "WATER HOSES",
    "AFTERCOOLER AIR HOSES", "ENGINE OIL COOLER HOSES",
    "BRAKE PEDALS & VALVES", "BRAKE SYSTEM VALVES",
    "HYDRAULIC BRAKE CALIPERS", "BRAKE LINING", "BRAKE PADS",
    "BRAKE BAND LINING KITS", "SHOE LINING AND BANDS",
    "BRAKE DISCS", "STEERING CLUTCH DISCS", "FINAL DRIVE DISCS",
    "DISCS FOR POWERTRAIN", "POWER SHIFT CONTROL DISCS",
    "ENGINE OIL COOLERS", "OIL COOLERS", "RADIATOR OIL COOLERS",
    "RADIATOR CORES", "RADIATORS", "RADIATORS FOR KOMATSU",
    "RADIATOR COOLING FANS", "WATER PUMPS", "WATER PUMPS FOR KOMATSU",
    "THERMOSTATS", "FAN BLADES", "FAN DRIVES",
    "ALTERNATORS", "ALTERNATORS FOR KOMATSU", "VOLTAGE REGULATORS",
    "STARTING MOTORS", "STARTING MOTORS FOR KOMATSU",
    "STARTING MOTORS PARTS", "BATTERIES",
    "SEALED LAMPS", "LED LAMP GROUP", "DRIVING & TRAFFIC LIGHTS",
    "WARNING LIGHTS", "LAMP BULBS",
    "SENSORS", "PRESSURE SENSORS", "TEMPERATURE SENSORS",
    "SPEED SENSORS", "OIL PRESSURE SENSORS",
    "SWITCHES", "IGNITION SWITCHES", "TOGGLE SWITCHES",
    "ROCKER SWITCHES", "PUSHBUTTON SWITCHES",
    "SOLENOIDS", "FUEL SHUTOFF SOLENOIDS", "ELECTRICAL SOLENOIDS",
    "SPARK PLUGS", "GLOW PLUGS",
    "ENGINE BLOCKS", "CUSTOM ENGINES",
    "INFRAME OVERHAUL KITS", "ENGINE KITS",
    "PISTONS", "PISTON RING SETS", "CYLINDER LINERS",
    "CRANKSHAFTS", "CRANKSHAFT GEARS",
    "CAMSHAFTS", "CAMSHAFT GEARS",
    "ENGINE CONNECTING RODS", "CONNECTING ROD KITS",
    "ENGINE OIL PUMPS", "ENGINE VALVES",
    "CYLINDER HEADS", "ASSEMBLED CYLINDER HEADS",
    "INJECTOR SLEEVES", "PRE-COMBUSTION CHAMBERS",
    "TIPS & ADAPTERS", "RIPPER SHANKS", "SHANK PROTECTORS",
    "RIPPER TEETH", "SHANK TIPS",
    "CUTTING EDGES", "END BITS", "GRADER BLADES",
    "BUCKET TEETH", "ADAPTERS FOR EXCAVATOR",
    "EXCAVATOR BUCKETS", "MINI-EXCAVATORS",
    "BOLTS", "NUTS", "SCREWS", "WASHERS", "PINS",
    "PLOW BOLTS", "TRACK BOLTS", "CUTTING EDGE BOLTS",
    "CONNECTORS", "FITTINGS", "CLAMPS",
    "GEAR PUMPS", "PISTON PUMPS", "VANE PUMPS",
    "HYDRAULIC CYLINDERS", "HYDRAULIC HOSES",
    "HYDRAULIC FILTERS", "CONTROL VALVES",
    "COMPLETE GASKET SETS", "HEAD GASKETS",
    "OIL FILTERS", "FUEL FILTERS", "AIR FILTERS",
    "PRIMARY AIR FILTERS", "SECONDARY AIR FILTERS",
    "TRANSMISSION FILTERS",
    "FUEL TRANSFER PUMPS", "FUEL PRIMING PUMPS",
    "FUEL INJECTION NOZZLES", "FUEL INJECTORS",
    "SPROCKETS & SEGMENTS", "TRACK SHOES", "TRACK CHAINS",
    "TRACK ROLLERS", "CARRIER ROLLERS", "IDLERS",
    "TRACK LINKS", "TRACK GROUPS",
    "LOADER PADS", "RUBBER PADS",
    "SEATS", "MIRRORS", "FUEL CAPS", "GLASS",
    "BULLDOZER GLASS", "WINDSHIELD WIPERS",
})

PART_WORDS = (
    "MANIFOLD", "BEARING", "BELT", "HOSE", "BRAKE", "DISC", "PUMP",
    "VALVE", "MOTOR", "FILTER", "SENSOR", "SWITCH", "LAMP", "LIGHT",
    "BOLT", "NUT", "SCREW", "PIN", "WASHER", "FITTING", "CLAMP",
    "PISTON", "LINER", "CRANKSHAFT", "CAMSHAFT", "GASKET", "SEAL",
    "CYLINDER", "COOLER", "RADIATOR", "FAN", "THERMOSTAT",
    "ALTERNATOR", "STARTER", "BATTERY", "SOLENOID", "PLUG",
    "SPROCKET", "ROLLER", "IDLER", "TRACK", "SHOE", "PAD",
    "BUCKET", "EDGE", "TOOTH", "TEETH", "SHANK", "BLADE",
    "SEAT", "MIRROR", "CAP", "GLASS", "WIPER", "TUBE",
    "GEAR", "CARTRIDGE", "OVERHAUL", "KIT", "ENGINE",
    "HYDRAULIC", "CONNECTING", "ROD", "OIL", "WATER", "FUEL", "AIR",
    "RUBBER", "ACTUATOR", "REGULATOR", "HEAD", "INJECTOR",
    "NOZZLE", "ADAPTER", "RIPPER", "GRADER", "CUTTING", "EXCAVATOR",
    "PIPE", "MUFFLER", "TURBOCHARGER", "AFTERCOOLER", "EXHAUST",
    "INLET", "RAIN", "TENSIONER", "PULLEY", "SERPENTINE", "COGGED",
)

SKIP_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"Costex\s*Tractor", r"Copyright\s*©", r"All rights reserved",
        r"Part numbers are used for reference", r"contact your sales",
        r"^Part\s+No\.\s*Description", r"^Engine\s+Part\s+Number",
        r"^Engine\s+Part\s+No\.", r"^ENGINE\s+END\s+CENTER",
        r"manufactured to meet", r"will help you maximize",
        r"^For over \d+ years", r"^At CTP", r"authorized distributor",
        r"^All Part Numbers", r"^Other part no",
        r"^\s*Typical Applications", r"^\s*Features:",
        r"lubricating properties",
    )
]

_PAGE_NUMBER = re.compile(r"^\d{1,3}$")
_HEADING = re.compile(r"^[A-Z][A-Z &\-/,'()0-9]+$")
_ENGINE_CELL = re.compile(r"^[A-Z0-9][A-Z0-9, .\-/]+$")
_NEXT_LINE_HEADING = re.compile(r"^[A-Z][A-Z &\-]+$")
_CONT = re.compile(r"\(CONT\.?\)", re.IGNORECASE)
_COLUMNS = re.compile(r"\s{2,}")

_NOT_PART_WORDS = re.compile(
    r"^(ENGINE|GASKET|PART|MODEL|NUMBER|DESCRIPTION|EQUIPMENT|CARTRIDGE|CONT|"
    r"SOLD|SEPARATELY|STATED|STD|LH|RH|NA|QTY)$",
    re.IGNORECASE,
)
_PART_NUMBER_FORMS = [
    re.compile(p)
    for p in (
        r"^\d{1,2}[A-Z]\d{4,5}$",      # 1R0750
        r"^\d{6,8}$",                  # 1234567
        r"^\d{3,4}-\d{2}-\d{4,5}$",    # 600-21-1234
        r"^[A-Z]\d{4,}$",              # R12345
        r"^\d+[A-Z]+\d+[A-Z]*\d*$",
        r"^[A-Z]{2,3}\d{3,}[A-Z]*\d*$",
    )
]


class ParsedPart(ApiModel):
    part_number: str
    description: str
    category: str
    subcategory: str = ""
    engine_model: str = ""
    gasket: str = ""
    equipment: str = Field("", max_length=500)


def clean_branding(text: str) -> str:
    """Strip the catalog vendor's name, copyright lines and ® marks."""
    text = re.sub(r"\bCostex\s*Tractor\s*Parts?\b", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\bCostex\b", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\bCTP\s*", "", text)
    text = re.sub(r"Copyright\s*©.*$", "", text, flags=re.IGNORECASE)
    return text.replace("®", "").strip()


def is_valid_subcategory(heading: str) -> bool:
    s = _CONT.sub("", heading, count=1).strip()
    if len(s) < 4 or len(s) > 60:
        return False
    if re.search(r"\d{3,}[A-Z]", s):
        return False
    if re.match(r"[A-Z]\d{2}", s):
        return False
    # Lists of model numbers, not a heading
    if re.search(r",\s*[A-Z0-9]+\s*,", s) and len(s.split(",")) > 3:
        return False
    if re.match(r"\d", s) and not re.match(r"\d+-", s) and not re.match(r"\d{2,4}-Volt", s):
        return False

    normalized = re.sub(r"\(.*?\)", "", s)
    normalized = re.sub(r"FOR KOMATSU|FOR JOHN DEERE", "", normalized, flags=re.IGNORECASE).strip()
    for known in KNOWN_SUBCATEGORIES:
        if known in normalized or normalized in known:
            return True

    return any(pw in word for word in normalized.split() for pw in PART_WORDS)


def is_part_number(token: str) -> bool:
    s = token.strip()
    if len(s) < 4 or len(s) > 20:
        return False
    if re.match(r"^\d{1,4}$", s):
        return False
    if _NOT_PART_WORDS.match(s):
        return False
    if re.match(r"[A-Z][a-z]", s):
        return False
    if re.match(r"^[A-Z]{3,}$", s):
        return False
    return any(form.match(s) for form in _PART_NUMBER_FORMS)


def _sidebar_category(line: str) -> Optional[str]:
    lowered = re.sub(r"\s+", " ", line.lower())
    for sidebar, category in SIDEBAR_TO_CATEGORY.items():
        if lowered == sidebar or lowered == sidebar.replace(" & ", "&"):
            return category
    return None


def _heading_subcategory(line: str) -> Optional[str]:
    if not (_HEADING.match(line) and 4 < len(line) < 70):
        return None
    heading = _CONT.sub("", line, count=1).strip()
    if not is_valid_subcategory(heading):
        return None
    sub = re.sub(r"\bFOR\s+KOMATSU\b", "(Komatsu)", heading, flags=re.IGNORECASE)
    sub = re.sub(r"\bFOR\s+JOHN\s+DEERE\b", "(John Deere)", sub, flags=re.IGNORECASE)
    sub = clean_branding(sub)
    return sub if len(sub) > 3 else None


def _row_columns(pn: str, columns: list[str]) -> tuple[str, str, str]:
    """(engine, gasket, equipment) around the column holding `pn`."""
    engine = gasket = ""
    equipment: list[str] = []
    if len(columns) < 2:
        return engine, gasket, ""

    index = next((i for i, col in enumerate(columns) if pn in col), -1)
    if index < 0:
        return engine, gasket, ""

    if index > 0:
        before = columns[index - 1].strip()
        if _ENGINE_CELL.match(before) and len(before) < 60 and not is_part_number(before):
            engine = before

    for col in columns[index + 1:]:
        after = col.strip()
        if is_part_number(after):
            gasket = gasket or after
        elif len(after) > 3:
            equipment.append(clean_branding(after))

    return engine, gasket, ", ".join(equipment)


def _equipment_from_next_line(next_line: str) -> str:
    next_line = next_line.strip()
    if len(next_line) <= 5 or not re.match(r"[A-Z0-9]", next_line):
        return ""
    first = _COLUMNS.split(next_line)[0].strip()
    if first and not is_part_number(first) and not _NEXT_LINE_HEADING.match(first):
        return clean_branding(first)
    return ""


def parse_catalog_lines(lines: list[str]) -> list[ParsedPart]:
    """Extract unique parts from the catalog text, in order of appearance."""
    parts: list[ParsedPart] = []
    seen: set[str] = set()
    category = ""
    subcategory = ""

    for i, raw in enumerate(lines):
        line = raw.strip()
        if len(line) < 3:
            continue
        if any(p.search(line) for p in SKIP_PATTERNS):
            continue
        if _PAGE_NUMBER.match(line):
            continue

        category = _sidebar_category(line) or category
        subcategory = _heading_subcategory(line) or subcategory

        if not category:
            continue

        single_tokens = line.split()
        columns = [c for c in _COLUMNS.split(line) if c.strip()]

        for token in single_tokens:
            pn = token.strip()
            if not is_part_number(pn) or pn in seen:
                continue

            engine, gasket, equipment = _row_columns(pn, columns)
            if not equipment and i + 1 < len(lines):
                equipment = _equipment_from_next_line(lines[i + 1])

            seen.add(pn)
            parts.append(
                ParsedPart(
                    part_number=pn,
                    description=clean_branding(subcategory or category),
                    category=category,
                    subcategory=clean_branding(subcategory),
                    engine_model=clean_branding(engine),
                    gasket=gasket,
                    equipment=equipment[:500],
                )
            )

    return parts


def parse_catalog_file(path: Path) -> list[ParsedPart]:
    return parse_catalog_lines(path.read_text(encoding="utf-8").split("\n"))


def write_parts_json(parts: list[ParsedPart], path: Path) -> None:
    payload = [p.model_dump(by_alias=True) for p in parts]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def summarize(parts: list[ParsedPart]) -> tuple[Counter, Counter]:
    """(per category, per "category > subcategory") counts."""
    by_category = Counter(p.category for p in parts)
    by_subcategory = Counter(f"{p.category} > {p.subcategory or '(none)'}" for p in parts)
    return by_category, by_subcategory
