"""Catalog schemas for API responses."""

from typing import Optional

from src.schemas.base import ApiModel


class EquipmentOut(ApiModel):
    id: int
    equipment_id: str
    make: str
    model: str
    year: Optional[int] = None
    meter: Optional[int] = None
    price: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    category: str
    image_url: Optional[str] = None


class PartOut(ApiModel):
    id: int
    part_number: str
    description: str
    category: str
    subcategory: Optional[str] = None
    price: Optional[str] = None
    compatibility: Optional[str] = None
    engine_model: Optional[str] = None
    gasket: Optional[str] = None
    equipment: Optional[str] = None
    image_url: Optional[str] = None


class PowerUnitOut(ApiModel):
    id: int
    stock_number: str
    brand: Optional[str] = None
    model: str
    category: str
    hp: Optional[int] = None
    kw: Optional[int] = None
    rpm: Optional[int] = None
    engine_rpm: Optional[int] = None
    year: Optional[str] = None
    condition: Optional[str] = None
    hours: Optional[str] = None
    tier_rating: Optional[str] = None
    fuel_type: Optional[str] = None
    cooling: Optional[str] = None
    enclosure: Optional[str] = None
    volts: Optional[str] = None
    stage: Optional[str] = None
    selling_stage: Optional[str] = None
    unit_type: Optional[str] = None
    location: Optional[str] = None
    price: Optional[str] = None
    image_url: Optional[str] = None


class EquipmentPage(ApiModel):
    items: list[EquipmentOut]
    total: int


class PartPage(ApiModel):
    items: list[PartOut]
    total: int


class PowerUnitPage(ApiModel):
    items: list[PowerUnitOut]
    total: int


class CatalogStats(ApiModel):
    equipment_count: int
    parts_count: int
    power_units_count: int


class PriceRange(ApiModel):
    """Per-category price range, formatted for prompts ("$12,500")."""

    min: str
    max: str
    avg: str
    count: int
