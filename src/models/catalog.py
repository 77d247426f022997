"""Catalog models — equipment, parts and power units."""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, IntegerIdMixin


class Equipment(Base, IntegerIdMixin):
    __tablename__ = "equipment"

    equipment_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    make: Mapped[str] = mapped_column(String(50), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    meter: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # hours

    # Free text, "CALL" when there is no listed price
    price: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Part(Base, IntegerIdMixin):
    __tablename__ = "parts"

    # Not unique: the vendor catalog repeats numbers across subcategories
    part_number: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    subcategory: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    price: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Compatibility
    compatibility: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    engine_model: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gasket: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    equipment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class PowerUnit(Base, IntegerIdMixin):
    __tablename__ = "power_units"

    stock_number: Mapped[str] = mapped_column(String(30), nullable=False)
    brand: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    model: Mapped[str] = mapped_column(String(150), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Ratings
    hp: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    kw: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rpm: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    engine_rpm: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    year: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    condition: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    hours: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    tier_rating: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    fuel_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    cooling: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    enclosure: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    volts: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    stage: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    selling_stage: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    unit_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    price: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
