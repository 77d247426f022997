"""Catalog repository — paginated reads and aggregates over the catalog tables."""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional, Sequence

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.catalog import Equipment, Part, PowerUnit
from src.schemas.catalog import PriceRange

logger = structlog.get_logger()

_NON_PRICE_CHARS = re.compile(r"[^0-9.]")


def parse_price(value: Optional[str]) -> Optional[float]:
    """Numeric value of a free-text price, or None ("CALL", "", "1.2.3")."""
    if not value:
        return None
    digits = _NON_PRICE_CHARS.sub("", value)
    if not digits:
        return None
    try:
        return float(digits)
    except ValueError:
        return None


def format_usd(amount: float) -> str:
    """Format like "$12,500" (no cents unless present)."""
    if amount == int(amount):
        return f"${int(amount):,}"
    return f"${amount:,.2f}".rstrip("0").rstrip(".")


def summarize_prices(rows: Iterable[tuple[str, Optional[str]]]) -> dict[str, PriceRange]:
    """Group (category, price) rows into min/max/avg ranges per category.

    Rows without a numeric price are ignored; categories with no priced
    rows are left out.
    """
    buckets: dict[str, list[float]] = {}
    for category, raw_price in rows:
        value = parse_price(raw_price)
        if value is None:
            continue
        buckets.setdefault(category, []).append(value)

    return {
        category: PriceRange(
            min=format_usd(min(values)),
            max=format_usd(max(values)),
            avg=format_usd(round(sum(values) / len(values))),
            count=len(values),
        )
        for category, values in buckets.items()
    }


class CatalogRepository:
    """Read access to equipment, parts and power units."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _page(
        self,
        model: Any,
        conditions: list,
        page: int,
        limit: int,
    ) -> tuple[Sequence[Any], int]:
        stmt = select(model)
        if conditions:
            stmt = stmt.where(*conditions)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()

        offset = (page - 1) * limit
        result = await self.db.execute(
            stmt.order_by(model.id).offset(offset).limit(limit)
        )
        return result.scalars().all(), total

    async def _counts_by(self, column: Any, *conditions: Any) -> dict[str, int]:
        stmt = select(column, func.count()).group_by(column)
        if conditions:
            stmt = stmt.where(*conditions)
        result = await self.db.execute(stmt)
        return {key: count for key, count in result.all()}

    async def _count(self, model: Any) -> int:
        return (await self.db.execute(select(func.count()).select_from(model))).scalar_one()

    # --- Equipment ---

    async def list_equipment(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 24,
    ) -> tuple[Sequence[Equipment], int]:
        conditions = []
        if category:
            conditions.append(Equipment.category == category)
        if search:
            term = f"%{search}%"
            conditions.append(
                or_(
                    Equipment.make.ilike(term),
                    Equipment.model.ilike(term),
                    Equipment.equipment_id.ilike(term),
                    Equipment.city.ilike(term),
                    Equipment.state.ilike(term),
                    func.concat(Equipment.make, " ", Equipment.model).ilike(term),
                )
            )
        return await self._page(Equipment, conditions, page, limit)

    async def get_equipment(self, equipment_id: str) -> Optional[Equipment]:
        result = await self.db.execute(
            select(Equipment).where(Equipment.equipment_id == equipment_id)
        )
        return result.scalar_one_or_none()

    async def create_equipment(self, **values: Any) -> Equipment:
        item = Equipment(**values)
        self.db.add(item)
        await self.db.flush()
        return item

    async def equipment_category_counts(self) -> dict[str, int]:
        return await self._counts_by(Equipment.category)

    async def equipment_count(self) -> int:
        return await self._count(Equipment)

    async def equipment_price_summary(self) -> dict[str, PriceRange]:
        """Min/max/avg listed price per equipment category."""
        result = await self.db.execute(
            select(Equipment.category, Equipment.price).where(
                Equipment.price.is_not(None), Equipment.price != ""
            )
        )
        return summarize_prices(result.all())

    # --- Parts ---

    async def list_parts(
        self,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[Sequence[Part], int]:
        conditions = []
        if category:
            conditions.append(Part.category == category)
        if subcategory:
            conditions.append(Part.subcategory == subcategory)
        if search:
            term = f"%{search}%"
            conditions.append(
                or_(
                    Part.part_number.ilike(term),
                    Part.description.ilike(term),
                    Part.equipment.ilike(term),
                    Part.engine_model.ilike(term),
                )
            )
        return await self._page(Part, conditions, page, limit)

    async def get_part(self, part_id: int) -> Optional[Part]:
        return await self.db.get(Part, part_id)

    async def parts_by_numbers(self, part_numbers: list[str]) -> Sequence[Part]:
        if not part_numbers:
            return []
        result = await self.db.execute(
            select(Part).where(Part.part_number.in_(part_numbers)).order_by(Part.id)
        )
        return result.scalars().all()

    async def create_part(self, **values: Any) -> Part:
        item = Part(**values)
        self.db.add(item)
        await self.db.flush()
        return item

    async def parts_category_counts(self) -> dict[str, int]:
        return await self._counts_by(Part.category)

    async def parts_subcategory_counts(self, category: Optional[str] = None) -> dict[str, int]:
        """Counts per subcategory; parts without one are reported as "Other"."""
        conditions = [Part.category == category] if category else []
        raw = await self._counts_by(Part.subcategory, *conditions)

        counts: dict[str, int] = {}
        for subcategory, count in raw.items():
            key = subcategory or "Other"
            counts[key] = counts.get(key, 0) + count
        return counts

    async def parts_count(self) -> int:
        return await self._count(Part)

    # --- Power units ---

    async def list_power_units(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 24,
    ) -> tuple[Sequence[PowerUnit], int]:
        conditions = []
        if category:
            conditions.append(PowerUnit.category == category)
        if search:
            term = f"%{search}%"
            conditions.append(
                or_(
                    PowerUnit.model.ilike(term),
                    PowerUnit.stock_number.ilike(term),
                    PowerUnit.condition.ilike(term),
                    PowerUnit.brand.ilike(term),
                    PowerUnit.fuel_type.ilike(term),
                    PowerUnit.unit_type.ilike(term),
                )
            )
        return await self._page(PowerUnit, conditions, page, limit)

    async def get_power_unit(self, unit_id: int) -> Optional[PowerUnit]:
        return await self.db.get(PowerUnit, unit_id)

    async def create_power_unit(self, **values: Any) -> PowerUnit:
        item = PowerUnit(**values)
        self.db.add(item)
        await self.db.flush()
        return item

    async def power_unit_category_counts(self) -> dict[str, int]:
        return await self._counts_by(PowerUnit.category)

    async def power_units_count(self) -> int:
        return await self._count(PowerUnit)
