"""Catalog API — equipment, parts and power units for the public site."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.repositories.catalog import CatalogRepository
from src.schemas.catalog import (
    CatalogStats,
    EquipmentOut,
    EquipmentPage,
    PartOut,
    PartPage,
    PowerUnitOut,
    PowerUnitPage,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["catalog"])

MAX_PAGE_SIZE = 200


def get_catalog(db: AsyncSession = Depends(get_db)) -> CatalogRepository:
    return CatalogRepository(db)


def _parse_id(raw: str, detail: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=detail)


# --- Equipment ---


@router.get("/equipment", response_model=EquipmentPage)
async def list_equipment(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(24, ge=1, le=MAX_PAGE_SIZE),
    catalog: CatalogRepository = Depends(get_catalog),
) -> EquipmentPage:
    """Page through equipment listings.

    Args:
        category: Exact category filter (e.g. "EXCAVATORS")
        search: Case-insensitive match on make, model, id, city or state
        page: 1-based page number
        limit: Page size
    """
    items, total = await catalog.list_equipment(category, search, page, limit)
    return EquipmentPage(
        items=[EquipmentOut.model_validate(i) for i in items],
        total=total,
    )


@router.get("/equipment/categories/counts")
async def equipment_category_counts(
    catalog: CatalogRepository = Depends(get_catalog),
) -> dict[str, int]:
    return await catalog.equipment_category_counts()


@router.get("/equipment/{equipment_id}", response_model=EquipmentOut)
async def get_equipment(
    equipment_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
) -> EquipmentOut:
    item = await catalog.get_equipment(equipment_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return EquipmentOut.model_validate(item)


# --- Parts ---


@router.get("/parts", response_model=PartPage)
async def list_parts(
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    catalog: CatalogRepository = Depends(get_catalog),
) -> PartPage:
    items, total = await catalog.list_parts(category, subcategory, search, page, limit)
    return PartPage(items=[PartOut.model_validate(i) for i in items], total=total)


@router.get("/parts/categories/counts")
async def parts_category_counts(
    catalog: CatalogRepository = Depends(get_catalog),
) -> dict[str, int]:
    return await catalog.parts_category_counts()


@router.get("/parts/subcategories/counts")
async def parts_subcategory_counts(
    category: Optional[str] = None,
    catalog: CatalogRepository = Depends(get_catalog),
) -> dict[str, int]:
    return await catalog.parts_subcategory_counts(category)


@router.get("/parts/lookup", response_model=list[PartOut])
async def lookup_parts(
    numbers: str = Query("", description="Comma-separated part numbers"),
    catalog: CatalogRepository = Depends(get_catalog),
) -> list[PartOut]:
    """Resolve the part numbers held in a client-side quote cart."""
    part_numbers = [n.strip() for n in numbers.split(",") if n.strip()]
    items = await catalog.parts_by_numbers(part_numbers)
    return [PartOut.model_validate(i) for i in items]


@router.get("/parts/{part_id}", response_model=PartOut)
async def get_part(
    part_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
) -> PartOut:
    item = await catalog.get_part(_parse_id(part_id, "Invalid part ID"))
    if item is None:
        raise HTTPException(status_code=404, detail="Part not found")
    return PartOut.model_validate(item)


# --- Power units ---


@router.get("/power-units", response_model=PowerUnitPage)
async def list_power_units(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(24, ge=1, le=MAX_PAGE_SIZE),
    catalog: CatalogRepository = Depends(get_catalog),
) -> PowerUnitPage:
    items, total = await catalog.list_power_units(category, search, page, limit)
    return PowerUnitPage(items=[PowerUnitOut.model_validate(i) for i in items], total=total)


@router.get("/power-units/categories/counts")
async def power_unit_category_counts(
    catalog: CatalogRepository = Depends(get_catalog),
) -> dict[str, int]:
    return await catalog.power_unit_category_counts()


@router.get("/power-units/{unit_id}", response_model=PowerUnitOut)
async def get_power_unit(
    unit_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
) -> PowerUnitOut:
    item = await catalog.get_power_unit(_parse_id(unit_id, "Invalid power unit ID"))
    if item is None:
        raise HTTPException(status_code=404, detail="Power unit not found")
    return PowerUnitOut.model_validate(item)


# --- Stats ---


@router.get("/stats", response_model=CatalogStats)
async def catalog_stats(
    catalog: CatalogRepository = Depends(get_catalog),
) -> CatalogStats:
    return CatalogStats(
        equipment_count=await catalog.equipment_count(),
        parts_count=await catalog.parts_count(),
        power_units_count=await catalog.power_units_count(),
    )
