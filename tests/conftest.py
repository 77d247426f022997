"""Test fixtures and configuration."""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.models.catalog import Equipment, Part, PowerUnit
from src.schemas.shipping import RateRequest


@pytest.fixture
def mock_redis():
    """Mock Redis client."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.setex = AsyncMock()
    redis.delete = AsyncMock()
    redis.exists = AsyncMock(return_value=False)
    return redis


@pytest.fixture
def mock_db():
    """Mock async session: add() is sync, flush/execute are awaited."""
    db = MagicMock()
    db.add = MagicMock()
    db.flush = AsyncMock()
    db.execute = AsyncMock()
    db.commit = AsyncMock()
    return db


@pytest.fixture
def mock_mailer():
    mailer = MagicMock()
    mailer.send = AsyncMock(return_value="em_123")
    return mailer


@pytest.fixture
def sample_equipment():
    return Equipment(
        id=1,
        equipment_id="AI-1042",
        make="CAT",
        model="320 GC",
        year=2019,
        meter=5200,
        price="$125,000",
        city=None,
        state=None,
        category="EXCAVATORS",
        image_url=None,
    )


@pytest.fixture
def sample_part():
    return Part(
        id=7,
        part_number="1R0750",
        description="FUEL FILTERS",
        category="Filters",
        subcategory="FUEL FILTERS",
        engine_model="3306",
        gasket=None,
        equipment="D8K, 966C",
        image_url="/images/parts/filters.jpg",
    )


@pytest.fixture
def sample_power_unit():
    return PowerUnit(
        id=3,
        stock_number="PU-003",
        brand="Cummins",
        model="Cummins QSK60",
        category="Generator Sets",
        hp=2500,
        kw=1825,
        rpm=1800,
        year="2015",
        condition="Used",
        location="Tampa, FL",
        price="12500",
    )


@pytest.fixture
def sample_quote_request():
    """A saved quote request as the notifier sees it."""
    return SimpleNamespace(
        id=11,
        customer_id=None,
        name="Dana Reyes",
        email="dana@example.com",
        phone="+1 555 0100",
        ship_to="Houston, TX",
        notes="Need by Friday",
        items="1R0750 x2\n4N8969 x1",
        status="pending",
        created_at=datetime(2026, 10, 19, 14, 30),
    )


@pytest.fixture
def rate_request():
    return RateRequest(
        origin_city="Tampa",
        origin_state="FL",
        origin_postal="33618",
        dest_city="Austin",
        dest_state="TX",
        dest_postal="73301",
        weight_lbs=10,
        length_in=12,
        width_in=10.5,
        height_in=8,
    )
