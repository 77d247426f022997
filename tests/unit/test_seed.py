"""Tests for startup seeding and the bulk load helpers."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.etl.batch import chunked, pick
from src.etl.parts_seed import GENERIC_PART_IMAGE, part_row
from src.etl.seed import load_seed_file, seed_if_needed, seed_row
from src.models.catalog import Equipment, PowerUnit


def _count_result(value: int):
    result = MagicMock()
    result.scalar_one.return_value = value
    return result


class TestHelpers:
    def test_chunked(self):
        assert [list(c) for c in chunked([1, 2, 3, 4, 5], 2)] == [[1, 2], [3, 4], [5]]

    def test_pick_prefers_first_truthy_key(self):
        assert pick({"partNumber": "", "part_number": "1R0750"}, "partNumber", "part_number") == "1R0750"
        assert pick({"imageUrl": "/a.png"}, "imageUrl", "image_url") == "/a.png"
        assert pick({}, "imageUrl", "image_url") is None

    def test_part_row_uses_category_image(self):
        row = part_row({"partNumber": "1R0750", "description": "", "category": "Filters", "equipment": ""})

        assert row["description"] == "Filters"
        assert row["image_url"] == "/images/parts/filters.jpg"
        assert row["equipment"] is None

        assert part_row({"part_number": "X1", "category": "Fluids"})["image_url"] == GENERIC_PART_IMAGE


class TestSeedRow:
    def test_accepts_camel_and_snake_keys(self):
        row = seed_row(Equipment, {
            "equipmentId": "AI-1",
            "make": "CAT",
            "model": "D6T",
            "category": "BULLDOZERS",
            "image_url": "/images/equipment/ai-1.jpg",
        })

        assert row["equipment_id"] == "AI-1"
        assert row["image_url"] == "/images/equipment/ai-1.jpg"
        assert row["year"] is None
        assert "id" not in row

    def test_unknown_keys_dropped(self):
        row = seed_row(PowerUnit, {"stockNumber": "PU-001", "model": "X", "category": "Power Units",
                                   "serialNumber": "123", "description": "text"})

        assert row["stock_number"] == "PU-001"
        assert "serial_number" not in row and "description" not in row

    def test_missing_file(self, tmp_path):
        assert load_seed_file(tmp_path / "equipment.json", Equipment) is None


class TestSeedIfNeeded:
    @pytest.mark.asyncio
    async def test_reloads_tables_below_threshold(self, mock_db, tmp_path, monkeypatch):
        (tmp_path / "equipment.json").write_text(json.dumps([
            {"equipmentId": "AI-1", "make": "CAT", "model": "D6T", "category": "BULLDOZERS"},
        ]))
        mock_db.execute = AsyncMock(side_effect=[_count_result(5), _count_result(17000), _count_result(100)])
        replace = AsyncMock(return_value=1)
        monkeypatch.setattr("src.etl.seed.replace_table", replace)

        seeded = await seed_if_needed(mock_db, tmp_path)

        assert seeded == {"equipment": 1}
        model, rows = replace.await_args.args[1], replace.await_args.args[2]
        assert model is Equipment
        assert rows[0]["equipment_id"] == "AI-1"

    @pytest.mark.asyncio
    async def test_missing_data_file_is_skipped(self, mock_db, tmp_path, monkeypatch):
        mock_db.execute = AsyncMock(side_effect=[_count_result(0), _count_result(17000), _count_result(100)])
        replace = AsyncMock()
        monkeypatch.setattr("src.etl.seed.replace_table", replace)

        assert await seed_if_needed(mock_db, tmp_path) == {}
        replace.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_seeded_database_syncs_power_unit_images(self, mock_db, tmp_path):
        (tmp_path / "power-units.json").write_text(json.dumps([
            {"stockNumber": "PU-001", "imageUrl": "/images/power-units-new/power_unit_001.png"},
            {"stock_number": "PU-002", "image_url": "/same.png"},
        ]))
        rows = MagicMock()
        rows.all.return_value = [
            SimpleNamespace(id=1, stock_number="PU-001", image_url=None),
            SimpleNamespace(id=2, stock_number="PU-002", image_url="/same.png"),
        ]
        mock_db.execute = AsyncMock(side_effect=[
            _count_result(2000), _count_result(17000), _count_result(100), rows, None,
        ])

        assert await seed_if_needed(mock_db, tmp_path) == {}

        changes = mock_db.execute.await_args_list[-1].args[1]
        assert changes == [{"id": 1, "image_url": "/images/power-units-new/power_unit_001.png"}]
