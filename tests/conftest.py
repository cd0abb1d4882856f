"""
Shared pytest fixtures for all tests.
"""

from datetime import datetime

import pytest

from src.connections.storage import MemoryStore
from src.modules.records.models import (
    CommunityListing,
    CommunityRecord,
    GeneralProperty,
    GeneralRecord,
)
from src.modules.records.repository import RecordStore
from src.utils.calculators import recalculate


# ============================================================
# Time Fixtures
# ============================================================


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed clock for ids, timestamps and file names."""
    return datetime(2025, 6, 1, 14, 3, 5)


# ============================================================
# Form Fixtures
# ============================================================


@pytest.fixture
def general_form_data() -> dict:
    """Raw general property inputs keyed by field identifier."""
    return {
        "propertyName": "信義之星",
        "area": "台北市",
        "district": "信義區",
        "source": "591",
        "type": "中古屋",
        "carParkType": "",
        "layoutRooms": "3",
        "layoutLivingRooms": "2",
        "layoutBathrooms": "2",
        "hasPXMart": "是",
        "address": "台北市信義區松仁路100號",
        "floor": "8",
        "totalPing": "40",
        "mainBuildingPing": "25",
        "accessoryBuildingPing": "5",
        "carParkPing": "",
        "totalAmount": "2000",
        "carParkPrice": "",
        "buildingAge": "12",
        "mrtStation": "象山站",
        "mrtDistance": "350",
        "notes": '屋主說 "可議價", 採光佳',
        "rating_採光": "4",
        "rating_生活機能": "5",
        "rating_交通": "4",
        "rating_價格滿意度": "3",
        "rating_未來發展潛力": "",
    }


@pytest.fixture
def general_form(general_form_data) -> GeneralProperty:
    """General property form with derived fields computed."""
    return recalculate(GeneralProperty.model_validate(general_form_data))


@pytest.fixture
def community_form() -> CommunityListing:
    """Designated community form."""
    return CommunityListing(
        area="新北市",
        district="板橋區",
        community_name="Oak Gardens",
        address="新北市板橋區文化路一段1號",
        reason="近捷運,\n管理好",
    )


# ============================================================
# Record Fixtures
# ============================================================


@pytest.fixture
def general_record(general_form) -> GeneralRecord:
    """Saved general record."""
    return GeneralRecord(id=1748757785000, timestamp="2025/06/01 14:03:05", form_data=general_form)


@pytest.fixture
def community_record(community_form) -> CommunityRecord:
    """Saved community record."""
    return CommunityRecord(
        id=1748757786000, timestamp="2025/06/01 14:03:06", form_data=community_form
    )


@pytest.fixture
def sample_records(general_record, community_record) -> list:
    """One record of each category."""
    return [general_record, community_record]


# ============================================================
# Store Fixtures
# ============================================================


@pytest.fixture
def memory_storage() -> MemoryStore:
    """Empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def record_store(memory_storage) -> RecordStore:
    """Empty record store backed by memory."""
    return RecordStore(memory_storage)
