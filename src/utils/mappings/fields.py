"""
Field dictionary (欄位代號 ↔ 中文欄位名稱).

Identifier → display name for the record envelope and both form variants.
The reverse map and column order are checked against the forward map at import.
"""

# Envelope fields
ENVELOPE_FIELDS: tuple[str, ...] = ("id", "timestamp", "category")

# Rating categories (評分項目), each stored as "1"~"5"
RATING_CATEGORIES: tuple[str, ...] = (
    "採光",
    "生活機能",
    "交通",
    "價格滿意度",
    "未來發展潛力",
)
RATING_FIELDS: tuple[str, ...] = tuple(f"rating_{name}" for name in RATING_CATEGORIES)

FIELD_NAME_MAP: dict[str, str] = {
    # Envelope
    "id": "ID",
    "timestamp": "時間",
    "category": "物件類別",
    # General property (一般物件)
    "propertyName": "物件名稱",
    "area": "主要都市",
    "district": "行政區",
    "otherDistrict": "其他行政區",
    "source": "物件來源",
    "otherSource": "其他來源",
    "type": "房屋種類",  # 預售屋/中古屋/新成屋, not the record category
    "carParkType": "車位形式",
    "carParkFloor": "車位樓層",
    "layoutRooms": "房間數",
    "layoutLivingRooms": "客餐廳數",
    "layoutBathrooms": "衛浴數",
    "hasPXMart": "附近是否有全聯",
    "address": "地址",
    "floor": "樓層",
    "totalPing": "權狀坪數",
    "mainBuildingPing": "主建物(坪)",
    "accessoryBuildingPing": "附屬建物(坪)",
    "carParkPing": "車位(坪)",
    "totalAmount": "總價(萬)",
    "carParkPrice": "車位價格(萬)",
    "buildingAge": "屋齡",
    "mrtStation": "附近的捷運站",
    "mrtDistance": "距離捷運站幾公尺",
    "notes": "備註",
    "rating_採光": "採光",
    "rating_生活機能": "生活機能",
    "rating_交通": "交通",
    "rating_價格滿意度": "價格滿意度",
    "rating_未來發展潛力": "未來發展潛力",
    "unitPrice": "單坪價格(萬)",
    "indoorUsablePing": "室內可用坪數",
    "publicAreaRatio": "公設比",
    "totalRating": "物件評分",
    # Designated community (指定社區) only
    "communityName": "社區名稱",
    "reason": "獲選的原因",
}

# Exported column order
HEADER_ORDER: tuple[str, ...] = (
    "id",
    "timestamp",
    "category",
    "propertyName",
    "area",
    "district",
    "otherDistrict",
    "source",
    "otherSource",
    "type",
    "carParkType",
    "carParkFloor",
    "layoutRooms",
    "layoutLivingRooms",
    "layoutBathrooms",
    "hasPXMart",
    "address",
    "floor",
    "totalPing",
    "mainBuildingPing",
    "accessoryBuildingPing",
    "carParkPing",
    "totalAmount",
    "carParkPrice",
    "buildingAge",
    "mrtStation",
    "mrtDistance",
    "notes",
    *RATING_FIELDS,
    "unitPrice",
    "indoorUsablePing",
    "publicAreaRatio",
    "totalRating",
    "communityName",
    "reason",
)

DERIVED_FIELDS: tuple[str, ...] = (
    "unitPrice",
    "indoorUsablePing",
    "publicAreaRatio",
    "totalRating",
)

# Raw inputs parsed as numbers on import (in addition to derived fields)
NUMERIC_INPUT_FIELDS: tuple[str, ...] = (
    "totalPing",
    "mainBuildingPing",
    "accessoryBuildingPing",
    "carParkPing",
    "totalAmount",
    "carParkPrice",
    "buildingAge",
    "mrtDistance",
)
NUMERIC_FIELDS: frozenset[str] = frozenset(NUMERIC_INPUT_FIELDS + DERIVED_FIELDS)

COMMUNITY_FIELDS: tuple[str, ...] = (
    "area",
    "district",
    "communityName",
    "address",
    "reason",
)
COMMUNITY_ONLY_FIELDS: frozenset[str] = frozenset({"communityName", "reason"})

GENERAL_FIELDS: tuple[str, ...] = tuple(
    name
    for name in HEADER_ORDER
    if name not in ENVELOPE_FIELDS and name not in COMMUNITY_ONLY_FIELDS
)

# Shown in the compact summary, skipped in the full field dump
DETAIL_EXCLUDED_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "timestamp",
        "category",
        "propertyName",
        "communityName",
        "area",
        "district",
        "unitPrice",
        "totalRating",
    }
)


def _invert(mapping: dict[str, str]) -> dict[str, str]:
    """Build name → identifier, refusing duplicate display names."""
    inverted: dict[str, str] = {}
    for identifier, name in mapping.items():
        if name in inverted:
            raise ValueError(
                f"Display name {name!r} used by both {inverted[name]!r} and {identifier!r}"
            )
        inverted[name] = identifier
    return inverted


NAME_TO_FIELD: dict[str, str] = _invert(FIELD_NAME_MAP)

if set(HEADER_ORDER) != set(FIELD_NAME_MAP) or len(HEADER_ORDER) != len(FIELD_NAME_MAP):
    raise ValueError("HEADER_ORDER must list every mapped field exactly once")

HEADER_NAMES: tuple[str, ...] = tuple(FIELD_NAME_MAP[name] for name in HEADER_ORDER)


def display_name(identifier: str) -> str:
    """
    Convert field identifier to its Chinese display name.

    Example:
        >>> display_name("totalPing")
        "權狀坪數"
        >>> display_name("unknown")
        "unknown"
    """
    return FIELD_NAME_MAP.get(identifier, identifier)


def field_for_header(header: str) -> str | None:
    """
    Convert a CSV header back to its field identifier.

    Example:
        >>> field_for_header("權狀坪數")
        "totalPing"
        >>> field_for_header("不存在")
        None
    """
    return NAME_TO_FIELD.get(header.strip())
