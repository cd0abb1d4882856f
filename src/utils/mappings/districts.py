"""
Area → district options (主要都市 → 行政區).

"其他" in the district field defers to the free-text otherDistrict field.
"""

OTHER_OPTION = "其他"

DISTRICTS_BY_AREA: dict[str, tuple[str, ...]] = {
    "台北市": (
        "北投區",
        "士林區",
        "大同區",
        "中山區",
        "松山區",
        "內湖區",
        "文山區",
        "中正區",
        "大安區",
        "信義區",
        "萬華區",
        "南港區",
    ),
    "新北市": (
        "板橋區",
        "三重區",
        "中和區",
        "永和區",
        "新莊區",
        "新店區",
        "樹林區",
        "鶯歌區",
        "三峽區",
        "淡水區",
        "汐止區",
        "瑞芳區",
        "土城區",
        "蘆洲區",
        "五股區",
        "泰山區",
        "林口區",
        "深坑區",
        "石碇區",
        "坪林區",
        "三芝區",
        "石門區",
        "八里區",
        "平溪區",
        "雙溪區",
        "貢寮區",
        "金山區",
        "萬里區",
        "烏來區",
    ),
}

AREAS: tuple[str, ...] = tuple(DISTRICTS_BY_AREA)


def is_known_district(area: str, district: str) -> bool:
    """
    Check whether a district belongs to the given area.

    Example:
        >>> is_known_district("台北市", "信義區")
        True
        >>> is_known_district("台北市", "板橋區")
        False
        >>> is_known_district("台北市", "其他")
        True
    """
    if district == OTHER_OPTION:
        return True
    return district in DISTRICTS_BY_AREA.get(area, ())
