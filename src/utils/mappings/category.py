"""
Record category mapping (中文 → 代號).

general=一般物件, community=指定社區
"""

CATEGORY_GENERAL = "general"
CATEGORY_COMMUNITY = "community"

CATEGORY_CODE_TO_NAME: dict[str, str] = {
    CATEGORY_GENERAL: "一般物件",
    CATEGORY_COMMUNITY: "指定社區",
}

# Accepted tags, including the Chinese export labels and the legacy "designated" tag
CATEGORY_NAME_TO_CODE: dict[str, str] = {
    "general": CATEGORY_GENERAL,
    "community": CATEGORY_COMMUNITY,
    "designated": CATEGORY_COMMUNITY,
    "一般物件": CATEGORY_GENERAL,
    "指定社區": CATEGORY_COMMUNITY,
}


def convert_category_to_code(tag: str | None) -> str | None:
    """
    Convert a category tag to its code.

    Args:
        tag: Category code or Chinese label (e.g., "general", "指定社區")

    Returns:
        "general", "community" or None if unrecognized

    Example:
        >>> convert_category_to_code("指定社區")
        "community"
        >>> convert_category_to_code("designated")
        "community"
        >>> convert_category_to_code("unknown")
        None
    """
    if not tag or not isinstance(tag, str):
        return None
    return CATEGORY_NAME_TO_CODE.get(tag.strip())


def convert_category_to_name(code: str) -> str:
    """Convert a category code to its Chinese label."""
    return CATEGORY_CODE_TO_NAME[code]
