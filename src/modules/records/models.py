"""
Record Models.

Pydantic models for saved listing records: a general property (一般物件) or a
designated community (指定社區), tagged by ``category``.
"""

import time
from datetime import datetime
from typing import Annotated, Any, Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from src.utils.mappings.category import CATEGORY_COMMUNITY, CATEGORY_GENERAL
from src.utils.parsers.number import format_number, parse_number

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class GeneralProperty(BaseModel):
    """General property form data (raw inputs + derived fields)."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    # Basic info
    property_name: str = Field(default="", alias="propertyName")
    area: str = Field(default="", description="主要都市")
    district: str = Field(default="", description="行政區")
    other_district: str = Field(default="", alias="otherDistrict")
    source: str = Field(default="", description="物件來源")
    other_source: str = Field(default="", alias="otherSource")
    type: str = Field(default="", description="房屋種類 (預售屋, 中古屋, 新成屋)")

    # Parking
    car_park_type: str = Field(default="", alias="carParkType")
    car_park_floor: str = Field(default="", alias="carParkFloor")

    # Layout
    layout_rooms: str = Field(default="", alias="layoutRooms")
    layout_living_rooms: str = Field(default="", alias="layoutLivingRooms")
    layout_bathrooms: str = Field(default="", alias="layoutBathrooms")

    has_px_mart: str = Field(default="", alias="hasPXMart")
    address: str = ""
    floor: str = ""

    # Area (坪) and price (萬), kept as typed
    total_ping: str = Field(default="", alias="totalPing")
    main_building_ping: str = Field(default="", alias="mainBuildingPing")
    accessory_building_ping: str = Field(default="", alias="accessoryBuildingPing")
    car_park_ping: str = Field(default="", alias="carParkPing")
    total_amount: str = Field(default="", alias="totalAmount")
    car_park_price: str = Field(default="", alias="carParkPrice")
    building_age: str = Field(default="", alias="buildingAge")

    # Surrounding
    mrt_station: str = Field(default="", alias="mrtStation")
    mrt_distance: str = Field(default="", alias="mrtDistance")
    notes: str = ""

    # Ratings ("1"~"5")
    rating_lighting: str = Field(default="", alias="rating_採光")
    rating_amenities: str = Field(default="", alias="rating_生活機能")
    rating_transport: str = Field(default="", alias="rating_交通")
    rating_price: str = Field(default="", alias="rating_價格滿意度")
    rating_potential: str = Field(default="", alias="rating_未來發展潛力")

    # Derived (recomputed, never trusted on load)
    unit_price: Optional[float] = Field(default=None, alias="unitPrice")
    indoor_usable_ping: Optional[float] = Field(default=None, alias="indoorUsablePing")
    public_area_ratio: Optional[float] = Field(default=None, alias="publicAreaRatio")
    total_rating: Optional[int] = Field(default=None, alias="totalRating")

    @field_validator(
        "total_ping",
        "main_building_ping",
        "accessory_building_ping",
        "car_park_ping",
        "total_amount",
        "car_park_price",
        "building_age",
        "mrt_distance",
        "layout_rooms",
        "layout_living_rooms",
        "layout_bathrooms",
        "rating_lighting",
        "rating_amenities",
        "rating_transport",
        "rating_price",
        "rating_potential",
        mode="before",
    )
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        """Accept parsed numbers (e.g. from import) and keep them as typed text."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return format_number(float(v))
        return v

    @field_validator(
        "property_name",
        "area",
        "district",
        "other_district",
        "source",
        "other_source",
        "type",
        "car_park_type",
        "car_park_floor",
        "has_px_mart",
        "address",
        "floor",
        "mrt_station",
        "notes",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """Treat missing text as empty string."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return format_number(float(v))
        return v

    @field_validator("unit_price", "indoor_usable_ping", "public_area_ratio", mode="before")
    @classmethod
    def parse_derived(cls, v: Any) -> Optional[float]:
        """Parse derived values, unparseable becomes None."""
        return parse_number(v)

    @field_validator("total_rating", mode="before")
    @classmethod
    def parse_total_rating(cls, v: Any) -> Optional[int]:
        """Parse total rating as an integer."""
        number = parse_number(v)
        return None if number is None else int(round(number))

    @property
    def ratings(self) -> tuple[str, str, str, str, str]:
        """Five rating inputs in display order."""
        return (
            self.rating_lighting,
            self.rating_amenities,
            self.rating_transport,
            self.rating_price,
            self.rating_potential,
        )


class CommunityListing(BaseModel):
    """Designated community form data."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    area: str = Field(default="", description="主要都市")
    district: str = Field(default="", description="行政區")
    community_name: str = Field(default="", alias="communityName")
    address: str = ""
    reason: str = Field(default="", description="獲選的原因")

    @field_validator("area", "district", "community_name", "address", "reason", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """Treat missing text as empty string."""
        return "" if v is None else v


FormData = Union[GeneralProperty, CommunityListing]


class _RecordBase(BaseModel):
    """Envelope shared by both record variants."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize with external field identifiers (camelCase)."""
        return self.model_dump(by_alias=True, mode="json")

    def get_value(self, identifier: str) -> Any:
        """
        Read an envelope or form field by identifier.

        Fields of the other variant resolve to None.
        """
        if identifier in ("id", "timestamp", "category"):
            return getattr(self, identifier)
        return self.form_data.model_dump(by_alias=True).get(identifier)


class GeneralRecord(_RecordBase):
    """Saved general property record."""

    category: Literal["general"] = CATEGORY_GENERAL
    form_data: GeneralProperty = Field(alias="formData")

    @property
    def title(self) -> str:
        return self.form_data.property_name


class CommunityRecord(_RecordBase):
    """Saved designated community record."""

    category: Literal["community"] = CATEGORY_COMMUNITY
    form_data: CommunityListing = Field(alias="formData")

    @property
    def title(self) -> str:
        return self.form_data.community_name


Record = Annotated[Union[GeneralRecord, CommunityRecord], Field(discriminator="category")]

RECORD_LIST_ADAPTER = TypeAdapter(list[Record])

FORM_CLASSES: dict[str, type[FormData]] = {
    CATEGORY_GENERAL: GeneralProperty,
    CATEGORY_COMMUNITY: CommunityListing,
}

RECORD_CLASSES: dict[str, type[_RecordBase]] = {
    CATEGORY_GENERAL: GeneralRecord,
    CATEGORY_COMMUNITY: CommunityRecord,
}


def make_record(
    category: str,
    record_id: int,
    timestamp: str,
    form_data: FormData,
) -> Union[GeneralRecord, CommunityRecord]:
    """
    Build a record of the given category.

    Raises:
        ValueError: category unknown or form_data of the other variant
    """
    form_cls = FORM_CLASSES.get(category)
    if form_cls is None:
        raise ValueError(f"Unknown category: {category!r}")
    if not isinstance(form_data, form_cls):
        raise ValueError(
            f"{type(form_data).__name__} does not match category {category!r}"
        )
    return RECORD_CLASSES[category](id=record_id, timestamp=timestamp, form_data=form_data)


def format_timestamp(now: Optional[datetime] = None) -> str:
    """Format a display timestamp (zh-TW, 24h)."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def new_record_id(taken: Iterable[int] = (), now: Optional[datetime] = None) -> int:
    """
    Create a record id from the current time in milliseconds.

    Bumps past any id already in ``taken`` so ids stay unique.
    """
    base = int(now.timestamp() * 1000) if now else time.time_ns() // 1_000_000
    used = set(taken)
    while base in used:
        base += 1
    return base
