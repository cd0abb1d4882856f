"""
Derived field calculators.

Compute unit price, indoor usable area, public area ratio and total rating
from raw form inputs. All functions are pure: unparseable input gives None.
"""

from typing import TYPE_CHECKING, Any, Iterable, Optional

from src.utils.parsers.number import is_blank, parse_number, round_half_up

if TYPE_CHECKING:
    from src.modules.records.models import GeneralProperty


def _optional_amount(value: Any) -> tuple[bool, float]:
    """
    Parse an optional parking amount.

    Returns:
        (ok, amount): blank → (True, 0.0), unparseable → (False, 0.0)
    """
    if is_blank(value):
        return True, 0.0
    number = parse_number(value)
    if number is None:
        return False, 0.0
    return True, number


def unit_price(
    total_amount: Any,
    total_area: Any,
    parking_price: Any = "",
    parking_area: Any = "",
) -> Optional[float]:
    """
    Calculate unit price (萬/坪) excluding the parking space.

    Args:
        total_amount: Total price in 萬 (e.g., "2000")
        total_area: Registered area in 坪 (e.g., "40")
        parking_price: Parking price in 萬, blank if none
        parking_area: Parking area in 坪, blank if none

    Returns:
        Unit price rounded to 2 decimals, or None

    Examples:
        >>> unit_price("1000", "50")
        20.0
        >>> unit_price("1000", "0")
        None
        >>> unit_price("2300", "45", "300", "5")
        50.0
        >>> unit_price("2300", "45", "abc", "5")
        None
    """
    amount = parse_number(total_amount)
    area = parse_number(total_area)
    if amount is None or area is None or area <= 0:
        return None

    price_ok, park_price = _optional_amount(parking_price)
    area_ok, park_area = _optional_amount(parking_area)
    if not (price_ok and area_ok):
        return None

    effective_area = area - park_area
    if effective_area <= 0:
        return None

    return round_half_up((amount - park_price) / effective_area, 2)


def indoor_usable_area(main: Any, accessory: Any) -> Optional[float]:
    """
    Calculate indoor usable area (主建物 + 附屬建物).

    Examples:
        >>> indoor_usable_area("25", "5")
        30.0
        >>> indoor_usable_area("25", "")
        None
    """
    main_area = parse_number(main)
    accessory_area = parse_number(accessory)
    if main_area is None or accessory_area is None:
        return None
    return round_half_up(main_area + accessory_area, 2)


def public_area_ratio(
    total: Any,
    main: Any,
    accessory: Any,
    parking_area: Any = "",
) -> Optional[float]:
    """
    Calculate public area ratio (公設比) in percent.

    Parking area is excluded from the registered area; a blank or
    unparseable parking area counts as 0. When indoor area is not smaller
    than the effective total the ratio is 0; a non-positive effective
    total otherwise gives None.

    Examples:
        >>> public_area_ratio("40", "25", "5")
        25.0
        >>> public_area_ratio("30", "25", "5")
        0.0
        >>> public_area_ratio("0", "25", "5")
        None
    """
    total_area = parse_number(total)
    main_area = parse_number(main)
    accessory_area = parse_number(accessory)
    if total_area is None or main_area is None or accessory_area is None:
        return None
    if total_area <= 0:
        return None

    indoor = main_area + accessory_area
    effective_total = total_area - (parse_number(parking_area) or 0.0)
    if indoor >= effective_total:
        return 0.0
    if effective_total <= 0:
        return None

    return round_half_up((effective_total - indoor) / effective_total * 100, 2)


def total_rating(ratings: Iterable[Any]) -> int:
    """
    Sum rating inputs, unset or unparseable ones count as 0.

    Examples:
        >>> total_rating(["5", "4", "3", "", "x"])
        12
    """
    total = 0
    for rating in ratings:
        number = parse_number(rating)
        if number is not None:
            total += int(number)
    return total


def recalculate(form: "GeneralProperty") -> "GeneralProperty":
    """
    Recompute every derived field from the form's raw inputs.

    Args:
        form: General property form data

    Returns:
        A copy of the form with unitPrice, indoorUsablePing,
        publicAreaRatio and totalRating refreshed
    """
    return form.model_copy(
        update={
            "unit_price": unit_price(
                form.total_amount,
                form.total_ping,
                form.car_park_price,
                form.car_park_ping,
            ),
            "indoor_usable_ping": indoor_usable_area(
                form.main_building_ping,
                form.accessory_building_ping,
            ),
            "public_area_ratio": public_area_ratio(
                form.total_ping,
                form.main_building_ping,
                form.accessory_building_ping,
                form.car_park_ping,
            ),
            "total_rating": total_rating(form.ratings),
        }
    )
