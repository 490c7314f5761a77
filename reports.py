"""
Sales reports.

Nothing is aggregated ahead of time: each report scans the whole orders
collection and sums over the matching records, so totals always agree with
the orders returned next to them.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

import database
from errors import ValidationError
from schemas import Report

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _as_number(value: Any) -> Number:
    # older records may carry quantities as strings
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def _as_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _order_time(order: Dict[str, Any]) -> Optional[datetime]:
    raw = order.get("timestamp")
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _matching(predicate: Callable[[Dict[str, Any]], bool]) -> List[Dict[str, Any]]:
    orders = [o for o in database.scan_documents(database.ORDERS) if predicate(o)]
    orders.sort(key=lambda o: str(o.get("timestamp", "")))
    return orders


def summarize(orders: List[Dict[str, Any]]) -> Report:
    return Report(
        totalRevenue=sum(_as_number(o.get("totalPrice")) for o in orders),
        totalCansSold=sum(_as_number(o.get("quantity")) for o in orders),
        orders=orders,
    )


def order_history(user_id: Optional[str]) -> List[Dict[str, Any]]:
    if user_id is None or not str(user_id).strip():
        raise ValidationError("Missing userId")
    return _matching(lambda o: o.get("userId") == user_id)


def dashboard() -> Report:
    return summarize(_matching(lambda o: True))


def monthly_report(month: Optional[str], year: Optional[str], user_id: Optional[str] = None) -> Report:
    """
    Totals for one calendar month (1 = January) of one year, in UTC.

    month and year come straight from the query string. If either is missing
    or not an integer the window matches no order and an empty report is
    returned. user_id, when given, narrows the report to that customer.
    """
    m = _as_int(month)
    y = _as_int(year)
    if m is None or y is None:
        logger.debug("monthly report with unusable window month=%r year=%r", month, year)

    def in_window(order: Dict[str, Any]) -> bool:
        if m is None or y is None:
            return False
        if user_id and order.get("userId") != user_id:
            return False
        when = _order_time(order)
        return when is not None and when.month == m and when.year == y

    return summarize(_matching(in_window))
