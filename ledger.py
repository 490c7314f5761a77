"""
Customer registry and order ledger.

Both write exactly one record per call; nothing is checked across
collections, so an order may name a userId or vendorId that was never
registered.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

import database
from errors import ValidationError
from schemas import Customer, Order, UNIT_PRICE

logger = logging.getLogger(__name__)

# BSON stores ints in 8 bytes; totalPrice must fit too
MAX_QUANTITY = (2 ** 63 - 1) // UNIT_PRICE


def new_id() -> str:
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    # 2024-03-05T10:15:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _present(value: Optional[str]) -> bool:
    return value is not None and str(value).strip() != ""


def _parse_quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("quantity must be a positive integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        digits = value.strip()
        if not (digits.isascii() and digits.isdigit()):
            raise ValidationError("quantity must be a positive integer")
        value = int(digits)
    if not isinstance(value, int) or value < 1:
        raise ValidationError("quantity must be a positive integer")
    if value > MAX_QUANTITY:
        raise ValidationError(f"quantity must not exceed {MAX_QUANTITY}")
    return value


def register_customer(full_name: Optional[str], door_no: Optional[str],
                      block: Optional[str] = None, address: Optional[str] = None) -> Customer:
    """Create a customer profile under a fresh userId and store it."""
    if not _present(full_name) or not _present(door_no):
        logger.warning("registration rejected: fullName or doorNo missing")
        raise ValidationError("Missing required fields")
    customer = Customer(
        userId=new_id(),
        fullName=full_name,
        block=block,
        doorNo=door_no,
        address=address,
    )
    database.put_document(database.CUSTOMERS, customer.userId, customer)
    logger.info("customer registered userId=%s", customer.userId)
    return customer


def place_order(user_id: Optional[str], quantity: Any, vendor_id: Optional[str] = None) -> Order:
    """
    Record a new order.

    The total is priced once here at UNIT_PRICE per can and stored with the
    order; later reports read it back instead of recomputing it. Placing the
    same order twice creates two orders.
    """
    if not _present(user_id) or quantity is None or (isinstance(quantity, str) and not quantity.strip()):
        logger.warning("order rejected: userId or quantity missing")
        raise ValidationError("Missing required fields")
    qty = _parse_quantity(quantity)
    order = Order(
        orderId=new_id(),
        userId=user_id,
        vendorId=vendor_id,
        quantity=qty,
        unitPrice=UNIT_PRICE,
        totalPrice=qty * UNIT_PRICE,
        timestamp=utc_timestamp(),
        status="Pending",
    )
    database.put_document(database.ORDERS, order.orderId, order)
    logger.info("order placed orderId=%s userId=%s quantity=%d", order.orderId, order.userId, qty)
    return order
