"""
Database Schemas

Pydantic models for the records stored in the database and for the bodies
the API accepts and returns.

Each persisted model maps to one collection, keyed by its id field:
- Customer -> "customers" collection, keyed by userId
- Order -> "orders" collection, keyed by orderId

Field names are camelCase because they are the JSON wire format as well.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional, Union

UNIT_PRICE = 20


class Customer(BaseModel):
    """
    Customers collection schema
    Collection name: "customers"
    """
    userId: str = Field(..., description="Opaque customer id")
    fullName: str = Field(..., description="Full name")
    block: Optional[str] = Field(None, description="Apartment block")
    doorNo: str = Field(..., description="Door number")
    address: Optional[str] = Field(None, description="Street address")


class Order(BaseModel):
    """
    Orders collection schema
    Collection name: "orders"
    """
    orderId: str = Field(..., description="Opaque order id")
    userId: str = Field(..., description="Customer id, not checked against customers")
    vendorId: Optional[str] = Field(None, description="Vendor id, not checked")
    quantity: int = Field(..., ge=1, description="Number of cans")
    unitPrice: int = Field(UNIT_PRICE, description="Price per can when the order was placed")
    totalPrice: int = Field(..., ge=0, description="quantity * unitPrice, fixed at creation")
    timestamp: str = Field(..., description="ISO-8601 UTC instant of creation")
    status: str = Field("Pending", description="Pending | Delivered | Cancelled")


# Request bodies leave every field optional so a missing value is reported
# as a 400 by the ledger instead of a 422 by FastAPI.

class RegisterRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    fullName: Optional[str] = None
    block: Optional[str] = None
    doorNo: Optional[str] = None
    address: Optional[str] = None


class OrderRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    userId: Optional[str] = None
    quantity: Any = None
    vendorId: Optional[str] = None


class Report(BaseModel):
    totalRevenue: Union[int, float] = 0
    totalCansSold: Union[int, float] = 0
    orders: List[dict] = Field(default_factory=list)
