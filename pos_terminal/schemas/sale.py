from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional

# Largest integer the database can store
MAX_DB_INT = 2**63 - 1


class CartItem(BaseModel):
    """
    One cart line as sent by the till.

    The till posts whole product objects plus a quantity; only ``id``,
    ``quantity`` and ``price`` are used. Extra fields are ignored.
    """
    id: int = Field(..., ge=1, le=MAX_DB_INT, description="ID of the product sold")
    quantity: int = Field(..., ge=1, le=MAX_DB_INT, description="Units sold")
    price: float = Field(..., ge=0, description="Unit price charged")
    name: Optional[str] = Field(None, description="Product name (informational)")


class SaleCreate(BaseModel):
    """Schema for a checkout."""
    total: float = Field(..., ge=0, description="Amount charged for the whole cart")
    items: list[CartItem] = Field(..., min_length=1, description="Cart lines")


class SaleCreateResponse(BaseModel):
    success: bool = True
    sale_id: int = Field(..., alias="saleId")

    model_config = ConfigDict(populate_by_name=True)


class SaleSummary(BaseModel):
    """Row of the sales history."""
    id: int
    total: float
    date: datetime
    item_count: int = Field(..., alias="itemCount")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class SaleLine(BaseModel):
    """Line item as shown on a sale detail and printed on a receipt."""
    name: str
    quantity: int
    price: float

    model_config = ConfigDict(from_attributes=True)


class SaleDetail(BaseModel):
    id: int
    total: float
    date: datetime
    items: list[SaleLine]
