from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    price: float = Field(..., ge=0, description="Unit price")
    stock: int = Field(..., description="Units on hand (may be negative after oversales)")
    barcode: Optional[str] = Field(None, max_length=64, description="Barcode")


class ProductCreate(ProductBase):
    """Schema for creating a product (used when seeding the catalog)."""
    pass


class ProductResponse(ProductBase):
    """Schema for product response including all fields."""
    id: int

    model_config = ConfigDict(from_attributes=True)
