from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from stocktrack.models.enums import StockOperation


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    sku: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)

    description: str | None = None
    unit: str | None = None
    category: str | None = None
    min_threshold: int | None = None
    max_threshold: int | None = None
    unit_price: float | None = Field(None, ge=0)
    supplier: str | None = None
    location: str | None = None


class ItemUpdate(BaseModel):
    # Omitted or null fields keep their stored value
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    sku: str | None = Field(None, min_length=1)
    quantity: int | None = Field(None, ge=0)
    unit: str | None = None
    category: str | None = None
    min_threshold: int | None = None
    max_threshold: int | None = None
    unit_price: float | None = Field(None, ge=0)
    supplier: str | None = None
    location: str | None = None


class StockAdjust(BaseModel):
    quantity: int = Field(..., gt=0)
    operation: StockOperation


class ItemResponse(BaseModel):
    id: int
    name: str
    description: str | None
    sku: str
    quantity: int
    unit: str
    category: str | None
    min_threshold: int
    max_threshold: int
    unit_price: float
    supplier: str | None
    location: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class CategoryCount(BaseModel):
    category: str
    count: int


class InventoryStats(BaseModel):
    total_items: int
    low_stock_items: int
    total_inventory_value: str
    categories: list[CategoryCount]
