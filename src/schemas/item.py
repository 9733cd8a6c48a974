"""
StockItem Pydantic schemas.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class StockItemCreate(BaseModel):
    """
    Schema for creating an item.

    Attributes:
        name: Display name
        target_quantity: Quantity to keep in stock
        current_quantity: Quantity in stock now
        unit: Free-text unit
    """

    name: str = Field(min_length=1, max_length=200, description="Item name")
    target_quantity: int = Field(ge=0, description="Quantity to keep in stock")
    current_quantity: int = Field(default=0, ge=0, description="Quantity in stock")
    unit: str = Field(default="", max_length=50, description="Unit")


class StockItemResponse(BaseModel):
    """Schema for item response."""

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    target_quantity: int
    current_quantity: int
    unit: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
