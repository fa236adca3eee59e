from pydantic import BaseModel, Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime
from crm.schemas.common import InputSchema, UpdateSchema


class InventoryItemCreate(InputSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "quantity")

    name: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: int = Field(0, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    sku: Optional[str] = None


class InventoryItemUpdate(UpdateSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "quantity")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    sku: Optional[str] = None


class InventoryItemOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: int
    unit_price: Optional[float] = None
    sku: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
