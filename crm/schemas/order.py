from pydantic import BaseModel, Field
from typing import ClassVar, Optional, Tuple
from datetime import date, datetime
from crm.core.enums import OrderStatus
from crm.schemas.common import InputSchema, UpdateSchema


class OrderCreate(InputSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("order_number", "status")

    customer_id: Optional[int] = None
    order_number: str = Field(min_length=1)
    status: OrderStatus = OrderStatus.PENDING
    pickup_address: Optional[str] = None
    delivery_address: Optional[str] = None
    pickup_date: Optional[date] = None
    delivery_date: Optional[date] = None
    dog_name: Optional[str] = None
    dog_breed: Optional[str] = None
    dog_weight: Optional[float] = Field(None, ge=0)
    special_instructions: Optional[str] = None
    total_amount: Optional[float] = Field(None, ge=0)


class OrderUpdate(UpdateSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("order_number", "status")

    customer_id: Optional[int] = None
    order_number: Optional[str] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    pickup_address: Optional[str] = None
    delivery_address: Optional[str] = None
    pickup_date: Optional[date] = None
    delivery_date: Optional[date] = None
    dog_name: Optional[str] = None
    dog_breed: Optional[str] = None
    dog_weight: Optional[float] = Field(None, ge=0)
    special_instructions: Optional[str] = None
    total_amount: Optional[float] = Field(None, ge=0)


class OrderOut(BaseModel):
    id: int
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    order_number: str
    status: OrderStatus
    pickup_address: Optional[str] = None
    delivery_address: Optional[str] = None
    pickup_date: Optional[date] = None
    delivery_date: Optional[date] = None
    dog_name: Optional[str] = None
    dog_breed: Optional[str] = None
    dog_weight: Optional[float] = None
    special_instructions: Optional[str] = None
    total_amount: Optional[float] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
