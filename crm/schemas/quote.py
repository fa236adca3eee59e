from pydantic import BaseModel, Field
from typing import ClassVar, Optional, Tuple
from datetime import date, datetime
from crm.core.enums import QuoteStatus
from crm.schemas.common import InputSchema, UpdateSchema

COST_FIELDS = ("flight_cost", "boarding_cost", "medical_cost", "additional_fees")


class QuoteCreate(InputSchema):
    """Quote body. ``total_amount`` and ``order_id`` are server-owned and ignored."""

    required_fields: ClassVar[Tuple[str, ...]] = ("status",) + COST_FIELDS

    customer_id: Optional[int] = None
    quote_number: Optional[str] = Field(None, min_length=1)
    status: QuoteStatus = QuoteStatus.DRAFT
    dog_name: Optional[str] = None
    dog_breed: Optional[str] = None
    dog_weight: Optional[float] = Field(None, ge=0)
    departure_city: Optional[str] = None
    destination_city: Optional[str] = None
    travel_date: Optional[date] = None
    flight_cost: float = Field(0.0, ge=0)
    boarding_cost: float = Field(0.0, ge=0)
    medical_cost: float = Field(0.0, ge=0)
    additional_fees: float = Field(0.0, ge=0)
    notes: Optional[str] = None
    valid_until: Optional[date] = None


class QuoteUpdate(UpdateSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("quote_number", "status") + COST_FIELDS

    customer_id: Optional[int] = None
    quote_number: Optional[str] = Field(None, min_length=1)
    status: Optional[QuoteStatus] = None
    dog_name: Optional[str] = None
    dog_breed: Optional[str] = None
    dog_weight: Optional[float] = Field(None, ge=0)
    departure_city: Optional[str] = None
    destination_city: Optional[str] = None
    travel_date: Optional[date] = None
    flight_cost: Optional[float] = Field(None, ge=0)
    boarding_cost: Optional[float] = Field(None, ge=0)
    medical_cost: Optional[float] = Field(None, ge=0)
    additional_fees: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    valid_until: Optional[date] = None


class QuoteOut(BaseModel):
    id: int
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    quote_number: str
    status: QuoteStatus
    dog_name: Optional[str] = None
    dog_breed: Optional[str] = None
    dog_weight: Optional[float] = None
    departure_city: Optional[str] = None
    destination_city: Optional[str] = None
    travel_date: Optional[date] = None
    flight_cost: float
    boarding_cost: float
    medical_cost: float
    additional_fees: float
    total_amount: float
    notes: Optional[str] = None
    valid_until: Optional[date] = None
    order_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class QuoteEmailOut(BaseModel):
    quote_id: int
    subject: str
    body: str
