from pydantic import BaseModel, Field
from typing import ClassVar, Optional, Tuple
from datetime import date, datetime
from crm.core.enums import ScheduleType, ScheduleStatus
from crm.schemas.common import InputSchema, UpdateSchema


class ScheduleCreate(InputSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("schedule_type", "scheduled_date", "status")

    employee_id: Optional[int] = None
    order_id: Optional[int] = None
    schedule_type: ScheduleType = ScheduleType.PICKUP
    scheduled_date: date
    scheduled_time: Optional[str] = Field(None, max_length=10)
    address: Optional[str] = None
    status: ScheduleStatus = ScheduleStatus.SCHEDULED
    notes: Optional[str] = None


class ScheduleUpdate(UpdateSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("schedule_type", "scheduled_date", "status")

    employee_id: Optional[int] = None
    order_id: Optional[int] = None
    schedule_type: Optional[ScheduleType] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = Field(None, max_length=10)
    address: Optional[str] = None
    status: Optional[ScheduleStatus] = None
    notes: Optional[str] = None


class ScheduleOut(BaseModel):
    id: int
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    order_id: Optional[int] = None
    order_number: Optional[str] = None
    schedule_type: ScheduleType
    scheduled_date: date
    scheduled_time: Optional[str] = None
    address: Optional[str] = None
    status: ScheduleStatus
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
