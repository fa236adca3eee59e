from pydantic import BaseModel, EmailStr, Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime
from crm.schemas.common import InputSchema, UpdateSchema


class EmployeeCreate(InputSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "is_active")

    name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    is_active: bool = True


class EmployeeUpdate(UpdateSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "is_active")

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None


class EmployeeOut(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
