from pydantic import BaseModel, EmailStr, Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime
from crm.schemas.common import InputSchema, UpdateSchema


class CustomerCreate(InputSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name",)

    name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class CustomerUpdate(UpdateSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class CustomerOut(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
