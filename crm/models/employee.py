from sqlalchemy import Column, String, Boolean
from crm.models.base import BaseModel


class Employee(BaseModel):
    __tablename__ = "employees"
    name = Column(String(120), nullable=False)
    email = Column(String(120))
    phone = Column(String(40))
    role = Column(String(60))
    is_active = Column(Boolean, default=True, nullable=False)
