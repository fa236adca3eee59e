from sqlalchemy import Column, String
from crm.models.base import BaseModel


class Customer(BaseModel):
    __tablename__ = "customers"
    name = Column(String(120), nullable=False)
    email = Column(String(120))
    phone = Column(String(40))
    address = Column(String(255))
    city = Column(String(120))
    state = Column(String(60))
    zip_code = Column(String(20))
