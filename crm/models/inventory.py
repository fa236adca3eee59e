from sqlalchemy import Column, String, Integer, Float, Text
from crm.models.base import BaseModel


class InventoryItem(BaseModel):
    __tablename__ = "inventory_items"
    name = Column(String(120), nullable=False)
    description = Column(Text)
    category = Column(String(60))
    quantity = Column(Integer, default=0, nullable=False)
    unit_price = Column(Float, nullable=True)
    sku = Column(String(64))
