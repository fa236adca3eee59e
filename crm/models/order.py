from sqlalchemy import Column, String, Float, Date, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from crm.models.base import BaseModel
from crm.models.customer import Customer
from crm.core.enums import OrderStatus


class Order(BaseModel):
    __tablename__ = "orders"

    customer_id = Column(ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    customer = relationship(Customer, lazy="selectin")

    order_number = Column(String(40), unique=True, nullable=False)
    status = Column(
        Enum(OrderStatus, values_callable=lambda e: [m.value for m in e]),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    pickup_address = Column(String(255))
    delivery_address = Column(String(255))
    pickup_date = Column(Date)
    delivery_date = Column(Date)
    dog_name = Column(String(120))
    dog_breed = Column(String(120))
    dog_weight = Column(Float)
    special_instructions = Column(Text)
    total_amount = Column(Float, nullable=True)
