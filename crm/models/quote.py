from sqlalchemy import Column, String, Float, Date, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from crm.models.base import BaseModel
from crm.models.customer import Customer
from crm.models.order import Order
from crm.core.enums import QuoteStatus


class Quote(BaseModel):
    __tablename__ = "quotes"

    customer_id = Column(ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    order_id = Column(ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)

    customer = relationship(Customer, lazy="selectin")
    order = relationship(Order, lazy="selectin")

    quote_number = Column(String(40), unique=True, nullable=False)
    status = Column(
        Enum(QuoteStatus, values_callable=lambda e: [m.value for m in e]),
        default=QuoteStatus.DRAFT,
        nullable=False,
    )
    dog_name = Column(String(120))
    dog_breed = Column(String(120))
    dog_weight = Column(Float)
    departure_city = Column(String(120))
    destination_city = Column(String(120))
    travel_date = Column(Date)

    flight_cost = Column(Float, default=0.0, nullable=False)
    boarding_cost = Column(Float, default=0.0, nullable=False)
    medical_cost = Column(Float, default=0.0, nullable=False)
    additional_fees = Column(Float, default=0.0, nullable=False)
    total_amount = Column(Float, default=0.0, nullable=False)

    notes = Column(Text)
    valid_until = Column(Date)
