from sqlalchemy import Column, String, Date, DateTime, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from crm.models.base import BaseModel
from crm.models.employee import Employee
from crm.models.order import Order
from crm.core.enums import ScheduleType, ScheduleStatus


class Schedule(BaseModel):
    __tablename__ = "schedules"

    employee_id = Column(ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    order_id = Column(ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)

    employee = relationship(Employee, lazy="selectin")
    order = relationship(Order, lazy="selectin")

    schedule_type = Column(
        Enum(ScheduleType, values_callable=lambda e: [m.value for m in e]),
        default=ScheduleType.PICKUP,
        nullable=False,
    )
    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(String(10))
    address = Column(String(255))
    status = Column(
        Enum(ScheduleStatus, values_callable=lambda e: [m.value for m in e]),
        default=ScheduleStatus.SCHEDULED,
        nullable=False,
    )
    notes = Column(Text)
    completed_at = Column(DateTime(timezone=True), nullable=True)
