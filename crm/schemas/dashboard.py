from pydantic import BaseModel
from typing import List
from crm.schemas.order import OrderOut
from crm.schemas.quote import QuoteOut


class DashboardOut(BaseModel):
    total_revenue: float
    pending_orders: int
    active_quotes: int
    low_stock_items: int
    active_employees: int
    todays_schedules: int
    pending_schedules: int
    total_customers: int
    total_orders: int
    total_quotes: int
    recent_orders: List[OrderOut]
    recent_quotes: List[QuoteOut]
