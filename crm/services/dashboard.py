from datetime import date
from typing import Optional
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from crm.core.config import settings
from crm.core.enums import OrderStatus, QuoteStatus, ScheduleStatus
from crm.core.response_builders import build_order_response_list, build_quote_response_list
from crm.models.customer import Customer
from crm.models.employee import Employee
from crm.models.inventory import InventoryItem
from crm.models.order import Order
from crm.models.quote import Quote
from crm.models.schedule import Schedule
from crm.schemas.dashboard import DashboardOut

RECENT_LIMIT = 5


async def _count(db: AsyncSession, model, *criteria) -> int:
    q = select(func.count(model.id))
    if criteria:
        q = q.where(*criteria)
    res = await db.execute(q)
    return res.scalar_one()


async def build_dashboard(db: AsyncSession, today: Optional[date] = None) -> DashboardOut:
    today = today or date.today()

    revenue = await db.execute(select(func.coalesce(func.sum(Order.total_amount), 0.0)))

    recent_orders = await db.execute(
        select(Order).order_by(Order.created_at.desc(), Order.id.desc()).limit(RECENT_LIMIT)
    )
    recent_quotes = await db.execute(
        select(Quote).order_by(Quote.created_at.desc(), Quote.id.desc()).limit(RECENT_LIMIT)
    )

    return DashboardOut(
        total_revenue=float(revenue.scalar_one()),
        pending_orders=await _count(db, Order, Order.status == OrderStatus.PENDING),
        active_quotes=await _count(db, Quote, Quote.status == QuoteStatus.SENT),
        low_stock_items=await _count(db, InventoryItem, InventoryItem.quantity < settings.LOW_STOCK_THRESHOLD),
        active_employees=await _count(db, Employee, Employee.is_active.is_(True)),
        todays_schedules=await _count(db, Schedule, Schedule.scheduled_date == today),
        pending_schedules=await _count(db, Schedule, Schedule.status == ScheduleStatus.SCHEDULED),
        total_customers=await _count(db, Customer),
        total_orders=await _count(db, Order),
        total_quotes=await _count(db, Quote),
        recent_orders=build_order_response_list(recent_orders.scalars().all()),
        recent_quotes=build_quote_response_list(recent_quotes.scalars().all()),
    )
