import logging
from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, List

from crm.db.session import get_db
from crm.models.customer import Customer
from crm.models.order import Order
from crm.schemas.order import OrderCreate, OrderUpdate, OrderOut
from crm.core.audit_decorator import audit_log
from crm.core.enums import AuditAction, OrderStatus
from crm.core.lookups import check_not_found, check_references, commit_or_conflict, apply_changes
from crm.core.response_builders import build_order_response, build_order_response_list
from crm.services.webhook import send_webhook
from crm.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["orders"])


async def _load_order(db: AsyncSession, order_id: int) -> Order:
    res = await db.execute(
        select(Order).where(Order.id == order_id).execution_options(populate_existing=True)
    )
    order = res.scalars().first()
    check_not_found(order, "Order", order_id)
    return order


@router.get("", response_model=List[OrderOut])
async def list_orders(
    status: Optional[OrderStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    q = select(Order)
    if status:
        q = q.where(Order.status == status)
    q = q.order_by(Order.created_at.desc(), Order.id.desc())

    res = await db.execute(q)
    return build_order_response_list(res.scalars().all())


@router.get("/{order_id}", response_model=OrderOut)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    return build_order_response(await _load_order(db, order_id))


@router.post("", response_model=OrderOut)
@audit_log(AuditAction.CREATE_ORDER)
async def create_order(
    payload: OrderCreate,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    prev = await get_idempotent("orders", idempotency_key)
    if prev:
        return OrderOut(**prev)

    await check_references(db, payload, {"customer_id": Customer})
    order = Order(**payload.model_dump())
    db.add(order)
    await commit_or_conflict(db, f"Order number {payload.order_number} already exists")

    out = build_order_response(await _load_order(db, order.id))
    await set_idempotent("orders", idempotency_key, out.model_dump())
    return out


@router.put("/{order_id}", response_model=OrderOut)
@audit_log(AuditAction.UPDATE_ORDER)
async def update_order(
    order_id: int,
    payload: OrderUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an order"""
    order = await _load_order(db, order_id)
    old_status = order.status
    await check_references(db, payload, {"customer_id": Customer})

    apply_changes(order, payload)
    await commit_or_conflict(db, f"Order number {payload.order_number} already exists")

    order = await _load_order(db, order_id)

    if old_status != order.status:
        await send_webhook({
            "event": "order.status_changed",
            "order_id": order.id,
            "order_number": order.order_number,
            "old_status": str(old_status),
            "status": str(order.status),
            "total_amount": order.total_amount,
        })

    return build_order_response(order)


@router.delete("/{order_id}")
@audit_log(AuditAction.DELETE_ORDER, id_param="order_id")
async def delete_order(order_id: int, db: AsyncSession = Depends(get_db)):
    order = await _load_order(db, order_id)

    await db.delete(order)
    await db.commit()

    return {"success": True}
