from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, List

from crm.db.session import get_db
from crm.models.inventory import InventoryItem
from crm.schemas.inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemOut
from crm.core.audit_decorator import audit_log
from crm.core.config import settings
from crm.core.enums import AuditAction
from crm.core.lookups import check_not_found, apply_changes
from crm.core.response_builders import build_inventory_item_response, build_inventory_item_response_list
from crm.utils.idempotency import get_idempotent, set_idempotent

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


async def _load_item(db: AsyncSession, item_id: int) -> InventoryItem:
    res = await db.execute(select(InventoryItem).where(InventoryItem.id == item_id))
    item = res.scalars().first()
    check_not_found(item, "Inventory item", item_id)
    return item


@router.get("", response_model=List[InventoryItemOut])
async def list_inventory_items(
    category: Optional[str] = Query(None),
    low_stock: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    q = select(InventoryItem)
    if category:
        q = q.where(InventoryItem.category == category)
    if low_stock:
        q = q.where(InventoryItem.quantity < settings.LOW_STOCK_THRESHOLD)
    q = q.order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc())

    res = await db.execute(q)
    return build_inventory_item_response_list(res.scalars().all())


@router.get("/{item_id}", response_model=InventoryItemOut)
async def get_item(item_id: int, db: AsyncSession = Depends(get_db)):
    return build_inventory_item_response(await _load_item(db, item_id))


@router.post("", response_model=InventoryItemOut)
@audit_log(AuditAction.CREATE_INVENTORY_ITEM)
async def create_item(
    payload: InventoryItemCreate,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    prev = await get_idempotent("inventory", idempotency_key)
    if prev:
        return InventoryItemOut(**prev)

    item = InventoryItem(**payload.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)

    out = build_inventory_item_response(item)
    await set_idempotent("inventory", idempotency_key, out.model_dump())
    return out


@router.put("/{item_id}", response_model=InventoryItemOut)
@audit_log(AuditAction.UPDATE_INVENTORY_ITEM)
async def update_item(
    item_id: int,
    payload: InventoryItemUpdate,
    db: AsyncSession = Depends(get_db),
):
    item = await _load_item(db, item_id)
    apply_changes(item, payload)

    await db.commit()
    await db.refresh(item)

    return build_inventory_item_response(item)


@router.delete("/{item_id}")
@audit_log(AuditAction.DELETE_INVENTORY_ITEM, id_param="item_id")
async def delete_item(item_id: int, db: AsyncSession = Depends(get_db)):
    item = await _load_item(db, item_id)

    await db.delete(item)
    await db.commit()

    return {"success": True}
