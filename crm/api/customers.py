from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, List

from crm.db.session import get_db
from crm.models.customer import Customer
from crm.schemas.customer import CustomerCreate, CustomerUpdate, CustomerOut
from crm.core.audit_decorator import audit_log
from crm.core.enums import AuditAction
from crm.core.lookups import check_not_found, apply_changes
from crm.core.response_builders import build_customer_response, build_customer_response_list
from crm.utils.idempotency import get_idempotent, set_idempotent

router = APIRouter(prefix="/api/customers", tags=["customers"])


async def _load_customer(db: AsyncSession, customer_id: int) -> Customer:
    res = await db.execute(select(Customer).where(Customer.id == customer_id))
    customer = res.scalars().first()
    check_not_found(customer, "Customer", customer_id)
    return customer


@router.get("", response_model=List[CustomerOut])
async def list_customers(db: AsyncSession = Depends(get_db)):
    res = await db.execute(select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()))
    return build_customer_response_list(res.scalars().all())


@router.get("/{customer_id}", response_model=CustomerOut)
async def get_customer(customer_id: int, db: AsyncSession = Depends(get_db)):
    return build_customer_response(await _load_customer(db, customer_id))


@router.post("", response_model=CustomerOut)
@audit_log(AuditAction.CREATE_CUSTOMER)
async def create_customer(
    payload: CustomerCreate,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    prev = await get_idempotent("customers", idempotency_key)
    if prev:
        return CustomerOut(**prev)

    customer = Customer(**payload.model_dump())
    db.add(customer)
    await db.commit()
    await db.refresh(customer)

    out = build_customer_response(customer)
    await set_idempotent("customers", idempotency_key, out.model_dump())
    return out


@router.put("/{customer_id}", response_model=CustomerOut)
@audit_log(AuditAction.UPDATE_CUSTOMER)
async def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
):
    customer = await _load_customer(db, customer_id)
    apply_changes(customer, payload)

    await db.commit()
    await db.refresh(customer)

    return build_customer_response(customer)


@router.delete("/{customer_id}")
@audit_log(AuditAction.DELETE_CUSTOMER, id_param="customer_id")
async def delete_customer(customer_id: int, db: AsyncSession = Depends(get_db)):
    customer = await _load_customer(db, customer_id)

    await db.delete(customer)
    await db.commit()

    return {"success": True}
