from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, List

from crm.db.session import get_db
from crm.models.employee import Employee
from crm.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeOut
from crm.core.audit_decorator import audit_log
from crm.core.enums import AuditAction
from crm.core.lookups import check_not_found, apply_changes
from crm.core.response_builders import build_employee_response, build_employee_response_list
from crm.utils.idempotency import get_idempotent, set_idempotent

router = APIRouter(prefix="/api/employees", tags=["employees"])


async def _load_employee(db: AsyncSession, employee_id: int) -> Employee:
    res = await db.execute(select(Employee).where(Employee.id == employee_id))
    employee = res.scalars().first()
    check_not_found(employee, "Employee", employee_id)
    return employee


@router.get("", response_model=List[EmployeeOut])
async def list_employees(
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    q = select(Employee)
    if is_active is not None:
        q = q.where(Employee.is_active.is_(is_active))
    q = q.order_by(Employee.created_at.desc(), Employee.id.desc())

    res = await db.execute(q)
    return build_employee_response_list(res.scalars().all())


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee(employee_id: int, db: AsyncSession = Depends(get_db)):
    return build_employee_response(await _load_employee(db, employee_id))


@router.post("", response_model=EmployeeOut)
@audit_log(AuditAction.CREATE_EMPLOYEE)
async def create_employee(
    payload: EmployeeCreate,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    prev = await get_idempotent("employees", idempotency_key)
    if prev:
        return EmployeeOut(**prev)

    employee = Employee(**payload.model_dump())
    db.add(employee)
    await db.commit()
    await db.refresh(employee)

    out = build_employee_response(employee)
    await set_idempotent("employees", idempotency_key, out.model_dump())
    return out


@router.put("/{employee_id}", response_model=EmployeeOut)
@audit_log(AuditAction.UPDATE_EMPLOYEE)
async def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
):
    employee = await _load_employee(db, employee_id)
    apply_changes(employee, payload)

    await db.commit()
    await db.refresh(employee)

    return build_employee_response(employee)


@router.delete("/{employee_id}")
@audit_log(AuditAction.DELETE_EMPLOYEE, id_param="employee_id")
async def delete_employee(employee_id: int, db: AsyncSession = Depends(get_db)):
    employee = await _load_employee(db, employee_id)

    await db.delete(employee)
    await db.commit()

    return {"success": True}
