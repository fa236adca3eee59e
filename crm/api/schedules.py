from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, List

from crm.db.session import get_db
from crm.models.employee import Employee
from crm.models.order import Order
from crm.models.schedule import Schedule
from crm.schemas.schedule import ScheduleCreate, ScheduleUpdate, ScheduleOut
from crm.core.audit_decorator import audit_log
from crm.core.enums import AuditAction, ScheduleStatus
from crm.core.lookups import check_not_found, check_references, commit_or_conflict, apply_changes
from crm.core.response_builders import build_schedule_response, build_schedule_response_list
from crm.utils.idempotency import get_idempotent, set_idempotent

router = APIRouter(prefix="/api/schedules", tags=["schedules"])

SCHEDULE_REFERENCES = {"employee_id": Employee, "order_id": Order}


async def _load_schedule(db: AsyncSession, schedule_id: int) -> Schedule:
    res = await db.execute(
        select(Schedule).where(Schedule.id == schedule_id).execution_options(populate_existing=True)
    )
    schedule = res.scalars().first()
    check_not_found(schedule, "Schedule", schedule_id)
    return schedule


def _stamp_completion(schedule: Schedule) -> None:
    if schedule.status == ScheduleStatus.COMPLETED:
        if schedule.completed_at is None:
            schedule.completed_at = datetime.now(timezone.utc)
    else:
        schedule.completed_at = None


@router.get("", response_model=List[ScheduleOut])
async def list_schedules(
    status: Optional[ScheduleStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    q = select(Schedule)
    if status:
        q = q.where(Schedule.status == status)
    # scheduled_time is HH:MM text, so it sorts lexically
    q = q.order_by(Schedule.scheduled_date.desc(), Schedule.scheduled_time.asc(), Schedule.id.asc())

    res = await db.execute(q)
    return build_schedule_response_list(res.scalars().all())


@router.get("/{schedule_id}", response_model=ScheduleOut)
async def get_schedule(schedule_id: int, db: AsyncSession = Depends(get_db)):
    return build_schedule_response(await _load_schedule(db, schedule_id))


@router.post("", response_model=ScheduleOut)
@audit_log(AuditAction.CREATE_SCHEDULE)
async def create_schedule(
    payload: ScheduleCreate,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    prev = await get_idempotent("schedules", idempotency_key)
    if prev:
        return ScheduleOut(**prev)

    await check_references(db, payload, SCHEDULE_REFERENCES)
    schedule = Schedule(**payload.model_dump())
    _stamp_completion(schedule)
    db.add(schedule)
    await commit_or_conflict(db, "Schedule conflicts with an existing record")

    out = build_schedule_response(await _load_schedule(db, schedule.id))
    await set_idempotent("schedules", idempotency_key, out.model_dump())
    return out


@router.put("/{schedule_id}", response_model=ScheduleOut)
@audit_log(AuditAction.UPDATE_SCHEDULE)
async def update_schedule(
    schedule_id: int,
    payload: ScheduleUpdate,
    db: AsyncSession = Depends(get_db),
):
    schedule = await _load_schedule(db, schedule_id)
    await check_references(db, payload, SCHEDULE_REFERENCES)
    apply_changes(schedule, payload)
    _stamp_completion(schedule)

    await commit_or_conflict(db, "Schedule conflicts with an existing record")

    return build_schedule_response(await _load_schedule(db, schedule_id))


@router.delete("/{schedule_id}")
@audit_log(AuditAction.DELETE_SCHEDULE, id_param="schedule_id")
async def delete_schedule(schedule_id: int, db: AsyncSession = Depends(get_db)):
    schedule = await _load_schedule(db, schedule_id)

    await db.delete(schedule)
    await db.commit()

    return {"success": True}
