from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crm.db.session import get_db
from crm.schemas.dashboard import DashboardOut
from crm.services.dashboard import build_dashboard

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
async def dashboard(db: AsyncSession = Depends(get_db)):
    return await build_dashboard(db)
