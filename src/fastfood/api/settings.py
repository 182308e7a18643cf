"""Restaurant settings API — opening hours.

Learn: GET is public so the storefront can show whether the restaurant
is open. POST is admin-only and broadcasts SETTINGS_UPDATED.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import require_admin
from fastfood.db.engine import get_db
from fastfood.realtime.router import EventRouter, get_event_router
from fastfood.schemas.settings import SettingsRead, SettingsUpdate
from fastfood.services.settings_service import SettingsService

router = APIRouter(prefix="/settings")


def _svc(
    db: AsyncSession = Depends(get_db),
    events: EventRouter = Depends(get_event_router),
) -> SettingsService:
    return SettingsService(db, events)


@router.get("", response_model=SettingsRead)
async def get_settings(svc: SettingsService = Depends(_svc)):
    return await svc.get_settings()


@router.post("", response_model=SettingsRead, dependencies=[Depends(require_admin)])
async def update_settings(body: SettingsUpdate, svc: SettingsService = Depends(_svc)):
    """Merge the submitted days into the stored opening hours."""
    hours = {day: h.model_dump() for day, h in body.hours.items()}
    return await svc.update_hours(hours)
