"""Settings service — the restaurant's single settings record.

Learn: There is exactly one row (id "main_settings"). Reading creates it
with default opening hours if it does not exist yet; updating merges the
submitted days into the stored week and broadcasts the full record to
every connected client.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.db.models import (
    MAIN_SETTINGS_ID,
    RestaurantSettings,
    default_hours,
    utcnow,
)
from fastfood.events.types import SETTINGS_UPDATED
from fastfood.realtime.router import TO_ALL_CONNECTED, Event, EventRouter
from fastfood.schemas.settings import SettingsRead


class SettingsService:
    def __init__(self, db: AsyncSession, events: EventRouter):
        self.db = db
        self.events = events

    async def get_settings(self) -> RestaurantSettings:
        record = await self.db.get(RestaurantSettings, MAIN_SETTINGS_ID)
        if record is None:
            record = RestaurantSettings(id=MAIN_SETTINGS_ID, hours=default_hours())
            self.db.add(record)
            await self.db.commit()
        return record

    async def update_hours(self, hours: dict[str, dict[str, Any]]) -> RestaurantSettings:
        record = await self.get_settings()
        record.hours = {**record.hours, **hours}
        record.updated_at = utcnow()
        await self.db.commit()

        payload = SettingsRead.model_validate(record).model_dump(mode="json")
        await self.events.dispatch(
            TO_ALL_CONNECTED, Event(SETTINGS_UPDATED, {"settings": payload})
        )
        return record
