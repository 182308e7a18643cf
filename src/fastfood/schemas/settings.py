"""Pydantic schemas for restaurant settings (opening hours)."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

WEEKDAYS = {"1", "2", "3", "4", "5", "6", "7"}
_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class DailyHours(BaseModel):
    is_open: bool = True
    open_time: str = Field("11:00", pattern=_HHMM)
    close_time: str = Field("22:00", pattern=_HHMM)


class SettingsUpdate(BaseModel):
    """Hours keyed by ISO weekday: "1" = Monday ... "7" = Sunday."""
    hours: dict[str, DailyHours]

    @field_validator("hours")
    @classmethod
    def known_weekdays(cls, v: dict[str, DailyHours]) -> dict[str, DailyHours]:
        unknown = set(v) - WEEKDAYS
        if unknown:
            raise ValueError(f"Unknown weekday keys: {sorted(unknown)}")
        return v


class SettingsRead(BaseModel):
    id: str
    hours: dict[str, DailyHours]
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
