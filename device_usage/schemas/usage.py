from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator

# Largest id a SQLite INTEGER primary key can hold.
MAX_RECORD_ID = 2**63 - 1

DeviceName = Annotated[str, Field(min_length=1, max_length=255)]


class UsageRecordWrite(BaseModel):
    """Body accepted by update; both fields are required."""

    device_name: DeviceName
    value: float

    @field_validator("device_name", mode="before")
    @classmethod
    def _strip_device_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("value", mode="before")
    @classmethod
    def _reject_bool(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("value must be a number, not a boolean")
        return v

    @field_validator("value")
    @classmethod
    def _validate_value(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("value must be a finite number")
        return v


class UsageRecordCreate(UsageRecordWrite):
    created_at: datetime | None = None

    @field_validator("created_at")
    @classmethod
    def _created_at_to_utc(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class UsageRecordRead(BaseModel):
    id: int = Field(ge=1)
    device_name: str
    value: float
    created_at: datetime


class UsageRecordDeleted(BaseModel):
    deleted: int = Field(ge=1)
