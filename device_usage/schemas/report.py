from __future__ import annotations

from pydantic import BaseModel


class DeviceTotalRead(BaseModel):
    device_name: str
    total: float
