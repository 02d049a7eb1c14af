from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UsageRecord:
    id: int
    device_name: str
    value: float
    created_at: datetime


@dataclass(frozen=True)
class DeviceTotal:
    device_name: str
    total: float
