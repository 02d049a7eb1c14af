from __future__ import annotations

from datetime import datetime
from typing import Protocol

from device_usage.models.usage import DeviceTotal, UsageRecord


class UsageRepository(Protocol):
    async def ping(self) -> None: ...

    async def insert(
        self, *, device_name: str, value: float, created_at: datetime
    ) -> UsageRecord: ...

    async def list_all(self) -> list[UsageRecord]: ...

    async def get(self, record_id: int) -> UsageRecord | None: ...

    async def update(
        self, record_id: int, *, device_name: str, value: float
    ) -> UsageRecord | None: ...

    async def delete(self, record_id: int) -> bool: ...

    async def totals_by_device(self) -> list[DeviceTotal]: ...
