from __future__ import annotations

import logging
from datetime import datetime, timezone

from device_usage.core.errors import RecordNotFoundError
from device_usage.models.usage import UsageRecord
from device_usage.repositories.base import UsageRepository
from device_usage.schemas.usage import UsageRecordCreate, UsageRecordWrite

logger = logging.getLogger(__name__)


class UsageRecordService:
    def __init__(self, repo: UsageRepository) -> None:
        self._repo = repo

    async def create(self, payload: UsageRecordCreate) -> UsageRecord:
        created_at = payload.created_at or datetime.now(tz=timezone.utc)
        record = await self._repo.insert(
            device_name=payload.device_name, value=payload.value, created_at=created_at
        )
        logger.info(
            "Usage record created",
            extra={"record_id": record.id, "device_name": record.device_name},
        )
        return record

    async def list_all(self) -> list[UsageRecord]:
        return await self._repo.list_all()

    async def get(self, record_id: int) -> UsageRecord:
        record = await self._repo.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    async def update(self, record_id: int, payload: UsageRecordWrite) -> UsageRecord:
        record = await self._repo.update(
            record_id, device_name=payload.device_name, value=payload.value
        )
        if record is None:
            raise RecordNotFoundError(record_id)
        logger.info(
            "Usage record updated",
            extra={"record_id": record.id, "device_name": record.device_name},
        )
        return record

    async def delete(self, record_id: int) -> int:
        if not await self._repo.delete(record_id):
            raise RecordNotFoundError(record_id)
        logger.info("Usage record deleted", extra={"record_id": record_id})
        return record_id
