from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, insert, select, text, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from device_usage.core.errors import StorageFaultError
from device_usage.db.tables import device_usage
from device_usage.models.usage import DeviceTotal, UsageRecord

logger = logging.getLogger(__name__)


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; everything is stored as UTC.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _to_record(row: Row[Any]) -> UsageRecord:
    return UsageRecord(
        id=int(row.id),
        device_name=row.device_name,
        value=float(row.value),
        created_at=_as_utc(row.created_at),
    )


class SqlUsageRepository:
    """Usage records in a single SQL table, one transaction per call."""

    def __init__(self, *, engine: AsyncEngine) -> None:
        self._engine = engine

    async def ping(self) -> None:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise self._fault("ping", e) from e

    async def insert(
        self, *, device_name: str, value: float, created_at: datetime
    ) -> UsageRecord:
        created_at = _as_utc(created_at)
        stmt = insert(device_usage).values(
            device_name=device_name, value=float(value), created_at=created_at
        )
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
                record_id = int(result.inserted_primary_key[0])
        except SQLAlchemyError as e:
            raise self._fault("insert", e) from e

        logger.debug(
            "Inserted usage record",
            extra={"record_id": record_id, "device_name": device_name},
        )
        return UsageRecord(
            id=record_id, device_name=device_name, value=float(value), created_at=created_at
        )

    async def list_all(self) -> list[UsageRecord]:
        stmt = select(device_usage).order_by(
            device_usage.c.created_at.desc(), device_usage.c.id.desc()
        )
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as e:
            raise self._fault("list", e) from e
        return [_to_record(row) for row in rows]

    async def get(self, record_id: int) -> UsageRecord | None:
        stmt = select(device_usage).where(device_usage.c.id == record_id)
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                row = result.first()
        except SQLAlchemyError as e:
            raise self._fault("get", e) from e
        return _to_record(row) if row is not None else None

    async def update(
        self, record_id: int, *, device_name: str, value: float
    ) -> UsageRecord | None:
        stmt = (
            update(device_usage)
            .where(device_usage.c.id == record_id)
            .values(device_name=device_name, value=float(value))
        )
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
                if result.rowcount == 0:
                    return None
                refreshed = await conn.execute(
                    select(device_usage).where(device_usage.c.id == record_id)
                )
                row = refreshed.one()
        except SQLAlchemyError as e:
            raise self._fault("update", e) from e

        logger.debug(
            "Updated usage record",
            extra={"record_id": record_id, "device_name": device_name},
        )
        return _to_record(row)

    async def delete(self, record_id: int) -> bool:
        stmt = delete(device_usage).where(device_usage.c.id == record_id)
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
        except SQLAlchemyError as e:
            raise self._fault("delete", e) from e
        return result.rowcount > 0

    async def totals_by_device(self) -> list[DeviceTotal]:
        total = func.sum(device_usage.c.value).label("total")
        stmt = (
            select(device_usage.c.device_name, total)
            .group_by(device_usage.c.device_name)
            .order_by(total.desc(), device_usage.c.device_name.asc())
        )
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as e:
            raise self._fault("report", e) from e

        totals: list[DeviceTotal] = []
        for row in rows:
            amount = float(row.total)
            if not math.isfinite(amount):
                logger.error(
                    "Device total overflowed",
                    extra={"device_name": row.device_name, "reason": "non-finite sum"},
                )
                raise StorageFaultError(f"Total for device {row.device_name!r} is out of range")
            totals.append(DeviceTotal(device_name=row.device_name, total=amount))
        return totals

    @staticmethod
    def _fault(operation: str, exc: SQLAlchemyError) -> StorageFaultError:
        logger.error(
            "Storage operation '%s' failed", operation, extra={"reason": type(exc).__name__}
        )
        return StorageFaultError(f"Storage failure during {operation}")
