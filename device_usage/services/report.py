from __future__ import annotations

import logging

from device_usage.models.usage import DeviceTotal
from device_usage.repositories.base import UsageRepository

logger = logging.getLogger(__name__)


class ReportService:
    """Per-device totals computed from whatever the store holds right now."""

    def __init__(self, repo: UsageRepository) -> None:
        self._repo = repo

    async def device_totals(self) -> list[DeviceTotal]:
        rows = await self._repo.totals_by_device()
        # Highest total first, ties by name so repeated reports read the same.
        rows = sorted(rows, key=lambda r: (-r.total, r.device_name))
        logger.debug("Computed usage report", extra={"row_count": len(rows)})
        return rows
