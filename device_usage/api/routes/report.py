from __future__ import annotations

from fastapi import APIRouter

from device_usage.api.deps import Reports
from device_usage.api.errors import as_http_exception
from device_usage.core.errors import ServiceError
from device_usage.schemas.report import DeviceTotalRead

router = APIRouter(prefix="/report")


@router.get("", response_model=list[DeviceTotalRead])
async def usage_report(service: Reports) -> list[DeviceTotalRead]:
    try:
        rows = await service.device_totals()
    except ServiceError as e:
        raise as_http_exception(e) from e
    return [DeviceTotalRead.model_validate(r.__dict__) for r in rows]
