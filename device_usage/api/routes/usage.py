from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path

from device_usage.api.deps import UsageService
from device_usage.api.errors import as_http_exception
from device_usage.core.errors import ServiceError
from device_usage.schemas.usage import (
    MAX_RECORD_ID,
    UsageRecordCreate,
    UsageRecordDeleted,
    UsageRecordRead,
    UsageRecordWrite,
)

router = APIRouter(prefix="/device-usage")

RecordId = Annotated[int, Path(ge=1, le=MAX_RECORD_ID)]


@router.post("", response_model=UsageRecordRead)
async def create_record(
    payload: UsageRecordCreate,
    service: UsageService,
) -> UsageRecordRead:
    try:
        record = await service.create(payload)
    except ServiceError as e:
        raise as_http_exception(e) from e
    return UsageRecordRead.model_validate(record.__dict__)


@router.get("", response_model=list[UsageRecordRead])
async def list_records(service: UsageService) -> list[UsageRecordRead]:
    try:
        records = await service.list_all()
    except ServiceError as e:
        raise as_http_exception(e) from e
    return [UsageRecordRead.model_validate(r.__dict__) for r in records]


@router.get("/{record_id}", response_model=UsageRecordRead)
async def read_record(record_id: RecordId, service: UsageService) -> UsageRecordRead:
    try:
        record = await service.get(record_id)
    except ServiceError as e:
        raise as_http_exception(e) from e
    return UsageRecordRead.model_validate(record.__dict__)


@router.put("/{record_id}", response_model=UsageRecordRead)
async def update_record(
    record_id: RecordId,
    payload: UsageRecordWrite,
    service: UsageService,
) -> UsageRecordRead:
    try:
        record = await service.update(record_id, payload)
    except ServiceError as e:
        raise as_http_exception(e) from e
    return UsageRecordRead.model_validate(record.__dict__)


@router.delete("/{record_id}", response_model=UsageRecordDeleted)
async def delete_record(record_id: RecordId, service: UsageService) -> UsageRecordDeleted:
    try:
        deleted = await service.delete(record_id)
    except ServiceError as e:
        raise as_http_exception(e) from e
    return UsageRecordDeleted(deleted=deleted)
