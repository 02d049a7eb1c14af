from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from device_usage.api.deps import get_usage_repository
from device_usage.core.errors import StorageFaultError
from device_usage.repositories.base import UsageRepository

router = APIRouter()


@router.get("/health", tags=["meta"])
async def health(
    repo: Annotated[UsageRepository, Depends(get_usage_repository)],
) -> dict[str, str]:
    try:
        await repo.ping()
    except StorageFaultError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"kind": e.kind, "message": "Database unavailable"},
        ) from e
    return {"status": "ok"}
