from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base for failures reported back to the caller of an operation."""

    kind: str = "internal"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class RecordNotFoundError(ServiceError):
    kind = "not_found"
    status_code = 404

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Usage record {record_id} not found")
        self.record_id = record_id


class StorageFaultError(ServiceError):
    kind = "storage"
    status_code = 500


class UpstreamFaultError(ServiceError):
    kind = "upstream"
    status_code = 502
