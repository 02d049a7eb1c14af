from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, Integer, MetaData, String, Table
from sqlalchemy.sql import func

metadata = MetaData()

# sqlite_autoincrement keeps ids monotonic: a deleted id is never handed out again.
device_usage = Table(
    "device_usage",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("device_name", String(255), nullable=False, index=True),
    Column("value", Float, nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
    sqlite_autoincrement=True,
)
