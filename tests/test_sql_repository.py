from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from device_usage.core.errors import StorageFaultError
from device_usage.db.engine import create_schema
from device_usage.repositories.sql import SqlUsageRepository


@pytest_asyncio.fixture
async def engine(tmp_path: Path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def repo(engine) -> SqlUsageRepository:
    return SqlUsageRepository(engine=engine)


@pytest.mark.asyncio
async def test_insert_assigns_sequential_ids(repo: SqlUsageRepository) -> None:
    now = datetime.now(tz=timezone.utc)
    records = [
        await repo.insert(device_name="Fridge", value=float(i), created_at=now)
        for i in range(3)
    ]
    assert [r.id for r in records] == [1, 2, 3]


@pytest.mark.asyncio
async def test_deleted_ids_are_not_reused(repo: SqlUsageRepository) -> None:
    now = datetime.now(tz=timezone.utc)
    first = await repo.insert(device_name="A", value=1.0, created_at=now)
    second = await repo.insert(device_name="B", value=2.0, created_at=now)

    assert await repo.delete(second.id) is True
    third = await repo.insert(device_name="C", value=3.0, created_at=now)
    assert third.id == second.id + 1

    assert await repo.delete(first.id) is True
    assert await repo.delete(third.id) is True
    fourth = await repo.insert(device_name="D", value=4.0, created_at=now)
    assert fourth.id == 4


@pytest.mark.asyncio
async def test_get_round_trip(repo: SqlUsageRepository) -> None:
    created_at = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    created = await repo.insert(device_name="Lamp", value=2.5, created_at=created_at)

    fetched = await repo.get(created.id)
    assert fetched == created
    assert fetched.created_at.tzinfo is not None
    assert await repo.get(999) is None


@pytest.mark.asyncio
async def test_list_orders_by_created_at_then_id(repo: SqlUsageRepository) -> None:
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    await repo.insert(device_name="old", value=1.0, created_at=base)
    await repo.insert(device_name="tie-a", value=1.0, created_at=base + timedelta(hours=1))
    await repo.insert(device_name="tie-b", value=1.0, created_at=base + timedelta(hours=1))
    await repo.insert(device_name="mid", value=1.0, created_at=base + timedelta(minutes=30))

    rows = await repo.list_all()
    assert [r.device_name for r in rows] == ["tie-b", "tie-a", "mid", "old"]


@pytest.mark.asyncio
async def test_update_keeps_identity_and_timestamp(repo: SqlUsageRepository) -> None:
    created_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    created = await repo.insert(device_name="Lamp", value=2.0, created_at=created_at)

    updated = await repo.update(created.id, device_name="Lamp", value=2.0)
    assert updated == created

    updated = await repo.update(created.id, device_name="Desk lamp", value=4.0)
    assert updated is not None
    assert (updated.id, updated.created_at) == (created.id, created.created_at)
    assert (updated.device_name, updated.value) == ("Desk lamp", 4.0)

    assert await repo.update(999, device_name="Ghost", value=1.0) is None
    assert await repo.get(999) is None


@pytest.mark.asyncio
async def test_totals_by_device(repo: SqlUsageRepository) -> None:
    now = datetime.now(tz=timezone.utc)
    for name, value in [("Fridge", 12.5), ("Fridge", 7.5), ("Lamp", 2.0), ("Oven", 2.0)]:
        await repo.insert(device_name=name, value=value, created_at=now)

    totals = await repo.totals_by_device()
    assert [(t.device_name, t.total) for t in totals] == [
        ("Fridge", 20.0),
        ("Lamp", 2.0),
        ("Oven", 2.0),
    ]


@pytest.mark.asyncio
async def test_storage_errors_become_faults() -> None:
    unreachable = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/usage.db")
    broken = SqlUsageRepository(engine=unreachable)
    with pytest.raises(StorageFaultError):
        await broken.ping()
    with pytest.raises(StorageFaultError):
        await broken.list_all()
    await unreachable.dispose()


@pytest.mark.asyncio
async def test_totals_reject_overflowing_sums(repo: SqlUsageRepository) -> None:
    now = datetime.now(tz=timezone.utc)
    await repo.insert(device_name="Big", value=1e308, created_at=now)
    await repo.insert(device_name="Big", value=1e308, created_at=now)

    with pytest.raises(StorageFaultError):
        await repo.totals_by_device()
