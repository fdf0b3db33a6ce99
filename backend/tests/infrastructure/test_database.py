"""DatabaseSessionManager tests — rollback, error mapping, and health checks."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.errors import DatabaseError
from app.infrastructure import database
from app.infrastructure.database import DatabaseSessionManager, init_db, close_db, get_db


@pytest.fixture
async def manager():
    mgr = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield mgr
    await mgr.dispose()


async def test_session_executes_queries(manager):
    async with manager.session() as db:
        result = await db.execute(text("SELECT 1"))
        assert result.scalar_one() == 1


async def test_operational_error_maps_to_database_error(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    assert exc_info.value.operation == "execute"
    assert isinstance(exc_info.value.__cause__, OperationalError)


async def test_integrity_error_maps_to_commit_failure(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session():
            raise IntegrityError("INSERT", {}, Exception("duplicate key"))
    assert exc_info.value.operation == "commit"


async def test_non_database_errors_pass_through(manager):
    with pytest.raises(KeyError):
        async with manager.session():
            raise KeyError("boom")


async def test_health_check_true_when_reachable(manager):
    assert await manager.health_check() is True


async def test_health_check_false_when_unreachable(manager, monkeypatch):
    async def _broken_execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr("sqlalchemy.ext.asyncio.AsyncSession.execute", _broken_execute)
    assert await manager.health_check() is False


async def test_init_and_close_db_manage_singleton():
    mgr = init_db("sqlite+aiosqlite:///:memory:")
    assert database.db_manager is mgr
    await close_db()
    assert database.db_manager is None


async def test_get_db_requires_initialization(monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    with pytest.raises(RuntimeError, match="not initialized"):
        await anext(get_db())
