"""Ledger Transaction: commit on Ok, rollback on Err."""

from asset_ledger.infrastructure.sql_store import SqlStateStore
from asset_ledger.services.ledger_transaction import run_in_transaction


async def test_ok_result_is_committed(test_session_factory):
    async with test_session_factory() as db:
        result = await run_in_transaction(
            db, lambda ledger: ledger.create("asset1", "blue", 5, "Tomoko", 300),
        )
    assert result.is_ok
    async with test_session_factory() as db:
        assert await SqlStateStore(db).get("asset1") is not None


async def test_err_result_is_rolled_back(test_session_factory):
    async def create_then_fail(ledger):
        await ledger.create("asset1", "blue", 5, "Tomoko", 300)
        return await ledger.delete("missing")

    async with test_session_factory() as db:
        result = await run_in_transaction(db, create_then_fail)
    assert result.error.code == "ASSET_NOT_FOUND"
    async with test_session_factory() as db:
        assert await SqlStateStore(db).get("asset1") is None


async def test_page_size_reaches_store(test_session_factory):
    async with test_session_factory() as db:
        await run_in_transaction(db, lambda ledger: ledger.init_ledger())
    async with test_session_factory() as db:
        result = await run_in_transaction(
            db, lambda ledger: ledger.list_all(), page_size=1,
        )
    assert len(result.unwrap()) == 6
