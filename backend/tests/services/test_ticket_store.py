"""SQL Ticket Store — tests for predicate semantics and single-row primitives.

Tests cover:
    - Equality predicates; None matches absent values
    - sold=false does not match a record without the flag
    - delete_one/update_one touch one row and report the count
    - Unknown fields raise ValueError
    - autocommit=False flushes without committing
"""

import pytest

from app.infrastructure.ticket_store import SqlTicketStore


async def test_find_one_returns_plain_record(store, make_ticket):
    await make_ticket("T1", "alice", 100)

    record = await store.find_one({"id": "T1"})

    assert record["id"] == "T1"
    assert record["owner"] == "alice"
    assert record["price"] == 100
    assert "row_id" not in record


async def test_find_one_miss_is_none(store):
    assert await store.find_one({"id": "nope"}) is None


async def test_none_predicate_matches_absent_values(store, make_ticket):
    await make_ticket("T1", "alice", 100)
    await make_ticket("T2", "bob", 80, original_price=100, original_owner="alice")

    records = await store.find_many({"original_price": None})

    assert [r["id"] for r in records] == ["T1"]


async def test_sold_false_does_not_match_missing_flag(store, make_ticket):
    await make_ticket("L1", "dave", 70, resale=False, sold=None)

    assert await store.find_one({"id": "L1", "sold": False}) is None
    assert (await store.find_one({"id": "L1", "sold": None}))["id"] == "L1"


async def test_find_many_in_insertion_order(store, make_ticket):
    for rid in ("T3", "T1", "T2"):
        await make_ticket(rid, "alice", 10)

    assert [r["id"] for r in await store.find_many({"owner": "alice"})] == ["T3", "T1", "T2"]


async def test_delete_one_reports_count(store, make_ticket):
    await make_ticket("T1", "alice", 100)

    assert await store.delete_one({"id": "T1", "owner": "bob"}) == 0
    assert await store.delete_one({"id": "T1", "owner": "alice"}) == 1
    assert await store.find_one({"id": "T1"}) is None


async def test_delete_many_reports_count(store, make_ticket):
    await make_ticket("T1", "alice", 10)
    await make_ticket("T2", "alice", 10)
    await make_ticket("T3", "bob", 10)

    assert await store.delete_many({"owner": "alice"}) == 2
    assert len(await store.find_many({"resale": True})) == 1


async def test_update_one_applies_fields(store, make_ticket):
    await make_ticket("T1", "alice", 100)

    matched = await store.update_one({"id": "T1", "resale": True}, {"sold": True, "resale": False})

    assert matched == 1
    record = await store.find_one({"id": "T1"})
    assert record["sold"] is True
    assert record["resale"] is False


async def test_update_one_miss_is_zero(store, make_ticket):
    await make_ticket("T1", "alice", 100, resale=False)

    assert await store.update_one({"id": "T1", "resale": True}, {"sold": True}) == 0
    assert (await store.find_one({"id": "T1"}))["sold"] is False


async def test_unknown_field_raises(store):
    with pytest.raises(ValueError):
        await store.find_one({"colour": "red"})


async def test_flush_only_mode_rolls_back(test_session_factory):
    async with test_session_factory() as session:
        pending = SqlTicketStore(session, autocommit=False)
        await pending.insert({
            "id": "P1", "type": "VIP", "event": "E", "date": "d", "price": 5,
            "owner": "alice", "resale": True, "sold": False,
        })
        assert (await pending.find_one({"id": "P1"}))["price"] == 5
        await session.rollback()

    async with test_session_factory() as session:
        assert await SqlTicketStore(session).find_one({"id": "P1"}) is None
