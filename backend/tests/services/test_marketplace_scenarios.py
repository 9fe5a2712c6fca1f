"""Marketplace Scenarios — end-to-end engine flows over the SQL store and ledger.

Tests cover:
    - Mint → purchase → capped relist → second purchase → foreign edit
    - Balance conservation across a full purchase
    - The resale ceiling stays the first mint price across several hops
"""

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.services.edit_engine import EditEngine
from app.services.purchase_engine import PurchaseEngine
from app.services.resale_engine import ResaleEngine


@pytest.fixture
async def marketplace(store, ledger, make_account, make_ticket, id_sequence):
    await make_account("alice", 0)
    await make_account("bob", 500)
    await make_account("carol", 80)
    await make_ticket("T1", "alice", 100)
    return {
        "purchase": PurchaseEngine(store, ledger, id_factory=id_sequence),
        "resale": ResaleEngine(store),
        "edit": EditEngine(store),
    }


async def _balance(ledger, username):
    return (await ledger.find_account(username))["balance"]


async def test_first_purchase_moves_funds_and_forks_id(marketplace, store, ledger):
    bought = await marketplace["purchase"].purchase("bob", "T1")

    assert await _balance(ledger, "bob") == 400
    assert await _balance(ledger, "alice") == 100
    retired = await store.find_one({"id": "T1"})
    assert retired["sold"] is True
    assert retired["resale"] is False
    assert bought["id"] == "T2"
    assert bought["owner"] == "bob"
    assert bought["price"] == 100
    assert bought["resale"] is False
    stored = await store.find_one({"id": "T2"})
    assert stored["owner"] == "bob"
    assert stored["previous_owner"] == "alice"


async def test_relist_above_root_is_rejected_without_mutation(marketplace, store):
    await marketplace["purchase"].purchase("bob", "T1")
    before = await store.find_many({"owner": "bob"})

    with pytest.raises(ValidationError) as exc:
        await marketplace["resale"].resell("bob", "T2", 150)

    assert "cannot exceed original price (100)" in exc.value.message
    assert await store.find_many({"owner": "bob"}) == before


async def test_relist_within_root_keeps_id_and_lineage(marketplace, store):
    await marketplace["purchase"].purchase("bob", "T1")

    listing = await marketplace["resale"].resell("bob", "T2", 80)

    assert listing["id"] == "T2"
    assert listing["resale"] is True
    assert listing["price"] == 80
    assert listing["original_price"] == 100
    assert listing["original_owner"] == "alice"
    records = await store.find_many({"id": "T2"})
    assert len(records) == 1
    assert records[0]["resale"] is True


async def test_second_purchase_at_resale_price(marketplace, store, ledger):
    await marketplace["purchase"].purchase("bob", "T1")
    await marketplace["resale"].resell("bob", "T2", 80)

    bought = await marketplace["purchase"].purchase("carol", "T2")

    assert await _balance(ledger, "carol") == 0
    assert await _balance(ledger, "bob") == 480
    assert (await store.find_one({"id": "T2"}))["sold"] is True
    assert bought["id"] == "T3"
    assert bought["owner"] == "carol"
    assert bought["price"] == 80
    assert bought["original_price"] == 100
    assert bought["original_owner"] == "alice"


async def test_editing_someone_elses_ticket_is_not_found(marketplace, store):
    await marketplace["purchase"].purchase("bob", "T1")
    await marketplace["resale"].resell("bob", "T2", 80)
    await marketplace["purchase"].purchase("carol", "T2")
    before = await store.find_one({"id": "T3"})

    with pytest.raises(NotFoundError):
        await marketplace["edit"].edit(
            "alice", "T3",
            {"type": "GA", "event": "Other", "date": "2027-01-01", "price": 10},
        )

    assert await store.find_one({"id": "T3"}) == before


async def test_purchase_conserves_total_balance(marketplace, ledger):
    total_before = await _balance(ledger, "alice") + await _balance(ledger, "bob")

    await marketplace["purchase"].purchase("bob", "T1")

    total_after = await _balance(ledger, "alice") + await _balance(ledger, "bob")
    assert total_after == total_before


async def test_ceiling_survives_several_hops(marketplace, store, make_account):
    await make_account("dave", 500)
    purchase, resale = marketplace["purchase"], marketplace["resale"]

    await purchase.purchase("bob", "T1")
    await resale.resell("bob", "T2", 90)
    await purchase.purchase("dave", "T2")

    with pytest.raises(ValidationError):
        await resale.resell("dave", "T3", 101)

    listing = await resale.resell("dave", "T3", 100)
    assert listing["original_price"] == 100
    assert listing["original_owner"] == "alice"
