"""Unit tests for the ledger service"""

import math
import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone
from orbit_ledger.domain.exceptions import InvalidTransactionDataError, TransactionNotFoundError
from orbit_ledger.domain.models import IdentityName, RingBucket, ThemeName, TransactionDraft
from orbit_ledger.infrastructure.database.repositories import TransactionRepository
from orbit_ledger.services.ledger import OrbitLedger

REFERENCE = date(2024, 6, 15)


def draft(amount=25.0, type="expense", category="Food & Dining", day=REFERENCE, note="lunch"):
    return TransactionDraft(amount=amount, type=type, category=category, date=day, note=note)


def test_loads_initial_list_from_store(store_factory, sample_transactions):
    ledger = OrbitLedger(store_factory(sample_transactions))
    assert [t.id for t in ledger.transactions] == [t.id for t in sample_transactions]


def test_add_transaction_appends_and_persists(store_factory):
    store = store_factory()
    ledger = OrbitLedger(store)
    created_at = datetime(2024, 6, 15, 9, 30, tzinfo=timezone.utc)

    txn = ledger.add_transaction(draft(), now=created_at)

    assert txn.id
    assert txn.created_at == created_at
    assert txn.note == "lunch"
    assert ledger.transactions == (txn,)
    assert store.saved == [[txn]]


def test_added_ids_are_unique(store_factory):
    ledger = OrbitLedger(store_factory())
    ids = {ledger.add_transaction(draft()).id for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize("amount", [0, -5, math.inf, math.nan, "12", None, True])
def test_add_rejects_invalid_amount(store_factory, amount):
    store = store_factory()
    ledger = OrbitLedger(store)

    with pytest.raises(InvalidTransactionDataError):
        ledger.add_transaction(draft(amount=amount))

    assert ledger.transactions == ()
    assert store.saved == []


def test_add_rejects_unknown_type(store_factory):
    with pytest.raises(InvalidTransactionDataError):
        OrbitLedger(store_factory()).add_transaction(draft(type="transfer"))


def test_category_outside_catalog_is_accepted(store_factory):
    txn = OrbitLedger(store_factory()).add_transaction(draft(category="Pets"))
    assert txn.category == "Pets"


def test_edit_keeps_id_and_created_at(store_factory, make_txn):
    original = make_txn("t1", 10, "expense", "Shopping", date(2024, 5, 2))
    store = store_factory([original, make_txn("t2", 5)])
    ledger = OrbitLedger(store)

    edited = ledger.edit_transaction("t1", draft(amount=40, type="income", category="Gifts", note="refund"))

    assert edited.id == "t1"
    assert edited.created_at == original.created_at
    assert (edited.amount, edited.type, edited.category, edited.note) == (40, "income", "Gifts", "refund")
    assert [t.id for t in ledger.transactions] == ["t1", "t2"]
    assert store.saved[-1][0] == edited


def test_edit_unknown_id(store_factory):
    with pytest.raises(TransactionNotFoundError):
        OrbitLedger(store_factory()).edit_transaction("missing", draft())


def test_delete_transaction(store_factory, make_txn):
    store = store_factory([make_txn("t1", 10), make_txn("t2", 5)])
    ledger = OrbitLedger(store)

    ledger.delete_transaction("t1")

    assert [t.id for t in ledger.transactions] == ["t2"]
    assert [t.id for t in store.saved[-1]] == ["t2"]


def test_delete_unknown_id_leaves_list_untouched(store_factory, make_txn):
    store = store_factory([make_txn("t1", 10)])
    ledger = OrbitLedger(store)

    with pytest.raises(TransactionNotFoundError):
        ledger.delete_transaction("nope")

    assert store.saved == []


def test_failed_save_keeps_in_memory_state(store_factory):
    store = store_factory(fail_saves=True)
    ledger = OrbitLedger(store)

    txn = ledger.add_transaction(draft())

    assert ledger.transactions == (txn,)
    assert store.transactions == []


def test_mutation_replaces_list_instead_of_mutating(store_factory, make_txn):
    ledger = OrbitLedger(store_factory([make_txn("t1", 10)]))
    before = ledger.transactions

    ledger.add_transaction(draft())

    assert len(before) == 1
    assert len(ledger.transactions) == 2


def test_snapshot_recomputes_after_each_mutation(store_factory):
    ledger = OrbitLedger(store_factory())

    empty = ledger.snapshot(REFERENCE)
    assert empty.identity.name == IdentityName.EXPLORER
    assert empty.current_month_key == "2024-06"
    assert len(empty.months) == 6

    ledger.add_transaction(draft(amount=1000, type="income", category="Salary"))
    ledger.add_transaction(draft(amount=100, category="Rent / Housing"))
    snapshot = ledger.snapshot(REFERENCE)

    assert snapshot.identity.name == IdentityName.BUILDER
    assert snapshot.totals.balance == 900
    assert snapshot.transaction_count == 2

    june = next(view for view in snapshot.months if view.month.key == "2024-06")
    assert june.month.income == 1000
    assert june.theme.name == ThemeName.STEADY
    assert [r.bucket for r in june.rings] == [RingBucket.FIXED]


def test_snapshot_language_only_changes_wording(store_factory, sample_transactions):
    ledger = OrbitLedger(store_factory(sample_transactions))

    en = ledger.snapshot(REFERENCE, "en")
    ar = ledger.snapshot(REFERENCE, "ar")

    assert en.identity.name == ar.identity.name == IdentityName.STABILIZER
    assert en.identity.message != ar.identity.message


def test_month_lookup(store_factory, sample_transactions):
    ledger = OrbitLedger(store_factory(sample_transactions))
    assert ledger.month("2024-05", REFERENCE).expense == 1500
    assert ledger.month("2019-01", REFERENCE) is None


def test_ledgers_on_separate_sessions_keep_each_others_writes(session_factory):
    first, second = session_factory(), session_factory()
    try:
        ledger_a = OrbitLedger(TransactionRepository(first))
        ledger_b = OrbitLedger(TransactionRepository(second))

        a = ledger_a.add_transaction(draft(note="from a"))
        b = ledger_b.add_transaction(draft(note="from b"))

        assert [t.id for t in ledger_b.transactions] == [a.id, b.id]
    finally:
        first.close()
        second.close()

    fresh = session_factory()
    try:
        assert len(TransactionRepository(fresh).load_transactions()) == 2
    finally:
        fresh.close()


def test_stale_ledger_can_delete_a_transaction_added_elsewhere(store_factory):
    store = store_factory()
    stale = OrbitLedger(store)
    added = OrbitLedger(store).add_transaction(draft())

    stale.delete_transaction(added.id)

    assert store.transactions == []


def test_concurrent_adds_are_all_persisted(store_factory):
    store = store_factory()
    ledgers = [OrbitLedger(store) for _ in range(20)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda ledger: ledger.add_transaction(draft()), ledgers))

    assert {t.id for t in store.transactions} == {t.id for t in created}
