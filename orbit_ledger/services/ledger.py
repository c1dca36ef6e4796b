"""Ledger service - owns the canonical transaction list and recomputes derived state"""

import math
import threading
import uuid
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from orbit_ledger.domain.aggregation import aggregate_months, compute_totals, find_month
from orbit_ledger.domain.exceptions import InvalidTransactionDataError, TransactionNotFoundError
from orbit_ledger.domain.identity import classify_identity
from orbit_ledger.domain.models import (
    TRANSACTION_TYPES,
    MonthData,
    MonthView,
    OrbitSnapshot,
    Transaction,
    TransactionDraft,
)
from orbit_ledger.domain.visuals import derive_rings, derive_theme
from orbit_ledger.infrastructure.observability.logging import log_mutation
from orbit_ledger.infrastructure.observability.metrics import record_identity, record_mutation
from orbit_ledger.utils.date_utils import month_key
from orbit_ledger.utils.i18n import DEFAULT_LANGUAGE

# Serializes reload-mutate-save across every ledger in the process
_mutation_lock = threading.Lock()


class TransactionStore(Protocol):
    """Persistence collaborator: whole-list load and replace"""

    def load_transactions(self) -> List[Transaction]: ...

    def save_transactions(self, transactions: Sequence[Transaction]) -> bool: ...


def generate_id() -> str:
    return uuid.uuid4().hex


def validate_draft(draft: TransactionDraft) -> None:
    """Reject input the aggregation core must never see"""
    amount = draft.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidTransactionDataError(f"Amount must be a number, got {amount!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidTransactionDataError(f"Amount must be a finite positive number, got {amount!r}")
    if draft.type not in TRANSACTION_TYPES:
        raise InvalidTransactionDataError(f"Unknown transaction type: {draft.type!r}")


class OrbitLedger:
    """
    Single logical owner of the transaction list.

    Every mutation runs under a process-wide lock: it reloads the list from the
    store, builds a new list, swaps it in and persists it. Ledgers built per
    request therefore never overwrite each other's writes. A failed save is
    logged and counted but does not roll back the in-memory list. Derived
    state is never cached: every snapshot is computed from the current list.
    """

    def __init__(self, store: TransactionStore):
        self.store = store
        self._transactions: Tuple[Transaction, ...] = tuple(store.load_transactions())

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def get_transaction(self, transaction_id: str) -> Transaction:
        for txn in self._transactions:
            if txn.id == transaction_id:
                return txn
        raise TransactionNotFoundError(transaction_id)

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        """Hold the mutation lock with the list freshly reloaded from the store"""
        with _mutation_lock:
            self._transactions = tuple(self.store.load_transactions())
            yield

    def _replace(self, operation: str, transaction_id: str, updated: Sequence[Transaction]) -> bool:
        self._transactions = tuple(updated)
        persisted = self.store.save_transactions(list(self._transactions))
        record_mutation(operation)
        log_mutation(operation, transaction_id, len(self._transactions), persisted)
        return persisted

    def add_transaction(self, draft: TransactionDraft, now: Optional[datetime] = None) -> Transaction:
        validate_draft(draft)
        txn = Transaction(
            id=generate_id(),
            amount=float(draft.amount),
            type=draft.type,
            category=draft.category,
            note=draft.note,
            date=draft.date,
            created_at=now or datetime.now(timezone.utc),
        )
        with self._exclusive():
            self._replace("add", txn.id, [*self._transactions, txn])
        return txn

    def edit_transaction(self, transaction_id: str, draft: TransactionDraft) -> Transaction:
        """Replace the editable fields; id and created_at stay as they were"""
        validate_draft(draft)
        with self._exclusive():
            existing = self.get_transaction(transaction_id)
            edited = replace(
                existing,
                amount=float(draft.amount),
                type=draft.type,
                category=draft.category,
                note=draft.note,
                date=draft.date,
            )
            self._replace(
                "edit",
                transaction_id,
                [edited if t.id == transaction_id else t for t in self._transactions],
            )
        return edited

    def delete_transaction(self, transaction_id: str) -> None:
        with self._exclusive():
            self.get_transaction(transaction_id)
            self._replace(
                "delete",
                transaction_id,
                [t for t in self._transactions if t.id != transaction_id],
            )

    def months(self, reference_date: date) -> List[MonthData]:
        return aggregate_months(self._transactions, reference_date)

    def month(self, key: str, reference_date: date) -> Optional[MonthData]:
        return find_month(self.months(reference_date), key)

    def snapshot(self, reference_date: date, language: str = DEFAULT_LANGUAGE) -> OrbitSnapshot:
        """Recompute every derived structure from the current list"""
        months = self.months(reference_date)
        identity = classify_identity(self._transactions, language)
        record_identity(identity.name.value)

        return OrbitSnapshot(
            current_month_key=month_key(reference_date),
            months=[MonthView(month=m, theme=derive_theme(m), rings=derive_rings(m)) for m in months],
            identity=identity,
            totals=compute_totals(self._transactions),
            transaction_count=len(self._transactions),
        )
