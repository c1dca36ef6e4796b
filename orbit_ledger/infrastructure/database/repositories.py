"""Data access layer: JSON documents stored under named keys"""

import json
import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from orbit_ledger.config import settings
from orbit_ledger.domain.models import Transaction, UserPreferences
from orbit_ledger.infrastructure.database.models import KeyValueEntry
from orbit_ledger.infrastructure.observability.metrics import record_storage_failure
from orbit_ledger.utils.i18n import CURRENCY_CODES, LANGUAGES


class StoredTransaction(BaseModel):
    """On-disk shape of a transaction record"""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    amount: float = Field(..., gt=0)
    type: Literal["income", "expense"]
    category: str
    note: str = ""
    date: date
    created_at: datetime

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            amount=self.amount,
            type=self.type,
            category=self.category,
            note=self.note,
            date=self.date,
            created_at=self.created_at,
        )


_transaction_list = TypeAdapter(List[StoredTransaction])


class KeyValueRepository:
    """Read and replace whole JSON documents by key"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        # Refresh from the database so writes committed by other sessions are seen
        entry = self.db.get(KeyValueEntry, key, populate_existing=True)
        return entry.value if entry else None

    def put(self, key: str, value: str) -> None:
        """Replace the document stored under `key` and commit"""
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            self.db.add(KeyValueEntry(key=key, value=value))
        else:
            entry.value = value
        self.db.commit()


class TransactionRepository:
    """
    Transaction store backed by a single key-value document.

    Load never raises: anything unreadable comes back as an empty list.
    Save reports failure through its return value.
    """

    def __init__(self, db: Session, key: str | None = None):
        self.kv = KeyValueRepository(db)
        self.db = db
        self.key = key or settings.transactions_key

    def load_transactions(self) -> List[Transaction]:
        try:
            raw = self.kv.get(self.key)
        except SQLAlchemyError as e:
            record_storage_failure("load")
            logging.warning(f"Failed to read transactions: {e}", extra={"storage_key": self.key})
            return []

        if not raw:
            return []

        try:
            records = _transaction_list.validate_json(raw)
        except ValidationError as e:
            record_storage_failure("load")
            logging.warning(
                "Stored transactions are malformed, starting empty",
                extra={"storage_key": self.key, "errors": e.error_count()},
            )
            return []

        return [record.to_domain() for record in records]

    def save_transactions(self, transactions: Sequence[Transaction]) -> bool:
        payload = _transaction_list.dump_json(
            [StoredTransaction(**asdict(t)) for t in transactions]
        ).decode("utf-8")

        try:
            self.kv.put(self.key, payload)
        except SQLAlchemyError as e:
            self.db.rollback()
            record_storage_failure("save")
            logging.error(f"Failed to save transactions: {e}", extra={"storage_key": self.key})
            return False

        return True


class PreferencesRepository:
    """User preferences stored as one partial JSON document"""

    def __init__(self, db: Session, key: str | None = None):
        self.kv = KeyValueRepository(db)
        self.db = db
        self.key = key or settings.preferences_key

    def _read_document(self) -> Dict[str, Any]:
        try:
            raw = self.kv.get(self.key)
            data = json.loads(raw) if raw else {}
        except (SQLAlchemyError, ValueError) as e:
            record_storage_failure("load")
            logging.warning(f"Failed to read preferences: {e}", extra={"storage_key": self.key})
            return {}
        return data if isinstance(data, dict) else {}

    def load_preferences(self) -> UserPreferences:
        """Stored values over defaults; invalid individual values are ignored"""
        data = self._read_document()
        prefs = UserPreferences(language=settings.default_language, currency=settings.default_currency)

        if data.get("language") in LANGUAGES:
            prefs.language = data["language"]
        if data.get("currency") in CURRENCY_CODES:
            prefs.currency = data["currency"]
        if isinstance(data.get("animations_enabled"), bool):
            prefs.animations_enabled = data["animations_enabled"]
        if isinstance(data.get("silence_mode"), bool):
            prefs.silence_mode = data["silence_mode"]

        return prefs

    def update_preferences(self, updates: Dict[str, Any]) -> UserPreferences:
        """Merge `updates` into the stored document; a failed write is logged, not raised"""
        document = {**self._read_document(), **updates}

        try:
            self.kv.put(self.key, json.dumps(document))
        except SQLAlchemyError as e:
            self.db.rollback()
            record_storage_failure("save")
            logging.error(f"Failed to save preferences: {e}", extra={"storage_key": self.key})

        return self.load_preferences()
