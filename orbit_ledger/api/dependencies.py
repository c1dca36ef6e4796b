"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Optional

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from orbit_ledger.infrastructure.database.repositories import PreferencesRepository, TransactionRepository
from orbit_ledger.infrastructure.database.session import get_db
from orbit_ledger.services.ledger import OrbitLedger


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_ledger(db: Session = Depends(get_db)) -> OrbitLedger:
    """Ledger loaded from the current transaction document"""
    return OrbitLedger(TransactionRepository(db))


def get_preferences_repository(db: Session = Depends(get_db)) -> PreferencesRepository:
    return PreferencesRepository(db)


def get_reference_date(
    reference_date: Optional[date] = Query(None, description="Day treated as today (defaults to the server date)"),
) -> date:
    return reference_date or date.today()
