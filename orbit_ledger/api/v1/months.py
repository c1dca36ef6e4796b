"""/v1/months - the planet timeline and per-month detail"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from orbit_ledger.api.dependencies import get_ledger, get_preferences_repository, get_reference_date
from orbit_ledger.api.v1.schemas import (
    EchoSchema,
    MonthDetailResponse,
    MonthsResponse,
    MonthSummary,
    ReflectionSchema,
    RingSchema,
    ThemeSchema,
    TimeWarpResponse,
    TransactionResponse,
)
from orbit_ledger.domain.aggregation import time_warp
from orbit_ledger.domain.exceptions import InvalidMonthKeyError, TransactionNotFoundError
from orbit_ledger.domain.identity import reflect_month
from orbit_ledger.domain.models import MonthData, OrbitRing, PlanetTheme
from orbit_ledger.domain.visuals import derive_echoes, derive_rings, derive_theme
from orbit_ledger.infrastructure.database.repositories import PreferencesRepository
from orbit_ledger.services.ledger import OrbitLedger
from orbit_ledger.utils.date_utils import month_key, parse_month_key
from orbit_ledger.utils.i18n import format_money, month_label, translate

router = APIRouter()


def to_theme_schema(theme: PlanetTheme) -> ThemeSchema:
    return ThemeSchema(name=theme.name.value, color=theme.color, glow=theme.glow, shadow_color=theme.shadow_color)


def to_ring_schema(ring: OrbitRing) -> RingSchema:
    return RingSchema(bucket=ring.bucket.value, radius=ring.radius, opacity=ring.opacity, color=ring.color)


def to_month_summary(month: MonthData, current_key: str) -> MonthSummary:
    return MonthSummary(
        key=month.key,
        label=month.label,
        month=month.month,
        year=month.year,
        income=month.income,
        expense=month.expense,
        balance=month.balance,
        stability=month.stability,
        transaction_count=len(month.transactions),
        is_current=month.key == current_key,
        theme=to_theme_schema(derive_theme(month)),
        rings=[to_ring_schema(r) for r in derive_rings(month)],
    )


def _load_month(ledger: OrbitLedger, key: str, reference_date: date) -> MonthData:
    try:
        parse_month_key(key)
    except InvalidMonthKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))

    month = ledger.month(key, reference_date)
    if month is None:
        raise HTTPException(status_code=404, detail="Month not found")
    return month


@router.get("/months", response_model=MonthsResponse)
def list_months(
    ledger: OrbitLedger = Depends(get_ledger),
    reference_date: date = Depends(get_reference_date),
):
    """
    Ordered month timeline.

    Always contains three months back through two months ahead of the
    reference date, plus every month that holds a transaction.
    """
    current_key = month_key(reference_date)
    months = ledger.months(reference_date)
    return MonthsResponse(
        current_month_key=current_key,
        months=[to_month_summary(m, current_key) for m in months],
    )


@router.get("/months/{key}", response_model=MonthDetailResponse)
def get_month(
    key: str,
    ledger: OrbitLedger = Depends(get_ledger),
    preferences: PreferencesRepository = Depends(get_preferences_repository),
    reference_date: date = Depends(get_reference_date),
):
    month = _load_month(ledger, key, reference_date)
    prefs = preferences.load_preferences()

    def display(value: float) -> str:
        if prefs.silence_mode:
            return translate(prefs.language, "hidden")
        return format_money(value, prefs.currency, short=True)

    reflection = reflect_month(month, prefs.language)
    newest_first = sorted(month.transactions, key=lambda t: t.date, reverse=True)

    return MonthDetailResponse(
        summary=to_month_summary(month, month_key(reference_date)),
        localized_label=month_label(month.key, prefs.language),
        display_income=display(month.income),
        display_expense=display(month.expense),
        display_balance=display(month.balance),
        reflection=ReflectionSchema(kind=reflection.kind.value, message=reflection.message),
        echoes=[EchoSchema.model_validate(e) for e in derive_echoes(month)],
        transactions=[TransactionResponse.model_validate(t) for t in newest_first],
    )


@router.get("/months/{key}/time-warp/{transaction_id}", response_model=TimeWarpResponse)
def get_time_warp(
    key: str,
    transaction_id: str,
    ledger: OrbitLedger = Depends(get_ledger),
    reference_date: date = Depends(get_reference_date),
):
    """What the month would look like had this transaction never happened"""
    month = _load_month(ledger, key, reference_date)

    try:
        txn = ledger.get_transaction(transaction_id)
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if month_key(txn.date) != month.key:
        raise HTTPException(status_code=404, detail="Transaction is not part of this month")

    return TimeWarpResponse.model_validate(time_warp(month, txn))
