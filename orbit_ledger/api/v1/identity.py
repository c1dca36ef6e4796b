"""/v1/identity, /v1/overview and /v1/constellation - whole-history views"""

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from orbit_ledger.api.dependencies import get_ledger, get_preferences_repository, get_reference_date
from orbit_ledger.api.v1.schemas import (
    ConstellationResponse,
    IdentityResponse,
    OverviewResponse,
    StarSchema,
    TotalsSchema,
)
from orbit_ledger.domain.identity import classify_identity
from orbit_ledger.domain.models import FinancialIdentity
from orbit_ledger.domain.visuals import constellation
from orbit_ledger.infrastructure.database.repositories import PreferencesRepository
from orbit_ledger.infrastructure.observability.metrics import record_identity
from orbit_ledger.services.ledger import OrbitLedger
from orbit_ledger.utils.i18n import format_money, translate

router = APIRouter()


def to_identity_response(identity: FinancialIdentity) -> IdentityResponse:
    return IdentityResponse(
        name=identity.name.value,
        title=identity.title,
        message=identity.message,
        description=identity.description,
    )


@router.get("/identity", response_model=IdentityResponse)
def get_identity(
    language: Optional[Literal["en", "ar"]] = Query(None, description="Defaults to the stored preference"),
    ledger: OrbitLedger = Depends(get_ledger),
    preferences: PreferencesRepository = Depends(get_preferences_repository),
):
    language = language or preferences.load_preferences().language
    identity = classify_identity(ledger.transactions, language)
    record_identity(identity.name.value)
    return to_identity_response(identity)


@router.get("/overview", response_model=OverviewResponse)
def get_overview(
    ledger: OrbitLedger = Depends(get_ledger),
    preferences: PreferencesRepository = Depends(get_preferences_repository),
    reference_date: date = Depends(get_reference_date),
):
    """Header figures: lifetime totals and the current identity"""
    prefs = preferences.load_preferences()
    snapshot = ledger.snapshot(reference_date, prefs.language)

    if prefs.silence_mode:
        display_balance = translate(prefs.language, "hidden")
    else:
        display_balance = format_money(snapshot.totals.balance, prefs.currency, short=True)

    return OverviewResponse(
        current_month_key=snapshot.current_month_key,
        transaction_count=snapshot.transaction_count,
        totals=TotalsSchema.model_validate(snapshot.totals),
        display_balance=display_balance,
        identity=to_identity_response(snapshot.identity),
    )


@router.get("/constellation/{year}", response_model=ConstellationResponse)
def get_constellation(
    year: int,
    ledger: OrbitLedger = Depends(get_ledger),
    reference_date: date = Depends(get_reference_date),
):
    stars = constellation(ledger.months(reference_date), year)
    return ConstellationResponse(year=year, stars=[StarSchema.model_validate(s) for s in stars])
