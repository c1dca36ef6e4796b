"""Financial identity classification and monthly reflections"""

from typing import Sequence

from orbit_ledger.domain.aggregation import sum_by_type
from orbit_ledger.domain.models import (
    EXPENSE,
    INCOME,
    FinancialIdentity,
    IdentityName,
    MonthData,
    MonthReflection,
    Reflection,
    Transaction,
)
from orbit_ledger.utils.i18n import DEFAULT_LANGUAGE, translate

RECENT_WINDOW = 10
VOYAGER_MIN_CATEGORIES = 5  # strictly more than this many distinct recent categories


def expense_ratio(transactions: Sequence[Transaction]) -> float:
    """Lifetime expense / income; with no income the denominator is 1"""
    total_income = sum_by_type(transactions, INCOME)
    total_expense = sum_by_type(transactions, EXPENSE)
    return total_expense / (total_income or 1)


def recent_expense_categories(transactions: Sequence[Transaction]) -> set:
    """Distinct expense categories among the last entries in list (insertion) order"""
    recent = transactions[-RECENT_WINDOW:]
    return {t.category for t in recent if t.type == EXPENSE}


def determine_identity(transactions: Sequence[Transaction]) -> IdentityName:
    """
    Map transaction history to an identity band.

    Bands (first match wins):
    - no history:            Explorer
    - ratio < 0.30:          Builder
    - 0.30 <= ratio < 0.60:  Stabilizer
    - 0.60 <= ratio < 0.85:  Observer
    - ratio >= 0.85 with more than 5 recent expense categories: Voyager
    - otherwise:             Drifter
    """
    if not transactions:
        return IdentityName.EXPLORER

    ratio = expense_ratio(transactions)

    if ratio < 0.3:
        return IdentityName.BUILDER
    elif ratio < 0.6:
        return IdentityName.STABILIZER
    elif ratio < 0.85:
        return IdentityName.OBSERVER
    elif len(recent_expense_categories(transactions)) > VOYAGER_MIN_CATEGORIES:
        return IdentityName.VOYAGER
    else:
        return IdentityName.DRIFTER


def classify_identity(transactions: Sequence[Transaction], language: str = DEFAULT_LANGUAGE) -> FinancialIdentity:
    """Classify the full history; language only changes the wording"""
    name = determine_identity(list(transactions))
    slug = f"identity_{name.value.lower()}"
    return FinancialIdentity(
        name=name,
        title=translate(language, slug),
        message=translate(language, f"{slug}_msg"),
    )


def determine_reflection(month: MonthData) -> Reflection:
    if not month.transactions:
        return Reflection.SILENCE
    if month.income == 0 and month.expense > 0:
        return Reflection.OUTWARD
    if month.stability > 0.7:
        return Reflection.STEADY
    if month.stability > 0.4:
        return Reflection.DRIFT
    if month.balance < 0:
        return Reflection.PULL
    return Reflection.MOVEMENT


def reflect_month(month: MonthData, language: str = DEFAULT_LANGUAGE) -> MonthReflection:
    kind = determine_reflection(month)
    return MonthReflection(kind=kind, message=translate(language, f"reflection_{kind.value}"))
