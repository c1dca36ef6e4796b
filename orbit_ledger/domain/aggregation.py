"""Month aggregation engine - buckets transactions into calendar months"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from orbit_ledger.domain.models import EXPENSE, INCOME, MonthData, TimeWarp, Totals, Transaction
from orbit_ledger.utils.date_utils import month_key, month_window, parse_month_key
from orbit_ledger.utils.i18n import month_label

# Rolling window around "now": three months back, two months ahead
WINDOW_BEFORE = 3
WINDOW_AFTER = 2


def sum_by_type(transactions: Iterable[Transaction], txn_type: str) -> float:
    return sum((t.amount for t in transactions if t.type == txn_type), 0.0)


def calculate_stability(income: float, expense: float) -> float:
    """
    Fraction of the month's total flow that nets to a positive balance.

    - No activity at all counts as fully stable (1.0)
    - The ratio is clamped to [0, 1] before the absolute value is taken, so
      any month spending more than it earns reports 0.0
    """
    total = income + expense
    if total == 0:
        return 1.0

    balance = income - expense
    clamped = max(0.0, min(1.0, balance / total))
    return abs(clamped)


def build_month(key: str, transactions: List[Transaction]) -> MonthData:
    """Aggregate the given month's transactions into a MonthData"""
    year, month = parse_month_key(key)
    income = sum_by_type(transactions, INCOME)
    expense = sum_by_type(transactions, EXPENSE)

    return MonthData(
        key=key,
        label=month_label(key),
        month=month,
        year=year,
        income=income,
        expense=expense,
        balance=income - expense,
        stability=calculate_stability(income, expense),
        transactions=transactions,
    )


def aggregate_months(transactions: Sequence[Transaction], reference_date: date) -> List[MonthData]:
    """
    Produce the ordered month timeline for a transaction list.

    Requirements:
    - Always includes the rolling window (reference month -3 .. +2)
    - Adds the month of every transaction, even far outside the window
    - Ascending by key, one entry per month, recomputed from scratch each call

    Month transactions keep the input list order and reference the input
    records; callers must not mutate them.
    """
    keys = {month_key(reference_date)}
    keys.update(month_window(reference_date, WINDOW_BEFORE, WINDOW_AFTER))

    by_month: Dict[str, List[Transaction]] = {}
    for txn in transactions:
        key = month_key(txn.date)
        keys.add(key)
        by_month.setdefault(key, []).append(txn)

    return [build_month(key, by_month.get(key, [])) for key in sorted(keys)]


def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Lifetime income, expense and balance"""
    transactions = list(transactions)
    income = sum_by_type(transactions, INCOME)
    expense = sum_by_type(transactions, EXPENSE)
    return Totals(income=income, expense=expense, balance=income - expense)


def find_month(months: Iterable[MonthData], key: str) -> Optional[MonthData]:
    for month in months:
        if month.key == key:
            return month
    return None


def time_warp(month: MonthData, transaction: Transaction) -> TimeWarp:
    """
    Recompute a month's figures as if `transaction` had never been logged.

    diff > 0 means the month would have ended better without it.
    """
    if transaction.type == INCOME:
        alt_income = month.income - transaction.amount
        alt_expense = month.expense
        alt_balance = month.balance - transaction.amount
    else:
        alt_income = month.income
        alt_expense = month.expense - transaction.amount
        alt_balance = month.balance + transaction.amount

    return TimeWarp(
        month_key=month.key,
        transaction_id=transaction.id,
        income=month.income,
        expense=month.expense,
        balance=month.balance,
        alt_income=alt_income,
        alt_expense=alt_expense,
        alt_balance=alt_balance,
        diff=alt_balance - month.balance,
    )
