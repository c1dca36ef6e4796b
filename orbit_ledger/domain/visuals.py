"""Visual derivation - maps month aggregates to planet themes, rings and stars"""

from typing import Dict, Iterable, List

from orbit_ledger.domain.models import (
    EXPENSE,
    FIXED_CATEGORIES,
    CategoryEcho,
    MonthData,
    OrbitRing,
    PlanetTheme,
    RingBucket,
    Star,
    ThemeName,
)

THEMES: Dict[ThemeName, PlanetTheme] = {
    ThemeName.DIM: PlanetTheme(
        ThemeName.DIM,
        color="rgba(120, 130, 160, 0.4)",
        glow="rgba(120, 130, 160, 0.1)",
        shadow_color="rgba(120, 130, 160, 0.3)",
    ),
    ThemeName.OVERDRAWN: PlanetTheme(
        ThemeName.OVERDRAWN, color="#C4726F", glow="rgba(196, 114, 111, 0.2)", shadow_color="#C4726F"
    ),
    ThemeName.STRAINED: PlanetTheme(
        ThemeName.STRAINED, color="#D4956A", glow="rgba(212, 149, 106, 0.2)", shadow_color="#D4956A"
    ),
    ThemeName.WATCHFUL: PlanetTheme(
        ThemeName.WATCHFUL, color="#C9B458", glow="rgba(201, 180, 88, 0.2)", shadow_color="#C9B458"
    ),
    ThemeName.STEADY: PlanetTheme(
        ThemeName.STEADY, color="#5CB8A5", glow="rgba(92, 184, 165, 0.2)", shadow_color="#5CB8A5"
    ),
    ThemeName.DRIFTING: PlanetTheme(
        ThemeName.DRIFTING, color="#6B9FD4", glow="rgba(107, 159, 212, 0.2)", shadow_color="#6B9FD4"
    ),
}

# Innermost to outermost
RINGS: Dict[RingBucket, OrbitRing] = {
    RingBucket.FIXED: OrbitRing(RingBucket.FIXED, radius=10, opacity=0.25, color="#6B9FD4"),
    RingBucket.RECURRING: OrbitRing(RingBucket.RECURRING, radius=16, opacity=0.18, color="#C9B458"),
    RingBucket.SURPRISE: OrbitRing(RingBucket.SURPRISE, radius=22, opacity=0.12, color="#D4956A"),
}

ECHO_COLORS: Dict[str, str] = {
    "Food & Dining": "rgba(212, 149, 106, 0.3)",
    "Drinks & Coffee": "rgba(201, 180, 88, 0.25)",
    "Transportation": "rgba(107, 159, 212, 0.3)",
    "Rent / Housing": "rgba(92, 184, 165, 0.25)",
    "Utilities": "rgba(150, 130, 200, 0.25)",
    "Subscriptions": "rgba(196, 114, 111, 0.25)",
    "Shopping": "rgba(212, 149, 106, 0.25)",
    "Entertainment": "rgba(201, 180, 88, 0.3)",
    "Health": "rgba(92, 184, 165, 0.3)",
    "Travel": "rgba(107, 159, 212, 0.25)",
    "Education": "rgba(150, 130, 200, 0.3)",
}
DEFAULT_ECHO_COLOR = "rgba(120, 130, 160, 0.2)"

MAX_CONSTELLATION_STARS = 12


def derive_theme(month: MonthData) -> PlanetTheme:
    """
    Pick the planet theme for a month.

    Thresholds on expense / income (income of 0 treated as 1), first match wins:
    - no transactions: dim
    - > 1.00: overdrawn
    - > 0.85: strained
    - > 0.65: watchful
    - stability > 0.6: steady
    - otherwise: drifting
    """
    if not month.transactions:
        return THEMES[ThemeName.DIM]

    ratio = month.expense / (month.income or 1)

    if ratio > 1:
        return THEMES[ThemeName.OVERDRAWN]
    elif ratio > 0.85:
        return THEMES[ThemeName.STRAINED]
    elif ratio > 0.65:
        return THEMES[ThemeName.WATCHFUL]
    elif month.stability > 0.6:
        return THEMES[ThemeName.STEADY]
    else:
        return THEMES[ThemeName.DRIFTING]


def _expense_category_counts(month: MonthData) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for txn in month.transactions:
        if txn.type == EXPENSE:
            counts[txn.category] = counts.get(txn.category, 0) + 1
    return counts


def derive_rings(month: MonthData) -> List[OrbitRing]:
    """
    One ring per expense bucket present in the month, ordered fixed -> recurring -> surprise.

    Buckets overlap: a category can be both fixed and recurring. Surprise means
    a non-fixed category seen exactly once.
    """
    counts = _expense_category_counts(month)
    if not counts:
        return []

    recurring = {category for category, count in counts.items() if count > 1}

    present = {
        RingBucket.FIXED: any(c in FIXED_CATEGORIES for c in counts),
        RingBucket.RECURRING: bool(recurring),
        RingBucket.SURPRISE: any(c not in FIXED_CATEGORIES and c not in recurring for c in counts),
    }

    return [RINGS[bucket] for bucket in RingBucket if present[bucket]]


def derive_echoes(month: MonthData) -> List[CategoryEcho]:
    """Expense categories repeated within the month, in first-seen order"""
    return [
        CategoryEcho(
            category=category,
            count=count,
            color=ECHO_COLORS.get(category, DEFAULT_ECHO_COLOR),
            size=20 + count * 6,
        )
        for category, count in _expense_category_counts(month).items()
        if count > 1
    ]


def derive_star(month: MonthData) -> Star:
    count = len(month.transactions)
    if count == 0:
        return Star(month_key=month.key, brightness=0.15, size=4, transaction_count=0)

    return Star(
        month_key=month.key,
        brightness=min(1.0, 0.3 + month.stability * 0.7),
        size=4 + min(8.0, count * 0.8),
        transaction_count=count,
    )


def constellation(months: Iterable[MonthData], year: int) -> List[Star]:
    """Stars for the months of `year` present in the timeline, in order"""
    year_months = [m for m in months if m.year == year][:MAX_CONSTELLATION_STARS]
    return [derive_star(m) for m in year_months]
