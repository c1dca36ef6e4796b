"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Tuple

from orbit_ledger.utils import i18n

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Business / Freelance",
    "Investments",
    "Gifts",
    "Other Income",
)

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Food & Dining",
    "Drinks & Coffee",
    "Transportation",
    "Rent / Housing",
    "Utilities",
    "Subscriptions",
    "Shopping",
    "Entertainment",
    "Health",
    "Travel",
    "Education",
    "Other Expenses",
)

# Expenses that recur by nature, regardless of how often they show up in a month
FIXED_CATEGORIES = frozenset({"Rent / Housing", "Utilities", "Subscriptions"})


@dataclass(frozen=True)
class Transaction:
    """Single income or expense entry owned by the ledger"""

    id: str
    amount: float
    type: str  # "income" or "expense"
    category: str
    note: str
    date: date
    created_at: datetime


@dataclass(frozen=True)
class TransactionDraft:
    """User-supplied fields for creating or editing a transaction"""

    amount: float
    type: str
    category: str
    date: date
    note: str = ""


@dataclass
class MonthData:
    """Aggregated view of one calendar month, recomputed on every pass"""

    key: str
    label: str
    month: int
    year: int
    income: float
    expense: float
    balance: float
    stability: float
    transactions: List[Transaction] = field(default_factory=list)


@dataclass
class Totals:
    """Income and expense over the whole history"""

    income: float
    expense: float
    balance: float


class IdentityName(str, Enum):
    EXPLORER = "Explorer"
    BUILDER = "Builder"
    STABILIZER = "Stabilizer"
    OBSERVER = "Observer"
    VOYAGER = "Voyager"
    DRIFTER = "Drifter"


@dataclass
class FinancialIdentity:
    """Coarse behavioral label with its localized wording"""

    name: IdentityName
    title: str
    message: str
    description: str = ""


class Reflection(str, Enum):
    SILENCE = "silence"
    OUTWARD = "outward"
    STEADY = "steady"
    DRIFT = "drift"
    PULL = "pull"
    MOVEMENT = "movement"


@dataclass
class MonthReflection:
    kind: Reflection
    message: str


@dataclass
class TimeWarp:
    """A month's figures as if one transaction had never happened"""

    month_key: str
    transaction_id: str
    income: float
    expense: float
    balance: float
    alt_income: float
    alt_expense: float
    alt_balance: float
    diff: float


class ThemeName(str, Enum):
    DIM = "dim"
    OVERDRAWN = "overdrawn"
    STRAINED = "strained"
    WATCHFUL = "watchful"
    STEADY = "steady"
    DRIFTING = "drifting"


@dataclass(frozen=True)
class PlanetTheme:
    name: ThemeName
    color: str
    glow: str
    shadow_color: str


class RingBucket(str, Enum):
    FIXED = "fixed"
    RECURRING = "recurring"
    SURPRISE = "surprise"


@dataclass(frozen=True)
class OrbitRing:
    """Decorative ring drawn around a month's planet, innermost first"""

    bucket: RingBucket
    radius: int
    opacity: float
    color: str


@dataclass
class CategoryEcho:
    category: str
    count: int
    color: str
    size: int


@dataclass
class Star:
    """One month rendered as a star in the yearly constellation"""

    month_key: str
    brightness: float
    size: float
    transaction_count: int


@dataclass
class MonthView:
    """Month aggregate paired with its derived presentation parameters"""

    month: MonthData
    theme: PlanetTheme
    rings: List[OrbitRing]


@dataclass
class OrbitSnapshot:
    """Everything derived from one transaction list at one point in time"""

    current_month_key: str
    months: List[MonthView]
    identity: FinancialIdentity
    totals: Totals
    transaction_count: int


@dataclass
class UserPreferences:
    """Display preferences persisted next to the transaction list"""

    language: str = "en"
    currency: str = "USD"
    animations_enabled: bool = True
    silence_mode: bool = False

    @property
    def is_rtl(self) -> bool:
        return i18n.is_rtl(self.language)
