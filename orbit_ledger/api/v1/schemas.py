"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from orbit_ledger.domain.models import TransactionDraft


class TransactionRequest(BaseModel):
    """Request body for POST/PUT /v1/transactions"""

    model_config = ConfigDict(allow_inf_nan=False)

    amount: float = Field(..., gt=0, description="Positive amount in the display currency")
    type: Literal["income", "expense"]
    category: str = Field(..., min_length=1)
    note: str = ""
    date: date

    def to_draft(self) -> TransactionDraft:
        return TransactionDraft(
            amount=self.amount,
            type=self.type,
            category=self.category,
            note=self.note,
            date=self.date,
        )


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    amount: float
    type: str
    category: str
    note: str
    date: date
    created_at: datetime


class TransactionListResponse(BaseModel):
    transactions: List[TransactionResponse]


class ThemeSchema(BaseModel):
    name: str
    color: str
    glow: str
    shadow_color: str


class RingSchema(BaseModel):
    bucket: str
    radius: int
    opacity: float
    color: str


class MonthSummary(BaseModel):
    """One planet on the timeline"""

    key: str
    label: str
    month: int
    year: int
    income: float
    expense: float
    balance: float
    stability: float
    transaction_count: int
    is_current: bool
    theme: ThemeSchema
    rings: List[RingSchema]


class MonthsResponse(BaseModel):
    """Response for GET /v1/months"""

    current_month_key: str
    months: List[MonthSummary]


class ReflectionSchema(BaseModel):
    kind: str
    message: str


class EchoSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    count: int
    color: str
    size: int


class MonthDetailResponse(BaseModel):
    """Response for GET /v1/months/{key}"""

    summary: MonthSummary
    localized_label: str
    display_income: str
    display_expense: str
    display_balance: str
    reflection: ReflectionSchema
    echoes: List[EchoSchema]
    transactions: List[TransactionResponse]


class TimeWarpResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month_key: str
    transaction_id: str
    income: float
    expense: float
    balance: float
    alt_income: float
    alt_expense: float
    alt_balance: float
    diff: float


class IdentityResponse(BaseModel):
    name: str
    title: str
    message: str
    description: str = ""


class TotalsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    income: float
    expense: float
    balance: float


class OverviewResponse(BaseModel):
    """Response for GET /v1/overview"""

    current_month_key: str
    transaction_count: int
    totals: TotalsSchema
    display_balance: str
    identity: IdentityResponse


class StarSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month_key: str
    brightness: float
    size: float
    transaction_count: int


class ConstellationResponse(BaseModel):
    year: int
    stars: List[StarSchema]


class PreferencesResponse(BaseModel):
    language: str
    currency: str
    animations_enabled: bool
    silence_mode: bool
    is_rtl: bool


class PreferencesUpdate(BaseModel):
    """Request body for PATCH /v1/preferences; omitted fields keep their stored value"""

    language: Optional[Literal["en", "ar"]] = None
    currency: Optional[Literal["USD", "AED", "EUR", "GBP", "TRY"]] = None
    animations_enabled: Optional[bool] = None
    silence_mode: Optional[bool] = None


class CategorySchema(BaseModel):
    name: str
    label: str
    fixed: bool


class CategoriesResponse(BaseModel):
    language: str
    is_rtl: bool
    income: List[CategorySchema]
    expense: List[CategorySchema]
