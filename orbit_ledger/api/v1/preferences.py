"""/v1/preferences and /v1/categories - display settings and localized catalogs"""

from typing import Iterable, List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from orbit_ledger.api.dependencies import get_preferences_repository
from orbit_ledger.api.v1.schemas import (
    CategoriesResponse,
    CategorySchema,
    PreferencesResponse,
    PreferencesUpdate,
)
from orbit_ledger.domain.models import (
    EXPENSE_CATEGORIES,
    FIXED_CATEGORIES,
    INCOME_CATEGORIES,
    UserPreferences,
)
from orbit_ledger.infrastructure.database.repositories import PreferencesRepository
from orbit_ledger.utils.i18n import category_label, is_rtl

router = APIRouter()


def to_preferences_response(prefs: UserPreferences) -> PreferencesResponse:
    return PreferencesResponse(
        language=prefs.language,
        currency=prefs.currency,
        animations_enabled=prefs.animations_enabled,
        silence_mode=prefs.silence_mode,
        is_rtl=prefs.is_rtl,
    )


def to_category_schemas(categories: Iterable[str], language: str) -> List[CategorySchema]:
    return [
        CategorySchema(name=name, label=category_label(name, language), fixed=name in FIXED_CATEGORIES)
        for name in categories
    ]


@router.get("/preferences", response_model=PreferencesResponse)
def get_preferences(preferences: PreferencesRepository = Depends(get_preferences_repository)):
    return to_preferences_response(preferences.load_preferences())


@router.patch("/preferences", response_model=PreferencesResponse)
def update_preferences(
    request_body: PreferencesUpdate,
    preferences: PreferencesRepository = Depends(get_preferences_repository),
):
    """Merge the provided fields into the stored preferences"""
    updates = request_body.model_dump(exclude_none=True)
    return to_preferences_response(preferences.update_preferences(updates))


@router.get("/categories", response_model=CategoriesResponse)
def get_categories(
    language: Optional[Literal["en", "ar"]] = Query(None, description="Defaults to the stored preference"),
    preferences: PreferencesRepository = Depends(get_preferences_repository),
):
    """
    Category catalogs for the entry form, with localized labels.

    Stored transactions always carry the English name; `label` is display only.
    """
    language = language or preferences.load_preferences().language
    return CategoriesResponse(
        language=language,
        is_rtl=is_rtl(language),
        income=to_category_schemas(INCOME_CATEGORIES, language),
        expense=to_category_schemas(EXPENSE_CATEGORIES, language),
    )
