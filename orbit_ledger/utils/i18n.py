"""Localized strings, currency catalog and display formatting"""

from dataclasses import dataclass
from typing import Dict, Tuple

from orbit_ledger.utils.date_utils import parse_month_key

LANGUAGES = ("en", "ar")
DEFAULT_LANGUAGE = "en"
RTL_LANGUAGES = frozenset({"ar"})


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    label: str
    label_ar: str


CURRENCIES: Tuple[Currency, ...] = (
    Currency("USD", "$", "US Dollar", "دولار أمريكي"),
    Currency("AED", "د.إ", "UAE Dirham", "درهم إماراتي"),
    Currency("EUR", "€", "Euro", "يورو"),
    Currency("GBP", "£", "British Pound", "جنيه إسترليني"),
    Currency("TRY", "₺", "Turkish Lira", "ليرة تركية"),
)
CURRENCY_CODES = tuple(c.code for c in CURRENCIES)

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "identity_explorer": "The Explorer",
        "identity_explorer_msg": "Your orbit awaits. Add your first entry.",
        "identity_builder": "The Builder",
        "identity_builder_msg": "Your orbit is strengthening. Resources are gathering.",
        "identity_stabilizer": "The Stabilizer",
        "identity_stabilizer_msg": "You remained stable. The path is clear.",
        "identity_observer": "The Observer",
        "identity_observer_msg": "Your orbit is shifting. Stay aware.",
        "identity_voyager": "The Voyager",
        "identity_voyager_msg": "Many signals detected. Consider focusing your path.",
        "identity_drifter": "The Drifter",
        "identity_drifter_msg": "This month drifted slightly. Recalibrate when ready.",
        "reflection_silence": "Silence in the void. No signals this month.",
        "reflection_outward": "Resources flowed outward. No signal returned.",
        "reflection_steady": "This month was steady. You stayed in orbit.",
        "reflection_drift": "A gentle drift. The balance shifted but held.",
        "reflection_pull": "Gravitational pull was strong. The orbit bent.",
        "reflection_movement": "This month carried movement. Reflect on the path.",
        "hidden": "••••",
    },
    "ar": {
        "identity_explorer": "المستكشف",
        "identity_explorer_msg": "مدارك بانتظارك. أضف أول إدخال.",
        "identity_builder": "الباني",
        "identity_builder_msg": "مدارك يتعزز. الموارد تتجمع.",
        "identity_stabilizer": "المستقر",
        "identity_stabilizer_msg": "بقيت ثابتًا. الطريق واضح.",
        "identity_observer": "المراقب",
        "identity_observer_msg": "مدارك يتغير. كن واعيًا.",
        "identity_voyager": "الرحالة",
        "identity_voyager_msg": "إشارات كثيرة. ركّز مسارك.",
        "identity_drifter": "المنجرف",
        "identity_drifter_msg": "هذا الشهر انجرف قليلاً. أعد المعايرة.",
        "reflection_silence": "سكون في الفراغ. لا إشارات.",
        "reflection_outward": "الموارد تدفقت للخارج.",
        "reflection_steady": "هذا الشهر كان متزنًا. بقيت في مدارك.",
        "reflection_drift": "انجراف لطيف. التوازن تغيّر لكنه صمد.",
        "reflection_pull": "الجاذبية كانت قوية. المدار انحنى.",
        "reflection_movement": "هذا الشهر حمل حركة. تأمل المسار.",
        "hidden": "••••",
    },
}

CATEGORY_LABELS_AR: Dict[str, str] = {
    "Salary": "راتب",
    "Business / Freelance": "عمل حر",
    "Investments": "استثمارات",
    "Gifts": "هدايا",
    "Other Income": "دخل آخر",
    "Food & Dining": "طعام",
    "Drinks & Coffee": "مشروبات",
    "Transportation": "مواصلات",
    "Rent / Housing": "سكن",
    "Utilities": "خدمات",
    "Subscriptions": "اشتراكات",
    "Shopping": "تسوق",
    "Entertainment": "ترفيه",
    "Health": "صحة",
    "Travel": "سفر",
    "Education": "تعليم",
    "Other Expenses": "مصاريف أخرى",
}

MONTH_NAMES = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "ar": (
        "يناير",
        "فبراير",
        "مارس",
        "أبريل",
        "مايو",
        "يونيو",
        "يوليو",
        "أغسطس",
        "سبتمبر",
        "أكتوبر",
        "نوفمبر",
        "ديسمبر",
    ),
}


def translate(language: str, key: str) -> str:
    """Look up `key` for `language`, falling back to English, then to the key itself"""
    table = TRANSLATIONS.get(language, {})
    return table.get(key) or TRANSLATIONS[DEFAULT_LANGUAGE].get(key) or key


def is_rtl(language: str) -> bool:
    return language in RTL_LANGUAGES


def category_label(category: str, language: str = DEFAULT_LANGUAGE) -> str:
    if language == "ar":
        return CATEGORY_LABELS_AR.get(category, CATEGORY_LABELS_AR["Other Expenses"])
    return category


def month_label(key: str, language: str = DEFAULT_LANGUAGE, short: bool = False) -> str:
    """Display label for a month key, e.g. "Jun 2024" (or "Jun" when short)"""
    year, month = parse_month_key(key)
    names = MONTH_NAMES.get(language, MONTH_NAMES[DEFAULT_LANGUAGE])
    name = names[month - 1]
    return name if short else f"{name} {year}"


def get_currency(code: str) -> Currency:
    """Currency by code; unknown codes resolve to the first (USD)"""
    for currency in CURRENCIES:
        if currency.code == code:
            return currency
    return CURRENCIES[0]


def format_money(amount: float, currency_code: str = "USD", short: bool = False) -> str:
    """Format amount with the currency symbol, e.g. "$1,234.56" or "-$50" (short)

    Display only: no conversion between currencies happens here.
    """
    currency = get_currency(currency_code)
    decimals = 0 if short else 2
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency.symbol}{abs(amount):,.{decimals}f}"
