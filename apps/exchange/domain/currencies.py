"""
Currency registry.

Static, read-only table of the ISO 4217 currencies the application supports,
with their display symbols and names. Lookups are case-insensitive.
"""

from apps.exchange.domain.models import Currency

CURRENCIES: tuple[Currency, ...] = (
    # Major
    Currency("GBP", "£", "British Pound Sterling"),
    Currency("USD", "$", "US Dollar"),
    Currency("EUR", "€", "Euro"),
    Currency("JPY", "¥", "Japanese Yen"),
    Currency("CHF", "CHF", "Swiss Franc"),
    Currency("AUD", "A$", "Australian Dollar"),
    Currency("CAD", "C$", "Canadian Dollar"),
    Currency("NZD", "NZ$", "New Zealand Dollar"),
    # European
    Currency("SEK", "kr", "Swedish Krona"),
    Currency("NOK", "kr", "Norwegian Krone"),
    Currency("DKK", "kr", "Danish Krone"),
    Currency("PLN", "zł", "Polish Zloty"),
    Currency("CZK", "Kč", "Czech Koruna"),
    Currency("HUF", "Ft", "Hungarian Forint"),
    Currency("RON", "lei", "Romanian Leu"),
    Currency("BGN", "лв", "Bulgarian Lev"),
    # Asian
    Currency("CNY", "¥", "Chinese Yuan"),
    Currency("HKD", "HK$", "Hong Kong Dollar"),
    Currency("SGD", "S$", "Singapore Dollar"),
    Currency("KRW", "₩", "South Korean Won"),
    Currency("INR", "₹", "Indian Rupee"),
    Currency("THB", "฿", "Thai Baht"),
    Currency("MYR", "RM", "Malaysian Ringgit"),
    Currency("IDR", "Rp", "Indonesian Rupiah"),
    Currency("PHP", "₱", "Philippine Peso"),
    Currency("VND", "₫", "Vietnamese Dong"),
    # Middle Eastern
    Currency("AED", "د.إ", "UAE Dirham"),
    Currency("SAR", "﷼", "Saudi Riyal"),
    Currency("ILS", "₪", "Israeli Shekel"),
    Currency("TRY", "₺", "Turkish Lira"),
    # Americas
    Currency("MXN", "MX$", "Mexican Peso"),
    Currency("BRL", "R$", "Brazilian Real"),
    Currency("ARS", "AR$", "Argentine Peso"),
    Currency("CLP", "CL$", "Chilean Peso"),
    Currency("COP", "CO$", "Colombian Peso"),
    # African
    Currency("ZAR", "R", "South African Rand"),
    Currency("NGN", "₦", "Nigerian Naira"),
    Currency("EGP", "E£", "Egyptian Pound"),
    Currency("KES", "KSh", "Kenyan Shilling"),
    # Oceania
    Currency("FJD", "FJ$", "Fijian Dollar"),
)

CURRENCY_MAP: dict[str, Currency] = {currency.code: currency for currency in CURRENCIES}

DEFAULT_CURRENCY_CODE = "GBP"

# (region, start, end) slices over CURRENCIES
_REGIONS = (
    ("Major Currencies", 0, 8),
    ("European", 8, 16),
    ("Asian", 16, 26),
    ("Middle Eastern", 26, 30),
    ("Americas", 30, 35),
    ("African", 35, 39),
    ("Oceania", 39, None),
)


def _normalize(code: str | None) -> str:
    return (code or "").strip().upper()


def get_currency_by_code(code: str | None) -> Currency | None:
    """Get a currency by its ISO 4217 code, or None if unsupported."""
    return CURRENCY_MAP.get(_normalize(code))


def is_valid_currency_code(code: str | None) -> bool:
    return _normalize(code) in CURRENCY_MAP


def get_currency_symbol(code: str | None) -> str:
    """
    Get the display symbol for a currency code.

    Unknown codes are returned as-is so that display code never fails
    on a currency missing from the registry.
    """
    currency = get_currency_by_code(code)
    return currency.symbol if currency else (code or "")


def get_currency_name(code: str | None) -> str:
    currency = get_currency_by_code(code)
    return currency.name if currency else (code or "")


def format_currency_label(code: str | None) -> str:
    """Format a code with its symbol for display, e.g. "GBP (£)"."""
    currency = get_currency_by_code(code)
    if currency is None:
        return code or ""
    return f"{currency.code} ({currency.symbol})"


def get_all_currency_codes() -> list[str]:
    return [currency.code for currency in CURRENCIES]


def search_currencies(query: str | None) -> list[Currency]:
    """Search currencies by code, name or symbol (case-insensitive substring)."""
    search_term = (query or "").strip().lower()
    if not search_term:
        return list(CURRENCIES)

    return [
        currency
        for currency in CURRENCIES
        if search_term in currency.code.lower()
        or search_term in currency.name.lower()
        or search_term in currency.symbol.lower()
    ]


def get_currencies_by_region() -> dict[str, list[Currency]]:
    return {
        region: list(CURRENCIES[start:end])
        for region, start, end in _REGIONS
    }
