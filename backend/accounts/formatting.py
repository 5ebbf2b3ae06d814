"""Currency display for the configured account currency."""

from decimal import Decimal

CURRENCIES = ("SAR", "AED", "QAR", "BHD", "OMR", "KWD", "USD", "EUR")

CURRENCY_SYMBOLS = {
    "en": {code: code for code in CURRENCIES},
    "ar": {
        "SAR": "ر.س",
        "AED": "د.إ",
        "QAR": "ر.ق",
        "BHD": "د.ب",
        "OMR": "ر.ع",
        "KWD": "د.ك",
        "USD": "$",
        "EUR": "€",
    },
}

CURRENCY_NAMES = {
    "SAR": "Saudi Riyal",
    "AED": "UAE Dirham",
    "QAR": "Qatari Riyal",
    "BHD": "Bahraini Dinar",
    "OMR": "Omani Rial",
    "KWD": "Kuwaiti Dinar",
    "USD": "US Dollar",
    "EUR": "Euro",
}


def currency_symbol(currency, language="en"):
    symbols = CURRENCY_SYMBOLS.get(language, CURRENCY_SYMBOLS["en"])
    return symbols.get(currency, currency)


def format_amount(amount):
    """Thousands separators, and decimals only when the amount has a fraction."""
    amount = Decimal(str(amount or 0))
    if amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return f"{amount.normalize():,f}"


def format_currency(amount, currency, language="en"):
    """
    ``1500, "SAR", "en"`` → ``"1,500 SAR"``; ``"ar"`` → ``"1,500 ر.س"``.
    The number always comes first.
    """
    return f"{format_amount(amount)} {currency_symbol(currency, language)}"
