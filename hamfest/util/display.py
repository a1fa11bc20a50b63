from hamfest.models import SellerSummary

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "RSD": "дин",
}


def get_display_name(profile: SellerSummary | None, fallback: str = "User") -> str:
    if profile is None:
        return fallback

    if profile.display_name:
        if profile.callsign:
            return f"{profile.display_name} ({profile.callsign})"
        return profile.display_name

    return profile.callsign or fallback


def format_price(price: float, currency: str | None) -> str:
    if price == 0:
        return "FREE"

    currency_code = getattr(currency, "value", currency) or ""
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)
    # at most two decimals, trailing zeros dropped
    amount = f"{price:,.2f}".rstrip("0").rstrip(".")
    return f"{symbol}{amount}"
