import pytest

from hamfest.enums import Currency
from hamfest.util.display import format_price, get_display_name
from tests.sample_data import make_seller


@pytest.mark.parametrize(
    "display_name, callsign, expected",
    [
        ("Marko", "YU1ABC", "Marko (YU1ABC)"),
        ("Marko", "", "Marko"),
        (None, "YU1ABC", "YU1ABC"),
        ("", "", "User"),
    ],
)
def test_get_display_name__profile_fields__picks_most_descriptive_name(
    display_name: str | None, callsign: str, expected: str
) -> None:
    seller = make_seller(callsign=callsign, display_name=display_name)

    assert get_display_name(seller) == expected


def test_get_display_name__no_profile__returns_fallback() -> None:
    assert get_display_name(None) == "User"
    assert get_display_name(None, fallback="Unknown seller") == "Unknown seller"


@pytest.mark.parametrize(
    "price, currency, expected",
    [
        (0, Currency.EUR, "FREE"),
        (950, Currency.EUR, "€950"),
        (1250.5, Currency.USD, "$1,250.5"),
        (19.99, "GBP", "£19.99"),
        (100, None, "100"),
        (42, "CHF", "CHF42"),
    ],
)
def test_format_price__amount_and_currency__formats_for_display(
    price: float, currency: Currency | str | None, expected: str
) -> None:
    assert format_price(price, currency) == expected
