from dataclasses import dataclass


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    flag: str


COUNTRIES = [
    Country("RS", "Serbia", "🇷🇸"),
    Country("HR", "Croatia", "🇭🇷"),
    Country("BA", "Bosnia and Herzegovina", "🇧🇦"),
    Country("SI", "Slovenia", "🇸🇮"),
    Country("MK", "North Macedonia", "🇲🇰"),
    Country("ME", "Montenegro", "🇲🇪"),
    Country("AL", "Albania", "🇦🇱"),
    Country("XK", "Kosovo", "🇽🇰"),
    Country("DE", "Germany", "🇩🇪"),
    Country("AT", "Austria", "🇦🇹"),
    Country("CH", "Switzerland", "🇨🇭"),
    Country("IT", "Italy", "🇮🇹"),
    Country("HU", "Hungary", "🇭🇺"),
    Country("RO", "Romania", "🇷🇴"),
    Country("BG", "Bulgaria", "🇧🇬"),
    Country("GR", "Greece", "🇬🇷"),
    Country("PL", "Poland", "🇵🇱"),
    Country("CZ", "Czech Republic", "🇨🇿"),
    Country("SK", "Slovakia", "🇸🇰"),
    Country("UA", "Ukraine", "🇺🇦"),
    Country("FR", "France", "🇫🇷"),
    Country("ES", "Spain", "🇪🇸"),
    Country("GB", "United Kingdom", "🇬🇧"),
    Country("NL", "Netherlands", "🇳🇱"),
    Country("BE", "Belgium", "🇧🇪"),
    Country("DK", "Denmark", "🇩🇰"),
    Country("SE", "Sweden", "🇸🇪"),
    Country("NO", "Norway", "🇳🇴"),
    Country("FI", "Finland", "🇫🇮"),
    Country("PT", "Portugal", "🇵🇹"),
    Country("IE", "Ireland", "🇮🇪"),
    Country("TR", "Turkey", "🇹🇷"),
]

COUNTRY_NAMES = [country.name for country in COUNTRIES]

_countries_by_code = {country.code: country for country in COUNTRIES}


def get_country_by_code(code: str) -> Country | None:
    return _countries_by_code.get(code.upper())


def get_country_name(code: str) -> str:
    country = get_country_by_code(code)
    return country.name if country else code


def get_country_flag(code: str) -> str:
    country = get_country_by_code(code)
    return country.flag if country else "🏴"
