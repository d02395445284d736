"""Tabelas de códigos de discagem internacionais.

Duas tabelas imutáveis carregadas uma única vez:
- DIALING_CODES: ISO 3166-1 alpha-2 → código de discagem
- COUNTRY_NAMES: nome/alias do país (maiúsculo) → ISO alpha-2
"""

from __future__ import annotations

from types import MappingProxyType

DIALING_CODES = MappingProxyType(
    {
        "AU": "61",  # Australia
        "NZ": "64",  # New Zealand
        "US": "1",  # United States
        "CA": "1",  # Canada
        "GB": "44",  # United Kingdom
        "UK": "44",  # United Kingdom (alias)
        "IE": "353",  # Ireland
        "SG": "65",  # Singapore
        "HK": "852",  # Hong Kong
        "MY": "60",  # Malaysia
        "PH": "63",  # Philippines
        "ID": "62",  # Indonesia
        "TH": "66",  # Thailand
        "VN": "84",  # Vietnam
        "IN": "91",  # India
        "PK": "92",  # Pakistan
        "BD": "880",  # Bangladesh
        "LK": "94",  # Sri Lanka
        "NP": "977",  # Nepal
        "JP": "81",  # Japan
        "KR": "82",  # South Korea
        "CN": "86",  # China
        "TW": "886",  # Taiwan
        "DE": "49",  # Germany
        "FR": "33",  # France
        "IT": "39",  # Italy
        "ES": "34",  # Spain
        "PT": "351",  # Portugal
        "NL": "31",  # Netherlands
        "BE": "32",  # Belgium
        "AT": "43",  # Austria
        "CH": "41",  # Switzerland
        "SE": "46",  # Sweden
        "NO": "47",  # Norway
        "DK": "45",  # Denmark
        "FI": "358",  # Finland
        "PL": "48",  # Poland
        "CZ": "420",  # Czech Republic
        "GR": "30",  # Greece
        "RU": "7",  # Russia
        "UA": "380",  # Ukraine
        "ZA": "27",  # South Africa
        "EG": "20",  # Egypt
        "NG": "234",  # Nigeria
        "KE": "254",  # Kenya
        "AE": "971",  # United Arab Emirates
        "SA": "966",  # Saudi Arabia
        "QA": "974",  # Qatar
        "KW": "965",  # Kuwait
        "BH": "973",  # Bahrain
        "OM": "968",  # Oman
        "IL": "972",  # Israel
        "TR": "90",  # Turkey
        "MX": "52",  # Mexico
        "BR": "55",  # Brazil
        "AR": "54",  # Argentina
        "CL": "56",  # Chile
        "CO": "57",  # Colombia
        "PE": "51",  # Peru
        "VE": "58",  # Venezuela
        "FJ": "679",  # Fiji
        "PG": "675",  # Papua New Guinea
        "NC": "687",  # New Caledonia
        "WS": "685",  # Samoa
        "TO": "676",  # Tonga
        "VU": "678",  # Vanuatu
    }
)

COUNTRY_NAMES = MappingProxyType(
    {
        "AUSTRALIA": "AU",
        "NEW ZEALAND": "NZ",
        "UNITED STATES": "US",
        "USA": "US",
        "CANADA": "CA",
        "UNITED KINGDOM": "GB",
        "UK": "GB",
        "GREAT BRITAIN": "GB",
        "IRELAND": "IE",
        "SINGAPORE": "SG",
        "HONG KONG": "HK",
        "MALAYSIA": "MY",
        "PHILIPPINES": "PH",
        "INDONESIA": "ID",
        "THAILAND": "TH",
        "VIETNAM": "VN",
        "INDIA": "IN",
        "PAKISTAN": "PK",
        "BANGLADESH": "BD",
        "SRI LANKA": "LK",
        "NEPAL": "NP",
        "JAPAN": "JP",
        "SOUTH KOREA": "KR",
        "KOREA": "KR",
        "CHINA": "CN",
        "TAIWAN": "TW",
        "GERMANY": "DE",
        "FRANCE": "FR",
        "ITALY": "IT",
        "SPAIN": "ES",
        "PORTUGAL": "PT",
        "NETHERLANDS": "NL",
        "BELGIUM": "BE",
        "AUSTRIA": "AT",
        "SWITZERLAND": "CH",
        "SWEDEN": "SE",
        "NORWAY": "NO",
        "DENMARK": "DK",
        "FINLAND": "FI",
        "POLAND": "PL",
        "CZECH REPUBLIC": "CZ",
        "GREECE": "GR",
        "RUSSIA": "RU",
        "UKRAINE": "UA",
        "SOUTH AFRICA": "ZA",
        "EGYPT": "EG",
        "NIGERIA": "NG",
        "KENYA": "KE",
        "UNITED ARAB EMIRATES": "AE",
        "UAE": "AE",
        "SAUDI ARABIA": "SA",
        "QATAR": "QA",
        "KUWAIT": "KW",
        "BAHRAIN": "BH",
        "OMAN": "OM",
        "ISRAEL": "IL",
        "TURKEY": "TR",
        "MEXICO": "MX",
        "BRAZIL": "BR",
        "ARGENTINA": "AR",
        "CHILE": "CL",
        "COLOMBIA": "CO",
        "PERU": "PE",
        "VENEZUELA": "VE",
        "FIJI": "FJ",
        "PAPUA NEW GUINEA": "PG",
        "NEW CALEDONIA": "NC",
        "SAMOA": "WS",
        "TONGA": "TO",
        "VANUATU": "VU",
    }
)

# Códigos mais longos primeiro: "1" não pode mascarar "120", etc.
_KNOWN_DIALING_CODES: tuple[str, ...] = tuple(
    sorted(set(DIALING_CODES.values()), key=len, reverse=True)
)


def normalize_to_iso(country: str) -> str | None:
    """Converte código ISO ou nome de país para ISO alpha-2.

    Args:
        country: Código ISO (ex: "au") ou nome (ex: "New Zealand")

    Returns:
        Código ISO em maiúsculas, ou None se desconhecido.
    """
    normalized = country.strip().upper()
    if normalized in DIALING_CODES:
        return normalized
    return COUNTRY_NAMES.get(normalized)


def get_dialing_code(country: str) -> str | None:
    """Retorna o código de discagem para código ISO ou nome de país."""
    iso = normalize_to_iso(country)
    if iso is None:
        return None
    return DIALING_CODES.get(iso)


def is_supported(country: str) -> bool:
    return get_dialing_code(country) is not None


def starts_with_known_dialing_code(number: str) -> bool:
    """Heurística: número (só dígitos) começa com um código conhecido."""
    return any(number.startswith(code) for code in _KNOWN_DIALING_CODES)
