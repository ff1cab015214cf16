"""Internal constants shared across the library."""

BASE_URL = "https://dash.apppricing.com/api"
LOCATION_URL = "https://ifconfig.apppricing.com/json"

DEFAULT_COUNTRY = "unknown"
DEFAULT_REGION = "unknown"
DEFAULT_CITY = "unknown"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_PRIMARY_LANGUAGE = "en"

# ------------------------------------------------------------------
# Country code → primary language (ISO 3166-1 alpha-2 → ISO 639-1)
# ------------------------------------------------------------------

COUNTRY_LANGUAGES: dict[str, str] = {
    "US": "en",
    "GB": "en",
    "CA": "en",
    "AU": "en",
    "NZ": "en",
    "FR": "fr",
    "DE": "de",
    "IT": "it",
    "ES": "es",
    "PT": "pt",
    "BR": "pt",
    "NL": "nl",
    "BE": "nl",
    "TR": "tr",
    "RU": "ru",
    "JP": "ja",
    "CN": "zh",
    "TW": "zh",
    "KR": "ko",
    "AR": "es",
    "MX": "es",
    "CL": "es",
    "CO": "es",
    "IN": "hi",
    "PL": "pl",
    "SE": "sv",
    "NO": "no",
    "DK": "da",
    "FI": "fi",
    "CZ": "cs",
    "GR": "el",
    "IL": "he",
    "SA": "ar",
    "AE": "ar",
    "TH": "th",
    "VN": "vi",
    "ID": "id",
    "MY": "ms",
    "PH": "tl",
}
