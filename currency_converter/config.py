"""
config.py — app constants & file locations
"""

import os
from pathlib import Path

# ---------------------------
# App
# ---------------------------
APP_TITLE = "Currency Converter"
WINDOW_GEOMETRY = "520x300"
EDITOR_GEOMETRY = "520x380"
APPEARANCE_MODE = "dark"
COLOR_THEME = "blue"

LOG_LEVEL = os.environ.get("CURRENCY_CONVERTER_LOG_LEVEL", "INFO").upper()

# ---------------------------
# Rates
# ---------------------------
# 1 USD = rate; illustrative snapshot, not live data
REFERENCE_CURRENCY = "USD"
DEFAULT_RATES = (
    ("USD", 1.00),
    ("EUR", 0.92),
    ("GBP", 0.79),
    ("JPY", 156.20),
    ("INR", 83.15),
    ("AUD", 1.54),
    ("CAD", 1.36),
    ("CHF", 0.91),
    ("CNY", 6.38),
)
DEFAULT_FROM = "USD"
DEFAULT_TO = "EUR"
NEW_ROW_CODE = "NEW"

RATES_FILE = Path.home() / ".currency_rates.properties"
RATES_FILE_HEADER = f"Currency rates (1 {REFERENCE_CURRENCY} = rate)"


def rates_file() -> Path:
    override = os.environ.get("CURRENCY_RATES_FILE")
    if override:
        return Path(override).expanduser()
    return RATES_FILE
