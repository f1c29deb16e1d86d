"""
rates.py — rate store, persistence and conversion
- RateStore: ordered code -> rate table (1 USD = rate)
- load_rates / save_rates: ~/.currency_rates.properties (CODE=rate lines)
- convert: amount FROM -> USD -> TO
- parse_amount / format_amount: user text in, display text out
"""

import logging
import math
from datetime import datetime
from pathlib import Path

from . import config
from .errors import EmptyAmountError, InvalidAmountError, RatesPersistenceError

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", "!")
SEPARATORS = ("=", ":")
KEY_SPECIALS = "\\=:#!"


def parse_rate(value):
    """Parse a rate; returns None unless it is a finite positive number."""
    text = str(value).strip()
    if "_" in text:
        return None
    try:
        rate = float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


# ---------------------------
# Rate store
# ---------------------------
class RateStore:
    """Ordered mapping of currency code to rate against the reference currency.

    Insertion order is the display order of the currency selectors.
    """

    def __init__(self, entries=()):
        self._rates = {}
        self._fill(entries)

    def _fill(self, entries):
        if hasattr(entries, "items"):
            entries = entries.items()
        for code, rate in entries:
            self._rates[code] = float(rate)

    def codes(self):
        return list(self._rates)

    def items(self):
        return list(self._rates.items())

    def rate(self, code, default=1.0):
        return self._rates.get(code, default)

    def as_dict(self):
        return dict(self._rates)

    def copy(self):
        return RateStore(self._rates)

    def replace(self, entries):
        """Swap the whole table for ``entries`` in one step."""
        fresh = RateStore(entries)
        self._rates = fresh._rates

    def __contains__(self, code):
        return code in self._rates

    def __len__(self):
        return len(self._rates)

    def __iter__(self):
        return iter(self._rates)

    def __eq__(self, other):
        if isinstance(other, RateStore):
            return self._rates == other._rates
        if isinstance(other, dict):
            return self._rates == other
        return NotImplemented

    def __repr__(self):
        body = ", ".join(f"{c}={r}" for c, r in self._rates.items())
        return f"RateStore({body})"


def default_rates() -> RateStore:
    return RateStore(config.DEFAULT_RATES)


# ---------------------------
# Persistence
# ---------------------------
def _escape_key(code):
    return "".join("\\" + ch if ch in KEY_SPECIALS else ch for ch in code)


def _split_line(line):
    """Split at the first unescaped separator; backslash escapes are resolved in the key."""
    key = []
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line):
            key.append(line[i + 1])
            i += 2
            continue
        if ch in SEPARATORS:
            return "".join(key).strip(), line[i + 1:].strip()
        key.append(ch)
        i += 1
    return None


def parse_rates_text(text) -> RateStore:
    """Parse CODE=rate lines; malformed lines are skipped."""
    loaded = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        pair = _split_line(line)
        if pair is None:
            logger.debug("Skipping line %d: no separator", lineno)
            continue
        code, value = pair
        rate = parse_rate(value)
        if not code or rate is None:
            logger.debug("Skipping line %d: %r", lineno, line)
            continue
        loaded[code.upper()] = rate
    return RateStore(loaded)


def load_rates(path=None) -> RateStore:
    """Read persisted rates, falling back to the defaults.

    Never raises: a missing file, unreadable file or one without a single
    valid entry all yield ``default_rates()``.
    """
    path = Path(path) if path is not None else config.rates_file()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No rates file at %s, using defaults", path)
        return default_rates()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read rates from %s: %s", path, e)
        return default_rates()
    store = parse_rates_text(text)
    if not store:
        logger.warning("Rates file %s has no valid entries, using defaults", path)
        return default_rates()
    logger.info("Loaded %d rates from %s", len(store), path)
    return store


def dump_rates_text(store, now=None) -> str:
    now = now or datetime.now()
    lines = [f"# {config.RATES_FILE_HEADER}", f"# {now.strftime('%a %b %d %H:%M:%S %Y')}"]
    for code, rate in store.items():
        lines.append(f"{_escape_key(code)}={rate!r}")
    return "\n".join(lines) + "\n"


def save_rates(store, path=None):
    """Write ``store`` to disk; raises RatesPersistenceError on failure."""
    path = Path(path) if path is not None else config.rates_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_rates_text(store), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to save rates to %s: %s", path, e)
        raise RatesPersistenceError(path, e) from e
    logger.info("Saved %d rates to %s", len(store), path)


# ---------------------------
# Conversion
# ---------------------------
def convert(amount, from_code, to_code, store) -> float:
    """Convert ``amount`` through the reference currency.

    Codes missing from ``store`` count as rate 1.0.
    """
    for code in (from_code, to_code):
        if code not in store:
            logger.warning("Unknown currency %r, converting at rate 1.0", code)
    in_reference = amount / store.rate(from_code)
    return in_reference * store.rate(to_code)


def parse_amount(text) -> float:
    text = (text or "").strip()
    if not text:
        raise EmptyAmountError()
    if "_" in text:
        raise InvalidAmountError(text)
    try:
        amount = float(text.replace(",", ""))
    except ValueError:
        raise InvalidAmountError(text) from None
    if not math.isfinite(amount) or amount < 0:
        raise InvalidAmountError(text)
    return amount


def format_amount(value) -> str:
    return f"{value:,.2f}"


def format_result(amount, from_code, converted, to_code) -> str:
    return f"{format_amount(amount)} {from_code} → {format_amount(converted)} {to_code}"
