"""
editor.py — working copy behind the "Manage Rates" dialog
Rows are edited freely; nothing reaches the live store until apply_to().
"""

import logging
from dataclasses import dataclass

from . import config
from .errors import RatesPersistenceError
from .rates import default_rates, parse_rate, save_rates

logger = logging.getLogger(__name__)

CODE = "code"
RATE = "rate"
FIELDS = (CODE, RATE)


@dataclass
class RateRow:
    code: str
    rate: float


class RateTable:
    """Ordered list of (code, rate) rows copied from a RateStore."""

    def __init__(self, store=None):
        self.rows = []
        if store is not None:
            self.load(store)

    def load(self, store):
        self.rows = [RateRow(code, rate) for code, rate in store.items()]

    def __len__(self):
        return len(self.rows)

    def __getitem__(self, index):
        return self.rows[index]

    def _valid(self, index):
        return 0 <= index < len(self.rows)

    def add_row(self, code=config.NEW_ROW_CODE, rate=1.0) -> int:
        self.rows.append(RateRow(code, rate))
        return len(self.rows) - 1

    def remove_row(self, index) -> bool:
        if index is None or not self._valid(index):
            return False
        del self.rows[index]
        return True

    def edit_cell(self, index, field, value) -> bool:
        """Store an edit; rejected rate input leaves the old value in place."""
        if field not in FIELDS:
            raise ValueError(f"unknown field: {field!r}")
        if not self._valid(index):
            return False
        row = self.rows[index]
        if field == CODE:
            row.code = str(value)
            return True
        rate = parse_rate(value)
        if rate is None:
            logger.debug("Rejected rate %r for row %d", value, index)
            return False
        row.rate = rate
        return True

    def reset_to_defaults(self):
        self.load(default_rates())

    def normalized(self):
        """Rows as code -> rate; blank codes dropped, later duplicates win."""
        result = {}
        for row in self.rows:
            code = row.code.strip().upper()
            if not code:
                continue
            result[code] = row.rate
        return result

    def apply_to(self, store):
        store.replace(self.normalized())
        return store

    def save_to(self, store, path=None):
        """Apply to the live store, then persist it.

        The store keeps the new rows even when writing fails; the
        RatesPersistenceError is returned for the caller to report.
        """
        self.apply_to(store)
        try:
            save_rates(store, path)
        except RatesPersistenceError as e:
            return e
        return None
