"""
session.py — state & commands of the main converter form
The Tk window only forwards widget values here and renders what comes back.
"""

import logging

from . import config
from .errors import NoCurrenciesError
from .rates import convert, format_result, parse_amount

logger = logging.getLogger(__name__)


class ConverterSession:
    def __init__(self, store):
        self.store = store
        self.amount_text = ""
        self.result = None
        codes = store.codes()
        self.from_code = self._pick(config.DEFAULT_FROM, codes)
        self.to_code = self._pick(config.DEFAULT_TO, codes)

    @staticmethod
    def _pick(code, codes):
        if code in codes:
            return code
        return codes[0] if codes else None

    @property
    def codes(self):
        return self.store.codes()

    @property
    def is_converted(self):
        return self.result is not None

    def convert(self) -> str:
        """Parse the amount, convert and remember the formatted result.

        Raises EmptyAmountError / InvalidAmountError / NoCurrenciesError
        without touching the current result.
        """
        amount = parse_amount(self.amount_text)
        if not self.store or self.from_code is None or self.to_code is None:
            raise NoCurrenciesError()
        converted = convert(amount, self.from_code, self.to_code, self.store)
        self.result = format_result(amount, self.from_code, converted, self.to_code)
        logger.debug("Converted: %s", self.result)
        return self.result

    def clear(self):
        self.amount_text = ""
        self.result = None

    def swap(self):
        self.from_code, self.to_code = self.to_code, self.from_code

    def refresh_codes(self):
        """Re-pick selections after the rate table changed."""
        codes = self.store.codes()
        self.from_code = self._pick(self.from_code, codes)
        self.to_code = self._pick(self.to_code, codes)
        return codes
