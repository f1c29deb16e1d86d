"""Exceptions raised by the converter core and reported by the UI."""


class CurrencyConverterError(Exception):
    """Base class for all converter errors."""


class AmountError(CurrencyConverterError, ValueError):
    pass


class EmptyAmountError(AmountError):
    def __init__(self):
        super().__init__("Please enter an amount.")


class InvalidAmountError(AmountError):
    def __init__(self, text):
        self.text = text
        super().__init__("Please enter a valid number (e.g. 1234.56).")


class NoCurrenciesError(CurrencyConverterError):
    def __init__(self):
        super().__init__("No currencies configured. Add some in Manage Rates.")


class RatesPersistenceError(CurrencyConverterError):
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to save rates: {cause}")
