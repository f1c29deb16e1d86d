"""
currency_converter — desktop currency converter with an editable rate table.
"""

__version__ = "1.0.0"
