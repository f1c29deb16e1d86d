import pytest

from currency_converter.rates import default_rates


@pytest.fixture
def store():
    """Fresh copy of the built-in rates."""
    return default_rates()


@pytest.fixture
def rates_file(tmp_path, monkeypatch):
    """Rates file inside tmp_path; also wired as the default location."""
    path = tmp_path / "rates.properties"
    monkeypatch.setenv("CURRENCY_RATES_FILE", str(path))
    return path
