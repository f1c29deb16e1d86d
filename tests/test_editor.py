import pytest

from currency_converter import config
from currency_converter.editor import CODE, RATE, RateTable
from currency_converter.errors import RatesPersistenceError
from currency_converter.rates import RateStore, default_rates, load_rates, save_rates


@pytest.fixture
def table(store):
    return RateTable(store)


class TestRateTable:
    """Tests for the Manage Rates working copy."""

    def test_rows_copied_in_order(self, table, store):
        assert [row.code for row in table.rows] == store.codes()

    def test_working_copy_is_isolated(self, table, store):
        table.edit_cell(0, RATE, "2.5")
        table.remove_row(1)
        assert store == default_rates()

    def test_add_row_appends_placeholder(self, table):
        index = table.add_row()
        assert index == len(table) - 1
        assert table[index].code == config.NEW_ROW_CODE
        assert table[index].rate == 1.0

    def test_remove_row(self, table):
        table.remove_row(0)
        assert table[0].code == "EUR"

    @pytest.mark.parametrize("index", [-1, 99, None])
    def test_remove_invalid_index_is_noop(self, table, index):
        before = len(table)
        assert table.remove_row(index) is False
        assert len(table) == before

    def test_edit_code_keeps_raw_text(self, table):
        assert table.edit_cell(1, CODE, "  sek ")
        assert table[1].code == "  sek "

    def test_edit_rate(self, table):
        assert table.edit_cell(1, RATE, "0.95")
        assert table[1].rate == 0.95

    @pytest.mark.parametrize("value", ["abc", "", "-1", "0", "nan", "1_000"])
    def test_rejected_rate_keeps_prior_value(self, table, value):
        assert table.edit_cell(1, RATE, value) is False
        assert table[1].rate == 0.92

    def test_edit_out_of_range_is_noop(self, table):
        assert table.edit_cell(42, CODE, "XYZ") is False

    def test_unknown_field(self, table):
        with pytest.raises(ValueError):
            table.edit_cell(0, "symbol", "$")

    def test_reset_to_defaults(self):
        table = RateTable(RateStore({"SEK": 10.0}))
        table.reset_to_defaults()
        assert [(r.code, r.rate) for r in table.rows] == list(config.DEFAULT_RATES)


class TestApply:
    """Tests for committing the working copy into the live store."""

    def test_codes_trimmed_and_uppercased(self, table, store):
        index = table.add_row()
        table.edit_cell(index, CODE, "  sek ")
        table.edit_cell(index, RATE, "10.5")
        table.apply_to(store)
        assert store.rate("SEK") == 10.5

    def test_blank_codes_dropped(self, store):
        table = RateTable(store)
        table.edit_cell(0, CODE, "   ")
        table.apply_to(store)
        assert "USD" not in store
        assert "" not in store

    def test_duplicate_codes_last_wins(self):
        store = RateStore({"USD": 1.0})
        table = RateTable(store)
        index = table.add_row()
        table.edit_cell(index, CODE, "usd")
        table.edit_cell(index, RATE, "1.5")
        table.apply_to(store)
        assert store == {"USD": 1.5}

    def test_remove_all_rows_gives_empty_store(self, table, store):
        while len(table):
            table.remove_row(0)
        table.apply_to(store)
        assert len(store) == 0

    def test_reset_then_save_persists_defaults(self, rates_file):
        store = RateStore({"SEK": 10.0})
        table = RateTable(store)
        table.reset_to_defaults()
        table.apply_to(store)
        save_rates(store)
        assert load_rates() == default_rates()
        assert load_rates().codes() == default_rates().codes()

    def test_saved_empty_store_loads_as_defaults(self, rates_file, store):
        table = RateTable(store)
        while table.remove_row(0):
            pass
        table.apply_to(store)
        save_rates(store)
        assert load_rates() == default_rates()

    @pytest.mark.parametrize("code", ["a=b", "x:y", "#ab", "!ab"])
    def test_saved_special_code_survives_reload(self, rates_file, code):
        store = RateStore({"USD": 1.0})
        table = RateTable(store)
        index = table.add_row()
        table.edit_cell(index, CODE, code)
        table.apply_to(store)
        save_rates(store)
        assert load_rates() == {"USD": 1.0, code.upper(): 1.0}


class TestSaveTo:
    """Tests for Save & Close: apply to the live store, then persist."""

    def test_save_to_persists(self, rates_file, store):
        table = RateTable(store)
        table.edit_cell(1, RATE, "0.95")
        assert table.save_to(store) is None
        assert load_rates().rate("EUR") == 0.95

    def test_failed_save_keeps_live_update(self, tmp_path, store):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        table = RateTable(store)
        table.remove_row(0)
        index = table.add_row()
        table.edit_cell(index, CODE, " sek ")
        table.edit_cell(index, RATE, "10.5")

        error = table.save_to(store, blocker / "rates.properties")

        assert isinstance(error, RatesPersistenceError)
        assert "USD" not in store
        assert store.rate("SEK") == 10.5
        assert store.codes()[-1] == "SEK"
