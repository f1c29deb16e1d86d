"""
app.py — Currency Converter GUI
- customtkinter UI
- Converter form: amount, From/To selectors, swap, result
- Manage Rates dialog (modal): add / remove / edit / reset defaults / save & close
- Rates persisted to ~/.currency_rates.properties
Run: python -m currency_converter
"""

import logging
from tkinter import messagebox

try:
    import customtkinter as ctk
except Exception as e:
    raise RuntimeError("customtkinter is required. Install: pip install customtkinter") from e

from . import config
from .editor import CODE, RATE, RateTable
from .errors import AmountError, EmptyAmountError, NoCurrenciesError
from .logs import configure_logging, log_unhandled
from .rates import load_rates
from .session import ConverterSession

logger = logging.getLogger(__name__)


# ---------------------------
# Main window
# ---------------------------
class CurrencyConverterApp:
    def __init__(self, root, store):
        self.root = root
        self.store = store
        self.session = ConverterSession(store)

        root.title(config.APP_TITLE)
        root.geometry(config.WINDOW_GEOMETRY)
        root.minsize(450, 220)

        self.main_frame = ctk.CTkFrame(root, corner_radius=12)
        self.main_frame.pack(fill="both", expand=True, padx=12, pady=12)

        header = ctk.CTkLabel(self.main_frame, text=config.APP_TITLE, font=("Roboto", 20, "bold"))
        header.pack(pady=(8,4))

        self.build_form()
        self.build_footer()
        self.bind_keys()
        self.sync_to_widgets()

    def build_form(self):
        form = ctk.CTkFrame(self.main_frame, fg_color="transparent")
        form.pack(fill="x", padx=12, pady=6)
        form.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(form, text="Amount:").grid(row=0, column=0, padx=6, pady=6, sticky="w")
        self.amount_entry = ctk.CTkEntry(form, placeholder_text="Enter amount to convert")
        self.amount_entry.grid(row=0, column=1, columnspan=2, padx=6, pady=6, sticky="ew")
        self.amount_entry.bind("<Return>", lambda e: self.do_convert())

        ctk.CTkLabel(form, text="From:").grid(row=1, column=0, padx=6, pady=6, sticky="w")
        self.from_cb = ctk.CTkComboBox(form, values=self.session.codes, state="readonly")
        self.from_cb.grid(row=1, column=1, padx=6, pady=6, sticky="ew")
        swap_btn = ctk.CTkButton(form, text="⇄", width=40, command=self.do_swap)
        swap_btn.grid(row=1, column=2, padx=6, pady=6)

        ctk.CTkLabel(form, text="To:").grid(row=2, column=0, padx=6, pady=6, sticky="w")
        self.to_cb = ctk.CTkComboBox(form, values=self.session.codes, state="readonly")
        self.to_cb.grid(row=2, column=1, columnspan=2, padx=6, pady=6, sticky="ew")

    def build_footer(self):
        footer = ctk.CTkFrame(self.main_frame, fg_color="transparent")
        footer.pack(fill="x", padx=12, pady=(6,8))

        ctk.CTkButton(footer, text="Convert", width=100, command=self.do_convert).pack(side="left", padx=4)
        ctk.CTkButton(footer, text="Clear", width=80, fg_color="#555", hover_color="#777", command=self.do_clear).pack(side="left", padx=4)
        ctk.CTkButton(footer, text="Manage Rates", width=120, command=self.open_rate_editor).pack(side="left", padx=4)

        self.result_lbl = ctk.CTkLabel(self.main_frame, text="", font=("Roboto", 14, "bold"))
        self.result_lbl.pack(pady=(4,10))

    def bind_keys(self):
        self.root.bind("<Alt-c>", lambda e: self.do_convert())
        self.root.bind("<Alt-l>", lambda e: self.do_clear())
        self.root.bind("<Alt-m>", lambda e: self.open_rate_editor())

    # ---------------------------
    # Widget <-> session
    # ---------------------------
    def sync_from_widgets(self):
        self.session.amount_text = self.amount_entry.get()
        self.session.from_code = self.from_cb.get() or None
        self.session.to_code = self.to_cb.get() or None

    def sync_to_widgets(self):
        codes = self.session.codes
        self.from_cb.configure(values=codes)
        self.to_cb.configure(values=codes)
        self.from_cb.set(self.session.from_code or "")
        self.to_cb.set(self.session.to_code or "")
        self.result_lbl.configure(text=self.session.result or "")

    # ---------------------------
    # Commands
    # ---------------------------
    def do_convert(self):
        self.sync_from_widgets()
        try:
            self.session.convert()
        except EmptyAmountError as e:
            messagebox.showwarning("Input required", str(e), parent=self.root)
            return
        except AmountError as e:
            messagebox.showerror("Invalid number", str(e), parent=self.root)
            return
        except NoCurrenciesError as e:
            messagebox.showwarning("No currencies", str(e), parent=self.root)
            return
        self.result_lbl.configure(text=self.session.result)

    def do_clear(self):
        self.session.clear()
        self.amount_entry.delete(0, "end")
        self.result_lbl.configure(text="")

    def do_swap(self):
        self.sync_from_widgets()
        self.session.swap()
        self.from_cb.set(self.session.from_code or "")
        self.to_cb.set(self.session.to_code or "")

    # ---------------------------
    # Manage Rates dialog
    # ---------------------------
    def open_rate_editor(self):
        self.sync_from_widgets()
        table = RateTable(self.store)
        state = {"selected": None}
        cells = []  # (index, code_entry, rate_entry)

        win = ctk.CTkToplevel(self.root)
        win.title("Manage Rates")
        win.geometry(config.EDITOR_GEOMETRY)
        win.transient(self.root)
        win.grab_set()

        heads = ctk.CTkFrame(win, fg_color="transparent")
        heads.pack(fill="x", padx=12, pady=(10,0))
        ctk.CTkLabel(heads, text="Currency", width=160, anchor="w", font=("Roboto", 12, "bold")).pack(side="left", padx=6)
        ctk.CTkLabel(heads, text=f"Rate (1 {config.REFERENCE_CURRENCY} = rate)", anchor="w", font=("Roboto", 12, "bold")).pack(side="left", padx=6)

        grid = ctk.CTkScrollableFrame(win, height=240)
        grid.pack(fill="both", expand=True, padx=12, pady=6)

        def commit_code(index, entry):
            if not entry.winfo_exists():
                return
            table.edit_cell(index, CODE, entry.get())

        def commit_rate(index, entry):
            if not entry.winfo_exists():
                return
            if not table.edit_cell(index, RATE, entry.get()):
                entry.delete(0, "end")
                entry.insert(0, repr(table[index].rate))

        def commit_all():
            for index, code_e, rate_e in cells:
                commit_code(index, code_e)
                commit_rate(index, rate_e)

        def select(index):
            state["selected"] = index
            for i, code_e, rate_e in cells:
                color = "#3a7ebf" if i == index else "#565b5e"
                code_e.configure(border_color=color)
                rate_e.configure(border_color=color)

        def render_rows():
            for w in grid.winfo_children():
                w.destroy()
            cells.clear()
            for index, row in enumerate(table.rows):
                line = ctk.CTkFrame(grid, fg_color="transparent")
                line.pack(fill="x", pady=2)
                code_e = ctk.CTkEntry(line, width=160)
                code_e.insert(0, row.code)
                code_e.pack(side="left", padx=6)
                rate_e = ctk.CTkEntry(line, width=200)
                rate_e.insert(0, repr(row.rate))
                rate_e.pack(side="left", padx=6)

                for entry, commit in ((code_e, commit_code), (rate_e, commit_rate)):
                    entry.bind("<FocusIn>", lambda e, i=index: select(i))
                    entry.bind("<FocusOut>", lambda e, i=index, w=entry, c=commit: c(i, w))
                    entry.bind("<Return>", lambda e, i=index, w=entry, c=commit: c(i, w))
                cells.append((index, code_e, rate_e))
            if state["selected"] is not None and state["selected"] < len(cells):
                select(state["selected"])

        def add_row():
            commit_all()
            index = table.add_row()
            render_rows()
            select(index)
            code_e = cells[index][1]
            code_e.focus_set()
            code_e.select_range(0, "end")

        def remove_row():
            commit_all()
            if table.remove_row(state["selected"]):
                state["selected"] = None
                render_rows()

        def reset_defaults():
            if messagebox.askyesno("Confirm", "Reset to built-in default rates?", parent=win):
                table.reset_to_defaults()
                state["selected"] = None
                render_rows()

        def save_and_close():
            commit_all()
            error = table.save_to(self.store)
            if error is not None:
                messagebox.showerror("Error", str(error), parent=win)
            self.session.refresh_codes()
            self.sync_to_widgets()
            win.grab_release()
            win.destroy()

        def dismiss():
            logger.debug("Rate editor dismissed, %d working rows discarded", len(table))
            win.grab_release()
            win.destroy()

        render_rows()

        controls = ctk.CTkFrame(win, fg_color="transparent")
        controls.pack(fill="x", padx=12, pady=(0,10))
        ctk.CTkButton(controls, text="Add", width=80, command=add_row).pack(side="left", padx=4)
        ctk.CTkButton(controls, text="Remove", width=80, fg_color="#f06", hover_color="#f38", command=remove_row).pack(side="left", padx=4)
        ctk.CTkButton(controls, text="Reset Defaults", width=120, fg_color="#555", hover_color="#777", command=reset_defaults).pack(side="left", padx=4)
        ctk.CTkButton(controls, text="Save & Close", width=120, command=save_and_close).pack(side="left", padx=4)

        win.protocol("WM_DELETE_WINDOW", dismiss)
        self.root.wait_window(win)


# ---------------------------
# Run app
# ---------------------------
def main():
    configure_logging()
    ctk.set_appearance_mode(config.APPEARANCE_MODE)
    ctk.set_default_color_theme(config.COLOR_THEME)
    store = load_rates()
    root = ctk.CTk()
    root.report_callback_exception = log_unhandled
    CurrencyConverterApp(root, store)
    root.mainloop()


if __name__ == "__main__":
    main()
