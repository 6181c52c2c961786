from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
import logging

from minipos.application.forms import AddProductForm
from minipos.application.recent_sales import RecentSalesState
from minipos.application.session import SessionController
from minipos.ui.views.add_product_view import AddProductView
from minipos.ui.views.recent_sales_view import RecentSalesView
from minipos.ui.views.session_view import SessionView

log = logging.getLogger(__name__)


class App(tk.Tk):
    POLL_MS = 50

    def __init__(self, container, logs_dir: str, exports_dir: str = ""):
        super().__init__()
        self.title("School Mini-Market POS")
        self.geometry("1280x800")
        self.minsize(1080, 680)

        self.container = container
        self.dispatcher = container.dispatcher
        self.logs_dir = logs_dir
        self.exports_dir = exports_dir

        self.session = SessionController(container.catalog, container.sales, self.dispatcher)
        self.product_form = AddProductForm(container.catalog, self.dispatcher, on_added=self.session.refresh_catalog)
        self.recent_sales = RecentSalesState(container.sales, self.dispatcher, container.excel)

        # UI state
        self.status_var = tk.StringVar(value="")
        self._toast_after_id = None
        self._poll_after_id = None

        self._build_styles()
        self._build_topbar()

        main = ttk.Frame(self)
        main.pack(fill="both", expand=True, padx=12, pady=(0, 8))

        self.session_view = SessionView(main, self)
        self.session_view.frame.pack(fill="both", expand=True)

        bottom = ttk.Frame(main)
        bottom.pack(fill="both", expand=True, pady=(10, 0))
        bottom.columnconfigure(0, weight=1)
        bottom.columnconfigure(1, weight=1)
        bottom.rowconfigure(0, weight=1)

        self.add_product_view = AddProductView(bottom, self)
        self.add_product_view.frame.grid(row=0, column=0, sticky="nsew", padx=(0, 6))

        self.recent_sales_view = RecentSalesView(bottom, self)
        self.recent_sales_view.frame.grid(row=0, column=1, sticky="nsew", padx=(6, 0))

        self._build_status_bar()
        self.protocol("WM_DELETE_WINDOW", self.on_close)

        self.session.load()
        self.recent_sales.load()
        self._schedule_poll()
        self.toast("Ready.", kind="info", ms=1200)

    def _build_styles(self):
        style = ttk.Style(self)
        try:
            style.configure("Big.TButton", padding=(14, 10))
            style.configure("Title.TLabel", font=("Segoe UI", 14, "bold"))
            style.configure("Total.TLabel", font=("Segoe UI", 11, "bold"))
            style.configure("Modern.Treeview", rowheight=24)
        except tk.TclError as e:
            log.exception("UI style setup failed: %s", e)

    def _build_topbar(self):
        top = ttk.Frame(self)
        top.pack(fill="x", padx=12, pady=10)

        ttk.Label(top, text="School Mini-Market POS", style="Title.TLabel").pack(side="left")
        ttk.Button(top, text="🔄 Refresh products", command=self.session.refresh_catalog).pack(side="left", padx=10)
        ttk.Label(top, text=f"Backend: {self.container.settings.backend_url}").pack(side="right")

    def _build_status_bar(self):
        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=12, pady=(0, 10))
        ttk.Label(bar, textvariable=self.status_var).pack(side="left")
        ttk.Label(bar, text=f"Logs: {self.logs_dir}").pack(side="right")

    def toast(self, msg: str, kind: str = "info", ms: int = 2500):
        prefix = {"info": "ℹ ", "success": "✅ ", "warn": "⚠ ", "error": "❌ "}.get(kind, "")
        self.status_var.set(prefix + msg)
        if self._toast_after_id is not None:
            try:
                self.after_cancel(self._toast_after_id)
            except tk.TclError:
                pass
        self._toast_after_id = self.after(ms, lambda: self.status_var.set(""))

    def handle_error(self, title: str, err: Exception, toast_text: str):
        log.exception("%s: %s", title, err)
        messagebox.showerror(title, str(err), parent=self)
        self.toast(toast_text, kind="error")

    # ---------- background results ----------
    def _schedule_poll(self):
        self._poll_after_id = self.after(self.POLL_MS, self._poll)

    def _poll(self):
        poll = getattr(self.dispatcher, "poll", None)
        if poll is not None:
            try:
                poll()
            except Exception as e:
                log.exception("UI update after background call failed: %s", e)
                self.toast("UI update failed.", kind="error")
        self._schedule_poll()

    def on_close(self):
        if self._poll_after_id is not None:
            self.after_cancel(self._poll_after_id)
        shutdown = getattr(self.dispatcher, "shutdown", None)
        if shutdown is not None:
            shutdown()
        self.destroy()
