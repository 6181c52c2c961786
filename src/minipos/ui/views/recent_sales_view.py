from __future__ import annotations

import tkinter as tk
from tkinter import ttk, filedialog
from datetime import date

from minipos.formatting import currency, local_timestamp


class RecentSalesView:
    def __init__(self, parent, app):
        self.app = app
        self.state = app.recent_sales
        self.frame = ttk.LabelFrame(parent, text="Recent Sales")

        self.info_var = tk.StringVar(value="")

        cols = ("total", "when", "items")
        self.tree = ttk.Treeview(self.frame, columns=cols, show="headings", height=6, style="Modern.Treeview")
        heads = {"total": "Total", "when": "Date", "items": "Items"}
        widths = {"total": 90, "when": 140, "items": 360}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="w")
        self.tree.pack(fill="both", expand=True, padx=10, pady=10)

        row = ttk.Frame(self.frame)
        row.pack(fill="x", padx=10, pady=(0, 10))
        ttk.Label(row, textvariable=self.info_var, foreground="#64748b").pack(side="left")
        ttk.Button(row, text="Export to Excel", command=self.export_excel).pack(side="right")

        self.state.subscribe(self.render)
        self.render()

    def render(self):
        for item in self.tree.get_children():
            self.tree.delete(item)
        for s in self.state.sales:
            self.tree.insert("", "end", values=(currency(s.total), local_timestamp(s.created_at), s.items_summary()))

        if self.state.loading:
            self.info_var.set("Loading...")
        elif self.state.message:
            self.info_var.set(self.state.message)
        elif self.state.is_empty:
            self.info_var.set("No sales yet")
        else:
            self.info_var.set(f"{len(self.state.sales)} sales")

    def export_excel(self):
        path = filedialog.asksaveasfilename(
            title="Save sales as",
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx")],
            initialdir=self.app.exports_dir or None,
            initialfile=f"recent_sales_{date.today().isoformat()}.xlsx",
        )
        if not path:
            return
        try:
            count = self.state.export_excel(path)
            self.app.toast(f"Exported {count} sales.", kind="success")
        except Exception as e:
            self.app.handle_error("Export error", e, "Excel export failed.")
