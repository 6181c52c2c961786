from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class AddProductView:
    LABELS = {"name": "Name", "sku": "SKU", "price": "Price", "stock": "Stock", "category": "Category"}

    def __init__(self, parent, app):
        self.app = app
        self.form = app.product_form
        self.frame = ttk.LabelFrame(parent, text="Add Product")

        self.vars: dict[str, tk.StringVar] = {}
        self.message_var = tk.StringVar(value="")
        self._syncing = False

        grid = ttk.Frame(self.frame)
        grid.pack(fill="x", padx=10, pady=10)
        grid.columnconfigure(1, weight=1)
        grid.columnconfigure(3, weight=1)

        positions = {"name": (0, 0), "sku": (0, 2), "price": (1, 0), "stock": (1, 2), "category": (2, 0)}
        for name, (row, col) in positions.items():
            var = tk.StringVar()
            self.vars[name] = var
            ttk.Label(grid, text=self.LABELS[name]).grid(row=row, column=col, sticky="w", padx=(0, 6), pady=4)
            e = ttk.Entry(grid, textvariable=var)
            span = 3 if name == "category" else 1
            e.grid(row=row, column=col + 1, columnspan=span, sticky="ew", padx=(0, 10), pady=4)
            e.bind("<Return>", self._on_enter_submit)
            var.trace_add("write", lambda *_a, n=name: self._on_field_changed(n))

        self.save_btn = ttk.Button(self.frame, text="Save", command=self.form.submit)
        self.save_btn.pack(anchor="w", padx=10)
        ttk.Label(self.frame, textvariable=self.message_var).pack(anchor="w", padx=10, pady=(6, 10))

        self.form.subscribe(self.render)
        self.render()

    def _on_enter_submit(self, _event=None):
        self.form.submit()
        return "break"

    def _on_field_changed(self, name: str):
        if self._syncing:
            return
        self.form.update(**{name: self.vars[name].get()})

    def render(self):
        self._syncing = True
        try:
            for name, var in self.vars.items():
                value = getattr(self.form.draft, name)
                if var.get() != value:
                    var.set(value)
        finally:
            self._syncing = False

        self.save_btn.state(["disabled"] if self.form.busy else ["!disabled"])
        self.message_var.set(self.form.message)
