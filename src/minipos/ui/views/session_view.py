from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from minipos.formatting import currency


class SessionView:
    def __init__(self, parent, app):
        self.app = app
        self.controller = app.session
        self.frame = ttk.Frame(parent)

        self.search_var = tk.StringVar()
        self.paid_var = tk.StringVar()
        self.qty_var = tk.StringVar(value="1")
        self.total_var = tk.StringVar(value=currency(0))
        self.change_var = tk.StringVar(value="")
        self.message_var = tk.StringVar(value="")

        self._products_by_iid: dict = {}
        self._rendered_products = None
        self._syncing = False

        self._build()
        self.controller.subscribe(self.render)
        self.render()

    def _build(self):
        tab = self.frame
        tab.columnconfigure(0, weight=2)
        tab.columnconfigure(1, weight=1)
        tab.rowconfigure(0, weight=1)

        left = ttk.LabelFrame(tab, text="Products")
        left.grid(row=0, column=0, sticky="nsew", padx=(0, 6))

        search = ttk.Entry(left, textvariable=self.search_var)
        search.pack(fill="x", padx=10, pady=(10, 6))
        ttk.Label(left, text="Search name, SKU or barcode. Double click or Enter adds to cart.").pack(anchor="w", padx=10)
        self.search_var.trace_add("write", lambda *_: self.controller.search(self.search_var.get()))

        cols = ("name", "sku", "stock", "price")
        self.products_tree = ttk.Treeview(left, columns=cols, show="headings", height=12, style="Modern.Treeview")
        heads = {"name": "Name", "sku": "SKU", "stock": "Stock", "price": "Price"}
        widths = {"name": 320, "sku": 120, "stock": 80, "price": 100}
        for c in cols:
            self.products_tree.heading(c, text=heads[c])
            self.products_tree.column(c, width=widths[c], anchor="w")
        self.products_tree.tag_configure("out", foreground="#94a3b8")
        self.products_tree.pack(fill="both", expand=True, padx=10, pady=10)
        self.products_tree.bind("<Double-1>", lambda _e: self.add_selected())
        self.products_tree.bind("<Return>", lambda _e: self.add_selected())

        ttk.Button(left, text="Add to cart", style="Big.TButton", command=self.add_selected)\
            .pack(anchor="e", padx=10, pady=(0, 10))

        right = ttk.LabelFrame(tab, text="Cart")
        right.grid(row=0, column=1, sticky="nsew", padx=(6, 0))

        cols = ("name", "price", "qty", "line")
        self.cart_tree = ttk.Treeview(right, columns=cols, show="headings", height=8, style="Modern.Treeview")
        heads = {"name": "Item", "price": "Price", "qty": "Qty", "line": "Line"}
        widths = {"name": 180, "price": 80, "qty": 50, "line": 90}
        for c in cols:
            self.cart_tree.heading(c, text=heads[c])
            self.cart_tree.column(c, width=widths[c], anchor="w")
        self.cart_tree.pack(fill="both", expand=True, padx=10, pady=10)
        self.cart_tree.bind("<<TreeviewSelect>>", self._on_cart_select)
        self.cart_tree.bind("<Delete>", lambda _e: self.remove_selected())

        self.empty_label = ttk.Label(right, text="No items", foreground="#94a3b8")

        edit = ttk.Frame(right)
        edit.pack(fill="x", padx=10)
        ttk.Label(edit, text="Qty").pack(side="left")
        qty = ttk.Spinbox(edit, from_=1, to=9999, textvariable=self.qty_var, width=6)
        qty.pack(side="left", padx=6)
        qty.bind("<Return>", lambda _e: self.apply_quantity())
        ttk.Button(edit, text="Set", command=self.apply_quantity).pack(side="left")
        ttk.Button(edit, text="Remove", command=self.remove_selected).pack(side="left", padx=6)
        ttk.Button(edit, text="Clear", command=self.controller.clear_cart).pack(side="left")

        totals = ttk.Frame(right)
        totals.pack(fill="x", padx=10, pady=(10, 4))
        ttk.Label(totals, text="Total").grid(row=0, column=0, sticky="w")
        ttk.Label(totals, textvariable=self.total_var, style="Total.TLabel").grid(row=0, column=1, sticky="e")
        ttk.Label(totals, text="Change").grid(row=1, column=0, sticky="w")
        ttk.Label(totals, textvariable=self.change_var).grid(row=1, column=1, sticky="e")
        totals.columnconfigure(1, weight=1)

        ttk.Label(right, text="Paid amount").pack(anchor="w", padx=10)
        paid = ttk.Entry(right, textvariable=self.paid_var)
        paid.pack(fill="x", padx=10, pady=(0, 6))
        paid.bind("<Return>", lambda _e: self.controller.checkout())
        self.paid_var.trace_add("write", self._on_paid_changed)

        self.checkout_btn = ttk.Button(right, text="Checkout", style="Big.TButton", command=self.controller.checkout)
        self.checkout_btn.pack(fill="x", padx=10, pady=(0, 6))

        ttk.Label(right, textvariable=self.message_var, wraplength=320, anchor="center")\
            .pack(fill="x", padx=10, pady=(0, 10))

    # ---------- events ----------
    def add_selected(self):
        sel = self.products_tree.selection()
        if not sel:
            return
        product = self._products_by_iid.get(sel[0])
        if product is None:
            return
        if self.controller.state.busy:
            self.app.toast("Checkout in progress.", kind="warn", ms=1500)
        elif not self.controller.add_to_cart(product):
            self.app.toast(f"No more stock for {product.name}.", kind="warn", ms=1500)

    def _selected_line_id(self):
        sel = self.cart_tree.selection()
        return sel[0] if sel else None

    def _on_cart_select(self, _evt=None):
        pid = self._selected_line_id()
        line = self.controller.state.cart.get(pid) if pid else None
        if line is not None:
            self.qty_var.set(str(line.quantity))

    def apply_quantity(self):
        pid = self._selected_line_id()
        if pid is None:
            return
        self.controller.set_quantity(pid, self.qty_var.get())

    def remove_selected(self):
        pid = self._selected_line_id()
        if pid is None:
            return
        self.controller.remove_line(pid)

    def _on_paid_changed(self, *_):
        if self._syncing:
            return
        self.controller.set_paid(self.paid_var.get())

    # ---------- render ----------
    def render(self):
        state = self.controller.state

        if state.products is not self._rendered_products:
            self._render_products(state.filtered_products)
            self._rendered_products = state.products

        self._render_cart()

        self.total_var.set(currency(state.total))
        change = state.change
        self.change_var.set("" if change is None else currency(change))

        if self.paid_var.get() != state.paid:
            self._syncing = True
            try:
                self.paid_var.set(state.paid)
            finally:
                self._syncing = False

        self.checkout_btn.configure(text="Processing..." if state.busy else "Checkout")
        self.checkout_btn.state(["!disabled"] if state.can_checkout else ["disabled"])
        self.message_var.set(state.message)

    def _render_products(self, products):
        for item in self.products_tree.get_children():
            self.products_tree.delete(item)
        self._products_by_iid = {}
        for p in products:
            iid = self.products_tree.insert(
                "", "end",
                values=(p.name, p.sku, p.stock, currency(p.price)),
                tags=("out",) if p.stock <= 0 else (),
            )
            self._products_by_iid[iid] = p

    def _render_cart(self):
        cart = self.controller.state.cart
        selected = self._selected_line_id()

        for item in self.cart_tree.get_children():
            self.cart_tree.delete(item)
        for line in cart:
            self.cart_tree.insert(
                "", "end", iid=line.product_id,
                values=(line.name, currency(line.price), line.quantity, currency(line.line_total)),
            )

        if selected and selected in cart:
            self.cart_tree.selection_set(selected)

        if cart.is_empty:
            self.empty_label.pack(before=self.cart_tree, anchor="w", padx=10)
        else:
            self.empty_label.pack_forget()
