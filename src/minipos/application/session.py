from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from minipos.application.dispatch import Dispatcher
from minipos.application.events import Observable
from minipos.domain.cart import Cart
from minipos.domain.models import Product, coerce_number
from minipos.domain.results import ApiResult
from minipos.formatting import currency

log = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Unexpected error. See logs for details."


@dataclass
class SessionState:
    """Everything the counter screen shows. Lives only as long as the window."""

    products: list[Product] = field(default_factory=list)
    query: str = ""
    cart: Cart = field(default_factory=Cart)
    paid: str = ""
    busy: bool = False
    message: str = ""
    search_epoch: int = 0

    @property
    def filtered_products(self) -> list[Product]:
        # Filtering happens server side.
        return list(self.products)

    @property
    def total(self) -> float:
        return self.cart.total

    @property
    def change(self) -> Optional[float]:
        raw = self.paid.strip()
        if not raw:
            return None
        try:
            paid = float(raw)
        except ValueError:
            return None
        if not math.isfinite(paid):
            return None
        return paid - self.total

    @property
    def can_checkout(self) -> bool:
        return not self.busy and not self.cart.is_empty


class SessionController(Observable):
    def __init__(self, catalog_service, sales_service, dispatcher: Dispatcher, state: SessionState | None = None):
        super().__init__()
        self.catalog = catalog_service
        self.sales = sales_service
        self.dispatcher = dispatcher
        self.state = state or SessionState()

    # ---------- catalog ----------
    def load(self) -> None:
        self._fetch_products(self.state.query)

    def search(self, text: str) -> None:
        self.state.query = text
        self._notify()
        self._fetch_products(text)

    def refresh_catalog(self) -> None:
        self._fetch_products(self.state.query)

    def _fetch_products(self, query: str) -> None:
        self.state.search_epoch += 1
        epoch = self.state.search_epoch
        self.dispatcher.submit(
            lambda: self.catalog.search_products(query),
            lambda result: self._on_products(epoch, result),
            on_error=lambda err: self._on_products_error(epoch, err),
        )

    def _on_products(self, epoch: int, result: ApiResult[list[Product]]) -> None:
        if epoch != self.state.search_epoch:
            log.debug("search_stale_discarded epoch=%s latest=%s", epoch, self.state.search_epoch)
            return
        if result.ok:
            self.state.products = list(result.value or [])
        else:
            self.state.message = result.message
        self._notify()

    def _on_products_error(self, epoch: int, _err: BaseException) -> None:
        # Catalog jobs never touch the checkout busy flag.
        if epoch != self.state.search_epoch:
            return
        self.state.message = UNEXPECTED_ERROR_MESSAGE
        self._notify()

    # ---------- cart ----------
    # Cart and tendered amount are frozen while a checkout is pending.
    def add_to_cart(self, product: Product) -> bool:
        if self.state.busy:
            return False
        added = self.state.cart.add(product)
        if added:
            self._notify()
        return added

    def set_quantity(self, product_id: str, qty) -> bool:
        if self.state.busy:
            return False
        changed = self.state.cart.set_quantity(product_id, int(coerce_number(qty)))
        if changed:
            self._notify()
        return changed

    def remove_line(self, product_id: str) -> bool:
        if self.state.busy:
            return False
        removed = self.state.cart.remove(product_id)
        if removed:
            self._notify()
        return removed

    def clear_cart(self) -> bool:
        if self.state.busy:
            return False
        self.state.cart.clear()
        self._notify()
        return True

    def set_paid(self, text: str) -> bool:
        if self.state.busy:
            # re-render so the entry snaps back to the pending amount
            self._notify()
            return False
        self.state.paid = text
        self._notify()
        return True

    # ---------- checkout ----------
    def checkout(self) -> bool:
        if not self.state.can_checkout:
            return False

        self.state.message = ""
        self.state.busy = True
        self._notify()

        cart = self.state.cart.snapshot()
        paid = self.state.paid
        self.dispatcher.submit(
            lambda: self.sales.checkout(cart, paid),
            self._on_checkout_done,
            on_error=self._on_checkout_error,
        )
        return True

    def _on_checkout_done(self, result: ApiResult[dict]) -> None:
        self.state.busy = False
        if result.ok:
            change = coerce_number((result.value or {}).get("change"))
            self.state.message = f"Sale saved. Change: {currency(change)}"
            self.state.cart.clear()
            self.state.paid = ""
            self._notify()
            self.refresh_catalog()
            return
        self.state.message = result.message
        self._notify()

    def _on_checkout_error(self, _err: BaseException) -> None:
        self.state.busy = False
        self.state.message = UNEXPECTED_ERROR_MESSAGE
        self._notify()
