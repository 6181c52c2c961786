from __future__ import annotations

import logging

from minipos.domain.cart import Cart
from minipos.domain.models import Sale, coerce_number
from minipos.domain.results import ApiResult
from minipos.services.base import call_backend

log = logging.getLogger("minipos.sales")


class SalesService:
    def __init__(self, repo):
        self.repo = repo

    def checkout(self, cart: Cart, paid_text: str) -> ApiResult[dict]:
        """
        Sends the whole cart and the tendered amount. The backend computes
        the sale, decrements stock and answers with at least ``change``.
        """
        items = cart.to_payload()
        paid = coerce_number(paid_text)
        result = call_backend(lambda: self.repo.create_sale(items, paid), "checkout", "Checkout failed")
        if result.ok:
            log.info(
                "sale_created sale_id=%s lines=%s total=%.2f paid=%.2f change=%s",
                result.value.get("_id", result.value.get("id")), len(items), cart.total, paid, result.value.get("change"),
            )
        else:
            log.warning("sale_failed kind=%s lines=%s message=%s", result.error_kind.value, len(items), result.message)
        return result

    def list_recent_sales(self) -> ApiResult[list[Sale]]:
        return call_backend(self.repo.list_sales, "list_sales", "Could not load sales.")
