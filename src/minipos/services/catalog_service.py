from __future__ import annotations

import logging

from minipos.domain.models import Product, ProductDraft, coerce_number
from minipos.domain.results import ApiResult
from minipos.services.base import call_backend

log = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, repo):
        self.repo = repo

    def search_products(self, query: str = "") -> ApiResult[list[Product]]:
        return call_backend(lambda: self.repo.list_products(query), "search", "Could not load products.")

    def build_payload(self, draft: ProductDraft) -> dict:
        return {
            "name": draft.name,
            "sku": draft.sku,
            "price": coerce_number(draft.price),
            # Fractional stock is truncated toward zero.
            "stock": int(coerce_number(draft.stock)),
            "category": draft.category,
        }

    def create_product(self, draft: ProductDraft) -> ApiResult[Product]:
        payload = self.build_payload(draft)
        result = call_backend(lambda: self.repo.create_product(payload), "create_product", "Failed to add product.")
        if result.ok:
            log.info("product_created id=%s sku=%s", result.value.id, result.value.sku)
        return result
