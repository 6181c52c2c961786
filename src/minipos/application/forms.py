from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Callable, Optional

from minipos.application.dispatch import Dispatcher
from minipos.application.events import Observable
from minipos.application.session import UNEXPECTED_ERROR_MESSAGE
from minipos.domain.models import Product, ProductDraft
from minipos.domain.results import ApiResult

log = logging.getLogger(__name__)

DRAFT_FIELDS = tuple(f.name for f in fields(ProductDraft))


class AddProductForm(Observable):
    """Draft of a new catalog product; no client-side validation beyond number coercion."""

    def __init__(self, catalog_service, dispatcher: Dispatcher, on_added: Optional[Callable[[], None]] = None):
        super().__init__()
        self.catalog = catalog_service
        self.dispatcher = dispatcher
        self.on_added = on_added
        self.draft = ProductDraft()
        self.message = ""
        self.busy = False

    def update(self, **values: str) -> None:
        unknown = set(values) - set(DRAFT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown product fields: {', '.join(sorted(unknown))}")
        self.draft = replace(self.draft, **values)
        self._notify()

    def submit(self) -> bool:
        if self.busy:
            return False
        self.message = ""
        self.busy = True
        self._notify()

        draft = self.draft
        self.dispatcher.submit(
            lambda: self.catalog.create_product(draft),
            self._on_submitted,
            on_error=self._on_unexpected_error,
        )
        return True

    def _on_submitted(self, result: ApiResult[Product]) -> None:
        self.busy = False
        if result.ok:
            self.message = "Product added"
            self.draft = ProductDraft()
            self._notify()
            if self.on_added is not None:
                self.on_added()
            return
        self.message = result.message
        self._notify()

    def _on_unexpected_error(self, _err: BaseException) -> None:
        self.busy = False
        self.message = UNEXPECTED_ERROR_MESSAGE
        self._notify()
