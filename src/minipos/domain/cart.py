from __future__ import annotations

from typing import Iterator

from minipos.domain.models import CartLine, Product


class Cart:
    """Session cart keyed by product id; one line per product."""

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> float:
        return sum(line.price * line.quantity for line in self._lines.values())

    def get(self, product_id: str) -> CartLine | None:
        return self._lines.get(product_id)

    def add(self, product: Product) -> bool:
        """Add one unit. Returns False when stock would be exceeded."""
        line = self._lines.get(product.id)
        qty = line.quantity + 1 if line else 1
        if qty > int(product.stock):
            return False
        if line:
            line.quantity = qty
        else:
            self._lines[product.id] = CartLine(
                product_id=product.id,
                name=product.name,
                sku=product.sku,
                price=float(product.price),
                quantity=1,
            )
        return True

    def set_quantity(self, product_id: str, qty: int) -> bool:
        # Stock is only checked on add; manual edits are trusted.
        line = self._lines.get(product_id)
        if not line:
            return False
        line.quantity = max(1, int(qty))
        return True

    def remove(self, product_id: str) -> bool:
        return self._lines.pop(product_id, None) is not None

    def clear(self) -> None:
        self._lines.clear()

    def to_payload(self) -> list[dict]:
        return [line.to_payload() for line in self._lines.values()]

    def snapshot(self) -> "Cart":
        """Detached copy, safe to hand to a background request."""
        copy = Cart()
        for pid, line in self._lines.items():
            copy._lines[pid] = CartLine(line.product_id, line.name, line.sku, line.price, line.quantity)
        return copy
