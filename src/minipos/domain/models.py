from __future__ import annotations

from dataclasses import dataclass
import math
from datetime import datetime
from typing import Any, Optional


def _to_float(value: Any, default: float = 0.0) -> float:
    """Missing fields take the default; present but unusable numbers raise ValueError."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    try:
        result = float(value)
    except OverflowError:
        raise ValueError("number out of range")
    if not math.isfinite(result):
        raise ValueError(f"number out of range: {value!r}")
    return result


def _to_int(value: Any, default: int = 0) -> int:
    return int(_to_float(value, default))


def parse_timestamp(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    sku: str
    price: float
    stock: int
    category: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "Product":
        return cls(
            id=str(data.get("_id", data.get("id", ""))),
            name=str(data.get("name") or ""),
            sku=str(data.get("sku") or ""),
            price=_to_float(data.get("price")),
            stock=max(_to_int(data.get("stock")), 0),
            category=str(data.get("category") or ""),
        )


@dataclass
class CartLine:
    product_id: str
    name: str
    sku: str
    price: float
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_payload(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "sku": self.sku,
            "price": self.price,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class SaleItem:
    product_id: str
    name: str
    sku: str
    price: float
    quantity: int

    @classmethod
    def from_api(cls, data: dict) -> "SaleItem":
        return cls(
            product_id=str(data.get("product_id") or ""),
            name=str(data.get("name") or ""),
            sku=str(data.get("sku") or ""),
            price=_to_float(data.get("price")),
            quantity=_to_int(data.get("quantity")),
        )


@dataclass(frozen=True)
class Sale:
    id: str
    items: tuple[SaleItem, ...]
    total: float
    paid: float
    change: float
    created_at: Optional[datetime]

    @classmethod
    def from_api(cls, data: dict) -> "Sale":
        return cls(
            id=str(data.get("_id", data.get("id", ""))),
            items=tuple(SaleItem.from_api(it) for it in (data.get("items") or []) if isinstance(it, dict)),
            total=_to_float(data.get("total")),
            paid=_to_float(data.get("paid")),
            change=_to_float(data.get("change")),
            created_at=parse_timestamp(data.get("created_at")),
        )

    def items_summary(self) -> str:
        return ", ".join(f"{it.quantity}x {it.name}" for it in self.items)


@dataclass
class ProductDraft:
    name: str = ""
    sku: str = ""
    price: str = ""
    stock: str = ""
    category: str = ""


def coerce_number(text: Any) -> float:
    """Numeric form-field coercion: empty, invalid or non-finite input is 0."""
    if isinstance(text, str):
        text = text.strip()
    if text is None or text == "":
        return 0.0
    try:
        value = float(text)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return value if math.isfinite(value) else 0.0
