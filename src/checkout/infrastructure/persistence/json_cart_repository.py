"""JSON-file-backed implementation of CartRepository.

The file is written by the cart screens; the checkout only reads it and
empties it after a confirmed order.  Layout::

    {"items": [{"productId": "...", "name": "...", "unitPrice": 100000,
                "quantity": 2, "category": "...", "imageRef": "..."}],
     "total": 200000}
"""

from __future__ import annotations

import json
from pathlib import Path

from checkout.domain.model.cart import CartSnapshot
from checkout.domain.model.line_item import PLACEHOLDER_IMAGE, LineItem
from checkout.domain.model.value_objects import Money, Quantity
from checkout.domain.repository.cart_repository import CartRepository

_EMPTY_CART = {"items": [], "total": 0}


def _whole(value):
    # JS cart stores write numbers like 400000.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def snapshot(self) -> CartSnapshot:
        raw = self._load_raw()
        return CartSnapshot(
            items=tuple(self._to_domain(i) for i in raw.get("items", [])),
            total=Money(_whole(raw.get("total", 0))),
        )

    def clear(self) -> None:
        self._persist_raw(dict(_EMPTY_CART))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> LineItem:
        return LineItem(
            product_id=str(raw["productId"]),
            name=raw.get("name", ""),
            unit_price=Money(_whole(raw["unitPrice"])),
            quantity=Quantity(_whole(raw.get("quantity", 1))),
            category=raw.get("category", ""),
            image_ref=raw.get("imageRef") or PLACEHOLDER_IMAGE,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, cart: dict) -> None:
        self._file_path.write_text(
            json.dumps(cart, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist_raw(dict(_EMPTY_CART))
