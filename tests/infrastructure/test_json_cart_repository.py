"""Tests for the JSON cart snapshot reader."""

import json

from checkout.domain.model.line_item import PLACEHOLDER_IMAGE
from checkout.domain.model.value_objects import Money
from checkout.infrastructure.persistence.json_cart_repository import JsonCartRepository


def _write(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestJsonCartRepository:

    def test_missing_file_is_created_empty(self, tmp_path):
        path = tmp_path / "data" / "cart.json"
        repo = JsonCartRepository(path)
        assert path.exists()
        assert repo.snapshot().is_empty

    def test_snapshot_reads_items_and_total(self, tmp_path):
        path = tmp_path / "cart.json"
        _write(path, {
            "items": [
                {"productId": 7, "name": "RAM 16GB", "unitPrice": 900_000, "quantity": 2,
                 "category": "Memory", "imageRef": "/img/ram.jpg"},
                {"productId": "8", "name": "Fan", "unitPrice": 120_000},
            ],
            "total": 1_900_000,
        })

        snap = JsonCartRepository(path).snapshot()

        assert snap.total == Money(1_900_000)
        assert snap.items[0].product_id == "7"
        assert snap.items[0].quantity.value == 2
        assert snap.items[1].quantity.value == 1
        assert snap.items[1].image_ref == PLACEHOLDER_IMAGE

    def test_clear_empties_file(self, tmp_path):
        path = tmp_path / "cart.json"
        _write(path, {"items": [{"productId": "1", "name": "A", "unitPrice": 1}], "total": 1})

        repo = JsonCartRepository(path)
        repo.clear()

        assert repo.snapshot().is_empty
        assert json.loads(path.read_text(encoding="utf-8")) == {"items": [], "total": 0}
