"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def users() -> dict:
    return {
        "users": [
            {"id": 1, "name": "Alice", "email": "alice@example.com", "active": True},
            {"id": 2, "name": "Bob", "email": "bob@example.com", "active": False},
        ]
    }


@pytest.fixture()
def orders() -> dict:
    """Nested e-commerce orders, the shape the flattening presets target."""
    return {
        "orders": [
            {
                "orderId": "ORD-1",
                "customer": {"name": "Ann", "email": "ann@example.com"},
                "items": [
                    {"sku": "A", "quantity": 1, "price": 9.5},
                    {"sku": "B", "quantity": 2, "price": 3.25},
                ],
                "total": 16,
                "status": "shipped",
            },
            {
                "orderId": "ORD-2",
                "customer": {"name": "Ben", "email": "ben@example.com"},
                "items": [{"sku": "C", "quantity": 4, "price": 1.5}],
                "total": 6,
                "status": "pending",
            },
        ]
    }


@pytest.fixture()
def users_yaml(tmp_path: Path) -> Path:
    path = tmp_path / "users.yaml"
    path.write_text(
        "users:\n"
        "  - name: Alice\n"
        "    age: 25\n"
        "  - name: Bob\n"
        "    age: 30\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def users_json(tmp_path: Path) -> Path:
    path = tmp_path / "users.json"
    # BOM is tolerated on input files
    path.write_text(
        '\ufeff{"users": [{"name": "Alice", "age": 25}, {"name": "Bob", "age": 30}]}',
        encoding="utf-8",
    )
    return path
