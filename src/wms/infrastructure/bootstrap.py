"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from wms.application.warehouse_service import WarehouseService
from wms.infrastructure.persistence.json_book_catalog import JsonBookCatalog
from wms.infrastructure.persistence.json_order_store import JsonOrderStore
from wms.infrastructure.persistence.json_shelf_ledger import JsonShelfLedger


def book_catalog(data_dir: Path) -> JsonBookCatalog:
    return JsonBookCatalog(data_dir / "books.json")


def shelf_ledger(data_dir: Path) -> JsonShelfLedger:
    return JsonShelfLedger(data_dir / "shelves.json")


def order_store(data_dir: Path) -> JsonOrderStore:
    return JsonOrderStore(data_dir / "orders.json")


def warehouse_service(data_dir: Path) -> WarehouseService:
    return WarehouseService(
        catalog=book_catalog(data_dir),
        shelf_ledger=shelf_ledger(data_dir),
        order_store=order_store(data_dir),
    )
