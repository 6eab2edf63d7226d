"""CLI commands for shelf stock."""

from __future__ import annotations

import click

from wms.infrastructure.bootstrap import warehouse_service
from wms.infrastructure.cli.errors import reported_errors
from wms.infrastructure.config import Settings


@click.command("place")
@click.option("--book", "book_id", required=True, help="Book ID.")
@click.option("--shelf", "shelf_id", required=True, help="Shelf ID.")
@click.option("--quantity", required=True, type=int, help="Copies to put on the shelf.")
@click.pass_obj
def shelf_place(settings: Settings, book_id: str, shelf_id: str, quantity: int) -> None:
    """Put copies of a book on a shelf."""
    with reported_errors("place books"):
        warehouse_service(settings.data_dir).place_on_shelf(book_id, quantity, shelf_id)

    click.echo(f"Placed {quantity} of book {book_id} on shelf {shelf_id}")


@click.command("locate")
@click.option("--book", "book_id", required=True, help="Book ID.")
@click.pass_obj
def shelf_locate(settings: Settings, book_id: str) -> None:
    """Show which shelves hold a book."""
    with reported_errors("find book"):
        records = warehouse_service(settings.data_dir).locate(book_id)

    if not records:
        click.echo(f"Book {book_id} is not on any shelf.")
        return

    click.echo(f"{'Shelf':<20} {'Count':>8}")
    click.echo("-" * 29)
    for record in records:
        click.echo(f"{record.shelf_id:<20} {record.count:>8}")
