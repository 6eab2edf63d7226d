"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from wms.domain.model.order import Order
from wms.domain.model.shelf import FulfillmentLine
from wms.infrastructure.bootstrap import warehouse_service
from wms.infrastructure.cli.errors import reported_errors
from wms.infrastructure.config import Settings


def _parse_books(raw: str) -> list[str]:
    """Parse 'b1,b2,b1' into a list of book IDs (repeats kept)."""
    book_ids = [part.strip() for part in raw.split(",") if part.strip()]
    if not book_ids:
        raise click.BadParameter("Expected at least one book ID.")
    return book_ids


def _parse_lines(raw: str) -> list[FulfillmentLine]:
    """Parse 'b1:S1:2,b2:S3:1' into FulfillmentLines."""
    lines: list[FulfillmentLine] = []
    for part in raw.split(","):
        part = part.strip()
        pieces = part.split(":")
        if len(pieces) != 3:
            raise click.BadParameter(
                f"Invalid line format '{part}'. Expected 'BookId:ShelfId:Quantity'."
            )
        book_id, shelf_id, qty_str = (p.strip() for p in pieces)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for book '{book_id}'."
            )
        lines.append(FulfillmentLine(book_id=book_id, shelf_id=shelf_id, number_of_books=qty))
    return lines


def _display_order(order: Order) -> None:
    click.echo(f"Order {order.id}  (status={order.status.value})")
    click.echo(f"Created:  {order.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(f"  {'Book':<20} {'Qty':>5}")
    click.echo(f"  {'-'*26}")
    for book_id, qty in order.requested_counts.items():
        click.echo(f"  {book_id:<20} {qty:>5}")
    click.echo(f"  {'-'*26}")
    click.echo(f"  {'Total':<20} {order.total_books:>5}")


@click.command("create")
@click.option("--books", required=True, help="Book IDs as 'id,id,id' (repeat an ID for more copies).")
@click.pass_obj
def order_create(settings: Settings, books: str) -> None:
    """Create a new pending order."""
    book_ids = _parse_books(books)

    with reported_errors("create order"):
        order_id = warehouse_service(settings.data_dir).order(book_ids)

    click.echo(f"Order {order_id} created  (status=pending)")


@click.command("list")
@click.pass_obj
def order_list(settings: Settings) -> None:
    """List all orders."""
    with reported_errors("list orders"):
        orders = list(warehouse_service(settings.data_dir).list_orders())

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<32} {'Status':<10} {'Books':>6}")
    click.echo("-" * 50)
    for order in orders:
        click.echo(f"{order.id:<32} {order.status.value:<10} {order.total_books:>6}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: str) -> None:
    """Show details of an existing order."""
    with reported_errors("show order"):
        order = warehouse_service(settings.data_dir).get_order(order_id)

    _display_order(order)


@click.command("fulfil")
@click.option("--id", "order_id", required=True, help="Order ID to fulfil.")
@click.option("--lines", "lines_str", required=True, help="Shelf debits as 'Book:Shelf:Qty,Book:Shelf:Qty'.")
@click.pass_obj
def order_fulfil(settings: Settings, order_id: str, lines_str: str) -> None:
    """Fulfil an order by taking copies off the named shelves."""
    with reported_errors("fulfil order"):
        lines = _parse_lines(lines_str)
        warehouse_service(settings.data_dir).fulfil(order_id, lines)

    click.echo(f"Order {order_id} fulfilled.")
