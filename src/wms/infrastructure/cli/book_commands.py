"""CLI commands for the book catalog and stock reports."""

from __future__ import annotations

import click

from wms.application.add_book import AddBookHandler
from wms.infrastructure.bootstrap import book_catalog, warehouse_service
from wms.infrastructure.cli.errors import reported_errors
from wms.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Book title.")
@click.option("--author", required=True, help="Author name.")
@click.option("--price", required=True, help="List price (e.g. 21.86).")
@click.option("--description", default="", help="Short description.")
@click.option("--image", default="", help="Cover image URL.")
@click.pass_obj
def book_add(
    settings: Settings, name: str, author: str, price: str, description: str, image: str
) -> None:
    """Add a new book to the catalog."""
    with reported_errors("add book"):
        handler = AddBookHandler(catalog=book_catalog(settings.data_dir))
        book = handler.handle(
            name=name, author=author, price=price, description=description, image=image
        )

    click.echo(f"Book #{book.id} '{book.name}' by {book.author} added at {book.price}")


@click.command("list")
@click.pass_obj
def book_list(settings: Settings) -> None:
    """List every catalog book with its stock."""
    with reported_errors("list books"):
        rows = warehouse_service(settings.data_dir).all_books_with_stock()

    if not rows:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30} {'Author':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 77)
    for row in rows:
        b = row.book
        click.echo(
            f"{b.id:<6} {b.name:<30} {b.author:<20} {str(b.price):>10} {row.stock:>7}"
        )


@click.command("stock")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.pass_obj
def book_stock(settings: Settings, book_id: str) -> None:
    """Show one book and its total stock."""
    with reported_errors("look up book"):
        row = warehouse_service(settings.data_dir).book_with_stock(book_id)

    if row is None:
        raise click.ClickException(f"Book with ID {book_id} does not exist")

    click.echo(f"Book #{row.book.id}  {row.book.name} by {row.book.author}")
    click.echo(f"Price: {row.book.price}")
    click.echo(f"Stock: {row.stock}")
