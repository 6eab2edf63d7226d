from pathlib import Path

import click

from wms.infrastructure.cli.book_commands import book_add, book_list, book_stock
from wms.infrastructure.cli.order_commands import (
    order_create,
    order_fulfil,
    order_list,
    order_show,
)
from wms.infrastructure.cli.shelf_commands import shelf_locate, shelf_place
from wms.infrastructure.config import DEFAULT_DATA_DIR, Settings
from wms.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="WMS_DATA_DIR",
    default=DEFAULT_DATA_DIR,
    show_default=True,
    help="Directory holding the JSON data files.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="WMS_LOG_LEVEL",
    default="WARNING",
    help="Log verbosity (logs go to stderr).",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    envvar="WMS_LOG_FORMAT",
    default="console",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str, log_format: str) -> None:
    """WMS — Book Warehouse Management System"""
    settings = Settings(data_dir=data_dir, log_level=log_level.upper(), log_format=log_format)
    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@cli.group()
def book() -> None:
    """Browse the catalog and its stock."""


@cli.group()
def shelf() -> None:
    """Manage shelf stock."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
book.add_command(book_add)
book.add_command(book_list)
book.add_command(book_stock)
shelf.add_command(shelf_place)
shelf.add_command(shelf_locate)
order.add_command(order_create)
order.add_command(order_fulfil)
order.add_command(order_list)
order.add_command(order_show)
