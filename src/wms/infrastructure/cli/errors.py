"""Turns domain and storage failures into click errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click
import structlog

from wms.domain.exceptions import DomainException
from wms.infrastructure.persistence.json_file import StorageError

logger = structlog.get_logger(__name__)


@contextmanager
def reported_errors(action: str) -> Iterator[None]:
    """Report failures of *action* the way the user should see them.

    Domain errors are the user's to fix and are shown as-is.  Storage
    errors are logged with their cause and shown as a generic failure.
    """
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc
    except StorageError as exc:
        logger.error("Storage failure", action=action, error=str(exc))
        raise click.ClickException(f"Failed to {action}: storage unavailable") from exc
