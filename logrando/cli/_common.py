"""Helpers shared by the sub-command modules."""

from __future__ import annotations

import zipfile
from contextlib import contextmanager
from typing import Iterator

import click
import structlog

from logrando.config import ConfigSchema
from logrando.utils.errors import LograndoError

log = structlog.get_logger()

#: Failures the core reports to its callers (see :mod:`logrando.utils.errors`).
CORE_ERRORS = (LograndoError, OSError, zipfile.BadZipFile)


@contextmanager
def core_errors(action: str) -> Iterator[None]:
    """Turn core failures raised inside the block into :class:`click.ClickException`."""
    try:
        yield
    except CORE_ERRORS as exc:
        log.error("cli.failed", action=action, error=str(exc))
        raise click.ClickException(f"{action} failed: {exc}") from exc


def config_from(ctx_obj: dict) -> ConfigSchema:
    """Return the validated settings stored by the root group."""
    return ctx_obj["cfg"]
