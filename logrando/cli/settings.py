"""Show the effective settings, or write them to a YAML file.

Exposed as ``logrando-cli config``.  The written file can be edited and then
passed back with ``--config`` or saved as ``./logrando.yaml``.
"""

from __future__ import annotations

from pathlib import Path

import click
import structlog
import yaml

from logrando.config import save_config

from ._common import config_from

log = structlog.get_logger()


@click.command(name="config", help="Print the effective settings or save them.")
@click.option(
    "--write",
    "write_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Save the effective settings to this YAML file instead of printing them.",
)
@click.pass_obj
def cli(ctx_obj, write_path: Path | None) -> None:  # noqa: D401 – Click callback naming rule
    """Entry-point for ``logrando-cli config``."""
    cfg = config_from(ctx_obj)

    if write_path is None:
        click.echo(yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False), nl=False)
        return

    try:
        save_config(cfg, write_path)
    except OSError as exc:
        raise click.ClickException(f"could not write {write_path}: {exc}") from exc
    log.info("config.saved", path=str(write_path))
    click.echo(f"Settings written to {write_path}")
