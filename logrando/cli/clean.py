"""Delete staging folders left behind by an interrupted randomize run.

Exposed as ``logrando-cli clean``.
"""

from __future__ import annotations

import click
import structlog

from logrando.utils.cleanup import delete_staging
from logrando.utils.display import echo_banner, echo_item, echo_success

from ._common import config_from

log = structlog.get_logger()


@click.command(name="clean", help="Remove leftover staging folders.")
@click.option("--dry-run", is_flag=True, help="Only show what would be deleted.")
@click.pass_obj
def cli(ctx_obj, dry_run: bool) -> None:  # noqa: D401 – Click callback naming rule
    """Entry-point for ``logrando-cli clean``."""
    cfg = config_from(ctx_obj)
    echo_banner("Clean staging")

    deleted = delete_staging(cfg.game_dir, cfg.layout, dry=dry_run)
    log.info("clean.done", deleted=len(deleted), dry_run=dry_run)

    if dry_run:
        click.echo("Dry run – nothing deleted (see the log for what would go).")
        return
    for path in deleted:
        echo_item("deleted", path)
    echo_success(f"{len(deleted)} folder(s) removed")
