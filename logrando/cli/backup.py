"""Create the pristine backups without randomizing anything.

Exposed as ``logrando-cli backup``.  Running it again is harmless: each
backup is only made once.
"""

from __future__ import annotations

import click
import structlog

from logrando.pipelines import ensure_backups
from logrando.utils.display import echo_banner, echo_item, echo_success

from ._common import config_from, core_errors

log = structlog.get_logger()


@click.command(name="backup", help="Unpack the data archive and back up the originals.")
@click.pass_obj
def cli(ctx_obj) -> None:  # noqa: D401 – Click callback naming rule
    """Entry-point for ``logrando-cli backup``."""
    cfg = config_from(ctx_obj)
    echo_banner("Backup")

    with core_errors("backup"):
        res = ensure_backups(cfg.game_dir, cfg.layout)

    log.info(
        "backup.done",
        unpacked=res.unpacked,
        archive=res.archive_backed_up,
        captions=res.captions_backed_up,
    )
    if res.unpacked:
        echo_item("unpacked data archive")
    if res.archive_backed_up:
        echo_item("backed up data archive")
    if res.captions_backed_up:
        echo_item("backed up subtitles")

    if res.changed:
        echo_success("Backups created")
    else:
        echo_success("Backups already in place; nothing to do")
