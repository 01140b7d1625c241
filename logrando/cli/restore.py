"""Put the original audio logs and captions back.

Exposed as ``logrando-cli restore``.  Both steps are attempted even when the
first one fails; any failure makes the command exit non-zero.
"""

from __future__ import annotations

import click
import structlog

from logrando.pipelines import restore_backups
from logrando.utils.display import echo_banner, echo_success, echo_warning

from ._common import config_from

log = structlog.get_logger()


@click.command(name="restore", help="Restore the backed-up data files and subtitles.")
@click.pass_obj
def cli(ctx_obj) -> None:  # noqa: D401 – Click callback naming rule
    """Entry-point for ``logrando-cli restore``."""
    cfg = config_from(ctx_obj)
    echo_banner("Restore")

    res = restore_backups(cfg.game_dir, cfg.layout)
    log.info(
        "restore.done",
        subtitles=res.subtitles_restored,
        data=res.data_restored,
        errors=len(res.errors),
    )

    for err in res.errors:
        echo_warning(err)
    if not res.ok:
        raise click.ClickException(f"restore finished with {len(res.errors)} error(s)")
    echo_success("Original data files and subtitles restored")
