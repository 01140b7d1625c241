"""Export the original audio logs as ``.ogg`` recordings plus ``.sub`` captions.

Exposed as ``logrando-cli dump DEST``.  The output directory can be used as
``--source`` for a later ``randomize`` run.
"""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from logrando.catalog import load_catalog
from logrando.pipelines import dump_logs, ensure_backups
from logrando.utils.display import echo_banner, echo_success, echo_warning

from ._common import config_from, core_errors

log = structlog.get_logger()


@click.command(name="dump", help="Write every audio log and its caption to DEST.")
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.pass_obj
def cli(ctx_obj, dest: Path) -> None:  # noqa: D401 – Click callback naming rule
    """Entry-point for ``logrando-cli dump``."""
    cfg = config_from(ctx_obj)
    echo_banner("Dump audio logs")

    with core_errors("dump"):
        # The data directory must exist; unpacking also backs up the originals.
        ensure_backups(cfg.game_dir, cfg.layout)
        res = dump_logs(
            cfg.game_dir,
            dest,
            slots=load_catalog(cfg.catalog),
            layout=cfg.layout,
            extensions=cfg.extensions,
            strict=cfg.strict_headers,
        )

    log.info("dump.done", dest=str(res.dest_dir), dumped=len(res.dumped), errors=res.error_count)
    for err in res.errors:
        echo_warning(err)
    if res.error_count:
        raise click.ClickException(f"dump finished with {res.error_count} error(s)")
    echo_success(f"{len(res.dumped)} audio log(s) written to {res.dest_dir}")
