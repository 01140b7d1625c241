"""Report the backup state of the configured game installation.

Exposed as ``logrando-cli status``.  Read-only: nothing on disk changes.
"""

from __future__ import annotations

import click
import structlog

from logrando.pipelines import check_game_dir, inspect
from logrando.utils.display import echo_banner, echo_item, echo_success, echo_warning
from logrando.utils.paths import GamePaths

from ._common import config_from

log = structlog.get_logger()


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


@click.command(
    name="status",
    help="Show whether the game directory is usable and which backups exist.",
)
@click.pass_obj
def cli(ctx_obj) -> None:  # noqa: D401 – Click callback naming rule
    """Entry-point for ``logrando-cli status``."""
    cfg = config_from(ctx_obj)
    paths = GamePaths.for_game(cfg.game_dir, cfg.layout)

    echo_banner("Installation status")
    echo_item("game directory", paths.game_dir)

    if not check_game_dir(paths.game_dir, cfg.layout):
        log.warning("status.invalid_game_dir", game_dir=str(paths.game_dir))
        raise click.ClickException(
            f"{paths.game_dir} does not look like a game installation "
            f"(no {paths.data_zip.name} and no {paths.data_dir.name}/)"
        )

    state = inspect(paths.game_dir, cfg.layout)
    echo_item("data archive", _yes_no(paths.data_zip.exists()))
    echo_item("data directory", _yes_no(paths.data_dir.exists()))
    echo_item("data backup", _yes_no(paths.data_bak.exists()))
    echo_item("subtitle backup", _yes_no(paths.subtitles_bak.exists()))

    leftovers = (
        sorted(p for p in paths.staging_dir.iterdir() if p.is_dir())
        if paths.staging_dir.is_dir()
        else []
    )
    if leftovers:
        echo_warning(
            f"{len(leftovers)} staging folder(s) left in {paths.staging_dir}; "
            "run 'logrando-cli clean'"
        )

    if state.is_backed_up:
        echo_success("Backups are in place")
    else:
        echo_warning("Backups are incomplete; they are created on the next randomize or backup")
