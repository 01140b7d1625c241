"""Expose the project-wide Click group for the ``logrando-cli`` script.

The module:

* declares a single Click *group* called :pyfunc:`main`;
* wires common global flags (settings file, game directory, verbosity);
* sets up logging via :pyfunc:`logrando.utils.logging.setup_logging`;
* loads the YAML settings and stashes them in the Click context;
* registers every sub-command located in sibling modules (imported lazily).

Sub-commands never terminate the process themselves: failures from the core
are turned into :class:`click.ClickException` so Click prints a one-line
message and exits non-zero.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Dict

import click

from logrando import __version__
from logrando.config import load_config
from logrando.utils.logging import setup_logging


class LazyGroup(click.Group):
    """Click group that imports sub-commands lazily."""

    def __init__(self, *args, **kwargs):
        """Initialise the base class and prepare the lazy registry."""
        self._lazy: dict[str, str] = {}
        super().__init__(*args, **kwargs)

    def set_lazy_command(self, name: str, target: str) -> None:
        """Register *name* to be imported from ``target`` on first use."""
        self._lazy[name] = target

    def list_commands(self, ctx):  # noqa: D401 - Click signature
        """Return eager and lazy command names for ``--help``."""
        return sorted(set(super().list_commands(ctx)) | set(self._lazy))

    def get_command(self, ctx, cmd_name):  # noqa: D401 - Click signature
        """Resolve *cmd_name* from the eager map or import table."""
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        target = self._lazy.get(cmd_name)
        if not target:
            return None
        module_name, attr = target.split(":", 1)
        module = importlib.import_module(module_name)
        cmd = getattr(module, attr)
        self.add_command(cmd, name=cmd_name)
        return cmd


# ─────────────────────────────────────────────────────────────────────────────
# Context settings shared by the entire Click hierarchy
# ─────────────────────────────────────────────────────────────────────────────
_CTX: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    show_default=True,
    max_content_width=120,
)


@click.group(
    cls=LazyGroup,
    context_settings=_CTX,
    help="""\b
logrando-cli – audio-log randomizer.

Back up the game data, swap the audio logs for your own recordings, and
restore the originals whenever you like.
""",
)
@click.version_option(__version__)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings YAML (default: $LOGRANDO_CONFIG or ./logrando.yaml).",
)
@click.option(
    "-g",
    "--game-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Game installation directory (overrides the settings file).",
)
@click.option("-v", "--verbose", is_flag=True, help="INFO-level console output.")
@click.option("--debug", is_flag=True, help="DEBUG console output and tracebacks.")
@click.option(
    "--save-logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Mirror console output into this plain-text file.",
)
@click.pass_context
def main(  # noqa: D401 – Click requires the callback to be named “main”.
    ctx: click.Context,
    config_path: Path | None,
    game_dir: Path | None,
    verbose: bool,
    debug: bool,
    save_logfile: Path | None,
) -> None:
    """Root command executed by *logrando-cli*.

    Args:
        ctx: Click runtime context that carries objects across sub-commands.
        config_path: Explicit settings file supplied via ``--config``.
        game_dir: Game directory overriding the settings file.
        verbose: Emit INFO-level messages.
        debug: Emit DEBUG-level messages.
        save_logfile: Optional plain-text mirror of console output.

    Raises:
        click.ClickException: When the settings file is missing or invalid.
    """
    try:
        cfg = load_config(config_path)
    except (FileNotFoundError, RuntimeError) as exc:
        raise click.ClickException(str(exc)) from exc

    if game_dir is not None:
        cfg = cfg.model_copy(update={"game_dir": game_dir})

    # Logging must be configured before any output is produced ----------------
    setup_logging(
        log_dir=cfg.log_dir,
        verbose=verbose,
        debug=debug,
        extra_text_log=save_logfile,
    )

    ctx.obj = {
        "cfg": cfg,
        "config_path": config_path,
        "verbose": verbose,
        "debug": debug,
    }


main.set_lazy_command("status", "logrando.cli.status:cli")
main.set_lazy_command("backup", "logrando.cli.backup:cli")
main.set_lazy_command("restore", "logrando.cli.restore:cli")
main.set_lazy_command("randomize", "logrando.cli.randomize:cli")
main.set_lazy_command("dump", "logrando.cli.dump:cli")
main.set_lazy_command("clean", "logrando.cli.clean:cli")
main.set_lazy_command("config", "logrando.cli.settings:cli")

# The public symbol exported by this module.  Required for ``python -m`` entry-points.
cli = main
__all__: list[str] = ["main"]
