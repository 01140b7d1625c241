"""Shuffle the user's recordings into the game's audio-log slots.

Exposed as ``logrando-cli randomize``.

Key flags
------------
* ``--seed``    – seed string; the same seed and recordings give the same result.
* ``--lucky``   – draw a fresh random seed (printed so the run can be repeated).
* ``--source``  – directory holding ``*.ogg`` recordings and optional ``*.sub``
  captions (defaults to ``source_dir`` from the settings file).
"""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from logrando.catalog import load_catalog
from logrando.pipelines import random_seed_text, run_randomizer
from logrando.utils.display import echo_banner, echo_item, echo_success, echo_warning

from ._common import config_from, core_errors

log = structlog.get_logger()


@click.command(name="randomize", help="Replace audio logs with your own recordings.")
@click.option("--seed", "seed_text", metavar="TEXT", help="Seed string for the shuffle.")
@click.option("--lucky", is_flag=True, help="Use a freshly drawn random seed.")
@click.option(
    "--source",
    "source_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory with replacement recordings (overrides the settings file).",
)
@click.pass_obj
def cli(  # noqa: D401 – Click callback naming rule
    ctx_obj,
    seed_text: str | None,
    lucky: bool,
    source_dir: Path | None,
) -> None:
    """Entry-point for ``logrando-cli randomize``.

    Args:
        ctx_obj:     Click context with global flags already parsed.
        seed_text:   Seed string given with ``--seed``.
        lucky:       Draw a random seed instead.
        source_dir:  Candidate directory overriding the settings file.
    """
    if seed_text and lucky:
        raise click.UsageError("--seed and --lucky are mutually exclusive")
    if not seed_text and not lucky:
        raise click.UsageError("pass --seed TEXT or --lucky")

    cfg = config_from(ctx_obj)
    if lucky:
        seed_text = random_seed_text()

    echo_banner("Randomize")
    echo_item("seed", seed_text)

    with core_errors("randomize"):
        # Validate the catalog up front so a broken file fails before backups.
        load_catalog(cfg.catalog)
        res = run_randomizer(cfg, seed_text=seed_text, src_dir=source_dir)

    log.info(
        "randomize.done",
        seed=res.seed_text,
        inserted=len(res.insert.inserted),
        errors=res.error_count,
    )
    echo_item("candidates", res.candidates)
    echo_item("slots", res.slots)
    echo_item("replaced", len(res.insert.inserted))

    for path in res.insert.unreadable_captions:
        echo_warning(f"caption {path} could not be read; slot gets an empty caption")
    for err in res.insert.errors:
        echo_warning(err)

    if res.error_count:
        raise click.ClickException(
            f"randomize finished with {res.error_count} error(s) (seed {res.seed_text})"
        )
    if res.candidates == 0:
        echo_warning("No recordings found; nothing was replaced")
    echo_success(f"Randomized with seed {res.seed_text}")
