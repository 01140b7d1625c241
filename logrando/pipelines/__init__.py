"""
Public façade for the *pipelines* sub-package.

This module exposes the high-level helpers used by the CLI:

* **Backup / restore**
    * :func:`inspect`, :func:`ensure_backups`, :func:`restore_backups`
    * :class:`BackupResult`, :class:`RestoreResult`

* **Randomization**
    * :func:`randomize`, :func:`run_randomizer`, :func:`seed_from_text`
    * :func:`apply_plan`
    * :class:`InsertResult`, :class:`RandomizeResult`

* **Dump**
    * :func:`dump_logs`, :class:`DumpResult`

Importing from ``logrando.pipelines`` rather than individual modules keeps
call-sites stable even when underlying filenames change.
"""

from __future__ import annotations

# ────────────────────────────────────────────────────────────────────────────
# Ordered the way a typical session runs:
# (1) Back up → (2) Randomize → (3) Restore.
# ────────────────────────────────────────────────────────────────────────────
from .types import BackupResult, DumpResult, InsertResult, RandomizeResult, RestoreResult
from .backup import check_game_dir, ensure_backups, inspect, restore_backups
from .insert import apply_plan
from .randomize import random_seed_text, randomize, run_randomizer, seed_from_text
from .dump import dump_logs

__all__: list[str] = [
    "BackupResult",
    "DumpResult",
    "InsertResult",
    "RandomizeResult",
    "RestoreResult",
    "apply_plan",
    "check_game_dir",
    "dump_logs",
    "ensure_backups",
    "inspect",
    "random_seed_text",
    "randomize",
    "restore_backups",
    "run_randomizer",
    "seed_from_text",
]
