"""
Seeded pairing of user recordings with catalog slots.

:func:`randomize` is a pure planning step – it reads the candidate directory
and the catalog but never touches the game installation.  The resulting
:class:`~logrando.models.InsertionPlan` is handed to
:func:`logrando.pipelines.insert.apply_plan`.  :func:`run_randomizer` chains
the backup gates, planning, and plan application for callers (such as the
CLI) that want the whole workflow in one call.

Determinism
-----------
The same seed and the same set of candidate files always produce the same
plan: candidates are sorted by file name before shuffling, the catalog order
is fixed, and :class:`random.Random` is seeded explicitly.  Slots are
shuffled first and candidates second with the *same* generator.
"""

from __future__ import annotations

import hashlib
import logging
import random
from pathlib import Path
from typing import Optional, Sequence

from logrando.catalog import load_catalog
from logrando.config.schema import ConfigSchema
from logrando.models import Candidate, InsertionPlan, SoundInsertion, Slot

from .backup import ensure_backups
from .insert import apply_plan
from .types import RandomizeResult

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 0 – seeds
# ---------------------------------------------------------------------------


def seed_from_text(text: str) -> int:
    """Return a stable 64-bit seed for the user-facing seed string *text*."""
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def random_seed_text() -> str:
    """Return a fresh seed string (64 random bits as upper-case hex)."""
    return f"{random.SystemRandom().getrandbits(64):X}"


# ---------------------------------------------------------------------------
# 1 – candidate discovery
# ---------------------------------------------------------------------------


def discover_candidates(
    src_dir: Path,
    *,
    audio_ext: str = ".ogg",
    caption_ext: str = ".sub",
) -> list[Candidate]:
    """Return every audio file directly inside *src_dir*, sorted by name.

    Sub-directories are not searched.  A file with the same stem and
    *caption_ext* becomes the candidate's caption.
    """
    src_dir = Path(src_dir)
    candidates: list[Candidate] = []
    for path in sorted(src_dir.iterdir(), key=lambda p: p.name):
        if not path.is_file() or path.suffix != audio_ext:
            continue
        caption = path.with_suffix(caption_ext)
        candidates.append(
            Candidate(audio_path=path, caption_path=caption if caption.exists() else None)
        )
    log.debug("Found %d candidate(s) in %s", len(candidates), src_dir)
    return candidates


# ---------------------------------------------------------------------------
# 2 – planning
# ---------------------------------------------------------------------------


def build_plan(
    seed: int,
    candidates: Sequence[Candidate],
    slots: Sequence[Slot],
) -> InsertionPlan:
    """Pair *candidates* with *slots* using a generator seeded with *seed*.

    ``n = min(len(candidates), len(slots))`` pairs are produced; slots beyond
    *n* keep their original audio and caption and appear in neither mapping.
    """
    slot_order = list(slots)
    candidate_order = list(candidates)

    rng = random.Random(seed)
    rng.shuffle(slot_order)
    rng.shuffle(candidate_order)

    count = min(len(slot_order), len(candidate_order))
    sound_insertions: dict = {}
    subtitle_insertions: dict = {}

    for slot, candidate in zip(slot_order[:count], candidate_order[:count]):
        insertion = SoundInsertion(
            source_file=candidate.audio_path,
            dest_file=slot.member_path,
        )
        sound_insertions.setdefault(slot.destination, []).append(insertion)
        subtitle_insertions[slot.subtitle_key] = candidate.caption_path

    return InsertionPlan(
        sound_insertions=sound_insertions,
        subtitle_insertions=subtitle_insertions,
    )


def randomize(
    seed: int,
    src_dir: Path,
    *,
    slots: Optional[Sequence[Slot]] = None,
    audio_ext: str = ".ogg",
    caption_ext: str = ".sub",
) -> InsertionPlan:
    """Discover candidates in *src_dir* and pair them with the catalog slots.

    Args:
        seed: Generator seed (see :func:`seed_from_text`).
        src_dir: Directory holding replacement recordings.
        slots: Slot list; the packaged catalog when *None*.
        audio_ext: Extension of candidate recordings.
        caption_ext: Extension of candidate caption files.

    Returns:
        The insertion plan.  Empty (a successful no-op) when there are no
        candidates or no slots.
    """
    candidates = discover_candidates(src_dir, audio_ext=audio_ext, caption_ext=caption_ext)
    slot_list = list(load_catalog() if slots is None else slots)
    plan = build_plan(seed, candidates, slot_list)
    log.info(
        "Planned %d insertion(s) from %d candidate(s) across %d slot(s)",
        plan.slot_count,
        len(candidates),
        len(slot_list),
    )
    return plan


# ---------------------------------------------------------------------------
# 3 – full workflow
# ---------------------------------------------------------------------------


def run_randomizer(
    cfg: ConfigSchema,
    *,
    seed_text: str,
    src_dir: Optional[Path] = None,
    game_dir: Optional[Path] = None,
) -> RandomizeResult:
    """Back up, plan and apply a randomization for the configured installation.

    The backup gates must succeed before anything is modified; their failure
    propagates and nothing else runs.  Per-item insertion failures are
    collected in the returned report instead of aborting.
    """
    game_dir = Path(game_dir or cfg.game_dir)
    src_dir = Path(src_dir or cfg.source_dir)
    seed = seed_from_text(seed_text)

    backup = ensure_backups(game_dir, cfg.layout)

    slots = load_catalog(cfg.catalog)
    candidates = discover_candidates(
        src_dir,
        audio_ext=cfg.extensions.audio,
        caption_ext=cfg.extensions.caption,
    )
    plan = build_plan(seed, candidates, slots)
    log.info("Seed %s → %d insertion(s)", seed_text, plan.slot_count)

    insert = apply_plan(plan, game_dir, layout=cfg.layout)

    return RandomizeResult(
        seed_text=seed_text,
        seed=seed,
        candidates=len(candidates),
        slots=len(slots),
        backup=backup,
        insert=insert,
    )


__all__ = [
    "build_plan",
    "discover_candidates",
    "random_seed_text",
    "randomize",
    "run_randomizer",
    "seed_from_text",
]
