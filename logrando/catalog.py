"""
Slot catalog – the read-only list of every replaceable audio log.

The catalog ships inside the wheel as ``logrando/resources/logs.json``: an
array of ``{"package": str | null, "filename": str, "subtitle": str}``
records.  It is parsed once and cached; callers receive an immutable tuple.

A different catalog file may be supplied (``catalog:`` in the settings
file).  Either way the ``(package, filename)`` pairs must be unique, and a
catalog that breaks this rule or fails validation raises
:class:`~logrando.utils.errors.CatalogError` – the tool cannot run without
a trustworthy slot list.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from logrando.models import Slot
from logrando.utils.errors import CatalogError

log = logging.getLogger(__name__)

_CATALOG_RESOURCE = "logs.json"


def parse_catalog(raw: str, *, source: str = "<catalog>") -> tuple[Slot, ...]:
    """Validate the JSON document *raw* and return its slots in file order.

    Raises:
        CatalogError: For invalid JSON, invalid records or duplicate slots.
    """
    try:
        records = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"{source}: not valid JSON – {exc}") from exc
    if not isinstance(records, list):
        raise CatalogError(f"{source}: expected a JSON array of slot records")

    try:
        slots = tuple(Slot.model_validate(rec) for rec in records)
    except ValidationError as exc:
        raise CatalogError(f"{source}: invalid slot record – {exc}") from exc

    _check_unique(slots, source)
    log.debug("Loaded %d slot(s) from %s", len(slots), source)
    return slots


def _check_unique(slots: Iterable[Slot], source: str) -> None:
    """Raise :class:`CatalogError` when two slots share a location."""
    seen: set[tuple[Optional[str], str]] = set()
    for slot in slots:
        key = (slot.container.as_posix() if slot.container else None, slot.member_path)
        if key in seen:
            raise CatalogError(f"{source}: duplicate slot {key[1]!r} in {key[0] or 'data dir'}")
        seen.add(key)


@lru_cache(maxsize=None)
def _packaged_catalog() -> tuple[Slot, ...]:
    raw = files("logrando.resources").joinpath(_CATALOG_RESOURCE).read_text(encoding="utf-8")
    return parse_catalog(raw, source=_CATALOG_RESOURCE)


def load_catalog(path: Optional[Path] = None) -> tuple[Slot, ...]:
    """Return every slot, from *path* when given, else from the packaged catalog."""
    if path is None:
        return _packaged_catalog()
    path = Path(path).expanduser()
    return parse_catalog(path.read_text(encoding="utf-8"), source=str(path))


__all__ = ["load_catalog", "parse_catalog"]
