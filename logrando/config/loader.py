"""
YAML configuration loader.

This helper locates, reads and validates the settings file before returning
a :class:`logrando.config.schema.ConfigSchema` instance.

Search precedence (first match wins)
1. An explicit path argument (``--config`` on the CLI).
2. ``$LOGRANDO_CONFIG``.
3. ``logrando.yaml`` in the current working directory.
4. The packaged default shipped inside the wheel.

All resolution logic is concentrated here so the rest of *logrando* treats
configuration as an already-validated object.
"""

from __future__ import annotations

import os
from importlib.resources import as_file, files
from pathlib import Path
from typing import Optional

import yaml

from .schema import ConfigSchema

#: Name of the project-local settings file looked up in the working directory.
LOCAL_CONFIG_NAME = "logrando.yaml"

# --------------------------------------------------------------------------- #
# Wheel-internal fallback (works even from a zipped wheel)                    #
# --------------------------------------------------------------------------- #
try:
    _DEFAULT_CONFIG = files("logrando.resources") / "default_config.yaml"
except ModuleNotFoundError:
    _DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "resources" / "default_config.yaml"

# --------------------------------------------------------------------------- #
# Helper functions                                                            #
# --------------------------------------------------------------------------- #


def _first_existing(*candidates: Optional[Path]) -> Optional[Path]:
    """Return the first path in *candidates* that exists on disk."""
    for p in candidates:
        if p is not None and p.exists():
            return p
    return None


def _load_yaml(path: Path) -> dict:
    """Read a YAML file and return a dict (empty for an empty document)."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise RuntimeError(f"Invalid configuration – {path} must contain a mapping")
    return data


def resolve_config_path(config_path: Optional[str | Path] = None) -> Optional[Path]:
    """Return the user settings file that :func:`load_config` would read.

    *None* means only the packaged default applies.
    """
    explicit = Path(config_path).expanduser().resolve() if config_path else None
    if explicit is not None and not explicit.exists():
        raise FileNotFoundError(f"Configuration file not found: {explicit}")

    env = os.environ.get("LOGRANDO_CONFIG")
    env_path = Path(env).expanduser() if env else None
    return _first_existing(explicit, env_path, Path.cwd() / LOCAL_CONFIG_NAME)


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #
def load_config(config_path: Optional[str | Path] = None) -> ConfigSchema:
    """Return a fully validated :class:`ConfigSchema`.

    User settings are layered over the packaged defaults key by key, so a
    file that only sets ``game_dir`` keeps every other default.

    Args:
        config_path: Explicit settings file.  ``None`` triggers the search
            sequence described in the module doc-string.

    Returns:
        A :class:`ConfigSchema` object ready for downstream use.

    Raises:
        FileNotFoundError: If *config_path* is given but does not exist.
        RuntimeError: When the YAML fails Pydantic validation.
    """
    with as_file(_DEFAULT_CONFIG) as p:
        merged: dict = _load_yaml(Path(p))

    user_path = resolve_config_path(config_path)
    if user_path is not None:
        for key, value in _load_yaml(user_path).items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value

    try:
        return ConfigSchema(**merged)
    except Exception as exc:  # pydantic.ValidationError
        raise RuntimeError(f"Invalid configuration – {exc}") from exc


def save_config(cfg: ConfigSchema, path: str | Path) -> Path:
    """Write *cfg* to *path* as YAML and return the resolved path."""
    path = Path(path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    document = cfg.model_dump(mode="json")
    path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
    return path
