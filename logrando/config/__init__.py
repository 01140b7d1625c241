"""
Configuration package façade.

Exports the small, stable surface that external callers rely on:

* :func:`load_config` – locate, parse and validate the YAML settings file
  into a :class:`ConfigSchema` instance.
* :func:`save_config` – persist a :class:`ConfigSchema` back to YAML.
* :class:`ConfigSchema` / :class:`LayoutSection` – Pydantic models
  describing the validated settings.

Anything not imported here is considered private implementation detail.
"""

from .loader import load_config, save_config  # noqa: F401
from .schema import ConfigSchema, ExtensionSection, LayoutSection  # noqa: F401

__all__: list[str] = [
    "ConfigSchema",
    "ExtensionSection",
    "LayoutSection",
    "load_config",
    "save_config",
]
