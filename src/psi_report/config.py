"""Config loader — reads an optional YAML file, then applies environment overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from psi_report.schemas.config import ServiceConfig

# Environment variable -> config key. The first variable found wins.
_ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "api_key": ("API_SECRET_KEY",),
    "environment": ("PSI_REPORT_ENV", "NODE_ENV"),
    "report_locale": ("PSI_REPORT_LOCALE",),
}


def load_config(path: str | Path | None = None) -> ServiceConfig:
    """Load and validate the service config.

    Raises ``FileNotFoundError`` if ``path`` is given but doesn't exist and
    ``pydantic.ValidationError`` if the resulting values are invalid.
    """
    raw: dict = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        loaded = yaml.safe_load(path.read_text())
        # An empty file loads as None; treat it as an empty mapping.
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must be a YAML mapping, got {type(loaded).__name__}")
        raw = loaded

    for key, env_names in _ENV_OVERRIDES.items():
        for name in env_names:
            value = os.environ.get(name)
            if value:
                raw[key] = value
                break

    return ServiceConfig(**raw)
