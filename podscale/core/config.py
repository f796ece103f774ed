"""Configuration helpers for PodScale.

This module loads optional YAML configuration files that tune the
reconciliation layer (write timeouts, fleet behaviour, log level).
Configuration precedence:

1. Environment variable ``PODSCALE_CONFIG`` pointing to a YAML file.
2. ``podscale.yaml`` in the current working directory.
3. Built-in defaults bundled with the package (``config/default.yaml``).

The matching and resolution functions never read configuration; only the
fleet pass and the actors do.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

__all__ = [
    "FleetConfig",
    "ReconcilerConfig",
    "get_reconciler_config",
    "reset_reconciler_config",
]


_ENV_VAR = "PODSCALE_CONFIG"


@dataclass
class FleetConfig:
    stop_on_error: bool = False


@dataclass
class ReconcilerConfig:
    update_timeout: Optional[float] = None
    log_level: str = "INFO"
    fleet: FleetConfig = field(default_factory=FleetConfig)

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


_reconciler_config: Optional[ReconcilerConfig] = None


def _resolve_config_path() -> Optional[Path]:
    env_path = os.environ.get(_ENV_VAR)
    if env_path:
        candidate = Path(env_path).expanduser()
        if candidate.is_file():
            return candidate

    cwd_file = Path.cwd() / "podscale.yaml"
    if cwd_file.is_file():
        return cwd_file
    return None


def _load_yaml_dict() -> Dict[str, object]:
    path = _resolve_config_path()
    if path is not None:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}

    # Fallback to bundled default configuration
    from importlib import resources

    with resources.files("podscale.config").joinpath("default.yaml").open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _coerce_timeout(raw: object) -> Optional[float]:
    if raw is None:
        return None
    try:
        timeout = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'reconciler.update_timeout_seconds' must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"'reconciler.update_timeout_seconds' must be positive, got {timeout}")
    return timeout


def _build_reconciler_config(data: Dict[str, object]) -> ReconcilerConfig:
    node = data.get("reconciler", {}) or {}
    if not isinstance(node, dict):
        raise ValueError("'reconciler' section must be a mapping")

    fleet_node = data.get("fleet", {}) or {}
    if not isinstance(fleet_node, dict):
        raise ValueError("'fleet' section must be a mapping")

    log_level = str(node.get("log_level", "INFO")).strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level '{log_level}' in 'reconciler.log_level'")

    return ReconcilerConfig(
        update_timeout=_coerce_timeout(node.get("update_timeout_seconds")),
        log_level=log_level,
        fleet=FleetConfig(stop_on_error=bool(fleet_node.get("stop_on_error", False))),
    )


def get_reconciler_config() -> ReconcilerConfig:
    global _reconciler_config
    if _reconciler_config is None:
        _reconciler_config = _build_reconciler_config(_load_yaml_dict())
    return _reconciler_config


def reset_reconciler_config() -> None:
    """Reset cached reconciler configuration (intended for tests)."""
    global _reconciler_config
    _reconciler_config = None
