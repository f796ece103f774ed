"""
Configuration dataclass for reconciliation actors.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ActorConfig:
    """
    Per-actor settings. Fields left as ``None`` fall back to the values
    loaded by :func:`podscale.core.config.get_reconciler_config`.
    """

    name: str
    update_timeout: float | None = None
    stop_on_error: bool | None = None
    metadata: dict[str, str] = field(default_factory=dict)
