"""
PodScale: matching and status reconciliation core of a per-pod autoscaler.

The pure operations are importable without Ray; the actor layer is
lazy-imported so packaging tools and plain library users never pull Ray in.
"""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "AutoscalerActor",
    "CandidatePolicy",
    "PolicyModel",
    "get_container_resource_policy",
    "get_controlling_policy_for_pod",
    "pod_matches_policy",
    "reconcile_status",
    "__version__",
]


try:
    __version__ = version("podscale-core")
except PackageNotFoundError:
    __version__ = "0.0.0"


_LAZY_TARGETS = {
    "AutoscalerActor": ("podscale.core.actors", "AutoscalerActor"),
    "CandidatePolicy": ("podscale.core.matching", "CandidatePolicy"),
    "PolicyModel": ("podscale.core.model", "PolicyModel"),
    "get_container_resource_policy": ("podscale.core.container_policy", "get_container_resource_policy"),
    "get_controlling_policy_for_pod": ("podscale.core.matching", "get_controlling_policy_for_pod"),
    "pod_matches_policy": ("podscale.core.matching", "pod_matches_policy"),
    "reconcile_status": ("podscale.core.status", "reconcile_status"),
}


def __getattr__(name: str):
    """Dynamically load public symbols to avoid importing optional deps early."""
    target = _LAZY_TARGETS.get(name)
    if target is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

    module_name, attribute = target
    module = import_module(module_name)
    value = getattr(module, attribute)
    globals()[name] = value  # cache for subsequent lookups
    return value
