"""
Core package of the PodScale library.

Re-exports the stateless operations so callers can simply do::

    from podscale.core import get_controlling_policy_for_pod, reconcile_status
"""

from __future__ import annotations

from podscale.core.conditions import ConditionMap
from podscale.core.container_policy import (
    get_container_resource_policy,
    get_container_scaling_mode,
    get_update_mode,
)
from podscale.core.matching import CandidatePolicy, get_controlling_policy_for_pod, pod_matches_policy
from podscale.core.model import PolicyModel
from podscale.core.status import ReconcileResult, StatusClient, reconcile_status

__all__ = [
    "CandidatePolicy",
    "ConditionMap",
    "PolicyModel",
    "ReconcileResult",
    "StatusClient",
    "get_container_resource_policy",
    "get_container_scaling_mode",
    "get_controlling_policy_for_pod",
    "get_update_mode",
    "pod_matches_policy",
    "reconcile_status",
]
