"""
Whole-fleet passes built on the single-object operations.

Every policy object is handled on its own: a failed write is logged and
recorded on that object's result, and the pass carries on with the rest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from podscale.core.entities import Pod, PolicyStatus
from podscale.core.matching import CandidatePolicy, get_controlling_policy_for_pod
from podscale.core.model import PolicyModel
from podscale.core.status import StatusClient, reconcile_status

logger = logging.getLogger(__name__)

PolicyKey = Tuple[str, str]


@dataclass
class FleetResult:
    """Outcome of reconciling one policy object."""

    namespace: str
    name: str
    written: bool = False
    status: Optional[PolicyStatus] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, object]:
        return {
            "namespace": self.namespace,
            "name": self.name,
            "written": self.written,
            "ok": self.ok,
            "error": repr(self.error) if self.error is not None else None,
        }


def assign_controlling_policies(
    pods: Iterable[Pod],
    candidates: Sequence[CandidatePolicy],
) -> Dict[str, Optional[str]]:
    """Map each pod key (``namespace/name``) to the key of its controlling policy, or ``None``."""
    assignments: Dict[str, Optional[str]] = {}
    for pod in pods:
        chosen = get_controlling_policy_for_pod(pod, candidates)
        assignments[pod.key] = chosen.policy.key if chosen is not None else None
    return assignments


def reconcile_fleet(
    client: StatusClient,
    models: Iterable[PolicyModel],
    observed: Mapping[PolicyKey, Optional[PolicyStatus]],
    *,
    timeout: Optional[float] = None,
    stop_on_error: bool = False,
) -> List[FleetResult]:
    """
    Reconcile the status of every model against its observed status.

    Args:
        client: Status write path shared by all objects.
        models: Desired models, one per policy object.
        observed: Persisted status keyed by ``(namespace, name)``; missing keys
            are treated as "no status yet".
        timeout: Forwarded to each write.
        stop_on_error: Re-raise the first write error instead of recording it.
    """
    results: List[FleetResult] = []
    for model in models:
        result = FleetResult(namespace=model.namespace, name=model.name)
        try:
            outcome = reconcile_status(
                client,
                model,
                observed.get((model.namespace, model.name)),
                timeout=timeout,
            )
        except Exception as exc:
            if stop_on_error:
                raise
            logger.exception("Status update for %s failed", model.key)
            result.error = exc
        else:
            result.written = outcome.written
            result.status = outcome.status
        results.append(result)

    written = sum(1 for item in results if item.written)
    failed = sum(1 for item in results if not item.ok)
    logger.info("Fleet pass finished: %d objects, %d written, %d failed", len(results), written, failed)
    return results
