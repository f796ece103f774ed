"""
Conditional status writes for policy objects.

:func:`reconcile_status` compares the desired status with the observed one and
issues at most one ``update_status`` call. Re-running it against an unchanged
world produces no traffic at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from podscale.core.entities import PolicyStatus
from podscale.core.model import PolicyModel

logger = logging.getLogger(__name__)


class StatusClient(Protocol):
    """Write path for policy object status."""

    def update_status(
        self,
        namespace: str,
        name: str,
        status: PolicyStatus,
        *,
        timeout: Optional[float] = None,
    ) -> PolicyStatus:
        """Replace the whole status of ``namespace/name`` and return the stored result."""


@dataclass(frozen=True)
class ReconcileResult:
    status: Optional[PolicyStatus]
    written: bool


def recommendations_equal(desired: PolicyStatus, observed: PolicyStatus) -> bool:
    """Same containers with the same target quantities."""
    return desired.recommendation_targets() == observed.recommendation_targets()


def conditions_equal(desired: PolicyStatus, observed: PolicyStatus) -> bool:
    """Same condition types with the same status, reason and message.

    Transition times are not compared. A status that lists the same type
    twice never compares equal, so the next write replaces it.
    """
    wanted = desired.conditions_by_type()
    current = observed.conditions_by_type()
    if len(current) != len(observed.conditions) or len(wanted) != len(desired.conditions):
        return False
    if wanted.keys() != current.keys():
        return False
    for condition_type, condition in wanted.items():
        other = current[condition_type]
        if (condition.status, condition.reason, condition.message) != (
            other.status,
            other.reason,
            other.message,
        ):
            return False
    return True


def status_needs_update(desired: PolicyStatus, observed: Optional[PolicyStatus]) -> bool:
    observed = observed if observed is not None else PolicyStatus()
    return not (recommendations_equal(desired, observed) and conditions_equal(desired, observed))


def reconcile_status(
    client: StatusClient,
    desired_model: PolicyModel,
    observed_status: Optional[PolicyStatus],
    *,
    timeout: Optional[float] = None,
) -> ReconcileResult:
    """
    Write the desired status of ``desired_model`` if it differs from ``observed_status``.

    Args:
        client: Status write path; called at most once.
        desired_model: Model the desired status is built from.
        observed_status: Status currently persisted, ``None`` when there is none.
        timeout: Passed through to ``client.update_status`` unchanged.

    Returns:
        ``ReconcileResult(observed_status, False)`` when nothing changed,
        otherwise the client's result with ``written=True``.

    Errors raised by the client propagate unchanged; there is no retry here.
    """
    desired = desired_model.as_status()
    if not status_needs_update(desired, observed_status):
        logger.debug("Status of %s is up to date, skipping write", desired_model.key)
        return ReconcileResult(status=observed_status, written=False)

    logger.info("Updating status of %s", desired_model.key)
    result = client.update_status(
        desired_model.namespace,
        desired_model.name,
        desired,
        timeout=timeout,
    )
    return ReconcileResult(status=result, written=True)
