"""
Object builders and an in-memory status client shared by the tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from podscale.core.entities import (
    Condition,
    ConditionStatus,
    Container,
    Pod,
    PolicyObject,
    PolicyStatus,
    RecommendedContainerResources,
    RecommendedPodResources,
    resource_list,
)
from podscale.core.matching import CandidatePolicy
from podscale.core.selectors import parse_selector

ANYTIME = datetime.fromtimestamp(0, tz=timezone.utc)
CONTAINER_NAME = "container1"


def at(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def make_pod(
    name: str = "test-pod",
    namespace: str = "default",
    labels: Optional[Dict[str, str]] = None,
    containers: Iterable[str] = (CONTAINER_NAME,),
) -> Pod:
    return Pod(
        name=name,
        namespace=namespace,
        labels=dict(labels if labels is not None else {"app": "testingApp"}),
        containers=[
            Container(name=item, requests=resource_list(cpu="1", memory="100M")) for item in containers
        ],
    )


def make_policy(
    name: str = "vpa",
    namespace: str = "default",
    created: datetime = ANYTIME,
) -> PolicyObject:
    return PolicyObject(name=name, namespace=namespace, creation_timestamp=created)


def candidate(policy: PolicyObject, selector: str) -> CandidatePolicy:
    return CandidatePolicy(policy=policy, selector=parse_selector(selector))


def recommendation(targets: Dict[str, Tuple[str, str]]) -> RecommendedPodResources:
    """``targets`` maps a container name to its ``(cpu, memory)`` target."""
    return RecommendedPodResources(
        container_recommendations=[
            RecommendedContainerResources(container_name=name, target=resource_list(cpu=cpu, memory=memory))
            for name, (cpu, memory) in targets.items()
        ]
    )


def condition(
    condition_type: str,
    status: ConditionStatus = ConditionStatus.TRUE,
    reason: str = "reason",
    message: str = "msg",
    when: datetime = ANYTIME,
) -> Condition:
    return Condition(
        type=condition_type,
        status=status,
        reason=reason,
        message=message,
        last_transition_time=when,
    )


def observed_status(
    targets: Dict[str, Tuple[str, str]],
    conditions: Iterable[Condition] = (),
) -> PolicyStatus:
    return PolicyStatus(recommendation=recommendation(targets), conditions=list(conditions))


class RecordingStatusClient:
    """Stores every ``update_status`` call; raises for the names in ``fail_for``."""

    def __init__(self, error: Optional[Exception] = None, fail_for: Iterable[str] = ()):
        self.error = error
        self.fail_for = set(fail_for)
        self.calls: List[Tuple[str, str, PolicyStatus, Optional[float]]] = []
        self.stored: Dict[Tuple[str, str], PolicyStatus] = {}

    def update_status(
        self,
        namespace: str,
        name: str,
        status: PolicyStatus,
        *,
        timeout: Optional[float] = None,
    ) -> PolicyStatus:
        self.calls.append((namespace, name, status, timeout))
        if self.error is not None and (not self.fail_for or name in self.fail_for):
            raise self.error
        self.stored[(namespace, name)] = status
        return status
