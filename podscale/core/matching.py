"""
Pod to policy-object matching.

Both functions are pure and keep no state between calls, so any number of
reconciliation workers may call them concurrently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timezone
from typing import Iterable, Optional

from podscale.core.entities import Pod, PolicyObject
from podscale.core.selectors import Selector, compile_selector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidatePolicy:
    """A policy object together with its already compiled selector."""

    policy: PolicyObject
    selector: Selector

    @classmethod
    def from_policy(cls, policy: PolicyObject) -> "CandidatePolicy":
        return cls(policy=policy, selector=compile_selector(policy.selector))


def pod_matches_policy(pod: Pod, candidate: CandidatePolicy) -> bool:
    """Return True if ``pod`` lives in the candidate's namespace and satisfies its selector."""
    if pod.namespace != candidate.policy.namespace:
        return False
    return candidate.selector.matches(pod.labels)


def _ownership_key(candidate: CandidatePolicy):
    # Naive timestamps count as UTC. Equal timestamps fall back to the smallest name.
    created = candidate.policy.creation_timestamp
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return (created, candidate.policy.name)


def get_controlling_policy_for_pod(
    pod: Pod,
    candidates: Iterable[CandidatePolicy],
) -> Optional[CandidatePolicy]:
    """
    Pick the policy object that governs ``pod``.

    Among the matching candidates the oldest one wins, so a newly created
    overlapping policy never takes a pod over from the one governing it.

    The winner is returned as its :class:`CandidatePolicy` so callers keep the
    compiled selector; the policy object itself is ``result.policy``.

    Returns:
        The controlling candidate, or ``None`` if no candidate matches.
    """
    controlling: Optional[CandidatePolicy] = None
    for candidate in candidates:
        if not pod_matches_policy(pod, candidate):
            continue
        if controlling is None or _ownership_key(candidate) < _ownership_key(controlling):
            controlling = candidate

    if controlling is None:
        logger.debug("No policy object matches pod %s", pod.key)
    else:
        logger.debug("Pod %s is controlled by %s", pod.key, controlling.policy.key)
    return controlling
