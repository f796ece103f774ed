"""
Desired state of a policy object as produced by the recommender.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from podscale.core.conditions import ConditionMap
from podscale.core.entities import PolicyStatus, RecommendedPodResources


@dataclass
class PolicyModel:
    """In-memory model of one policy object: its identity, recommendation and conditions."""

    namespace: str
    name: str
    recommendation: Optional[RecommendedPodResources] = None
    conditions: ConditionMap = field(default_factory=ConditionMap)

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    def as_status(self) -> PolicyStatus:
        """Full status to persist, detached from the model."""
        return PolicyStatus(
            recommendation=copy.deepcopy(self.recommendation),
            conditions=self.conditions.as_list(),
        )
