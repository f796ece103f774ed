"""
Status types shared by the resolvers, the reconciler and the actors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from podscale.core.entities.resources import ResourceList, resource_list_from_dict


class ConditionStatus(str, Enum):
    """Tri-state value carried by a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    @classmethod
    def coerce(cls, value: Union["ConditionStatus", bool, str, None]) -> "ConditionStatus":
        if isinstance(value, ConditionStatus):
            return value
        if value is None:
            return cls.UNKNOWN
        if isinstance(value, bool):
            return cls.TRUE if value else cls.FALSE
        return cls(str(value))


class ConditionType(str, Enum):
    """Well-known condition types of a policy object."""

    RECOMMENDATION_PROVIDED = "RecommendationProvided"
    LOW_CONFIDENCE = "LowConfidence"
    NO_PODS_MATCHED = "NoPodsMatched"
    FETCHING_HISTORY = "FetchingHistory"
    CONFIG_DEPRECATED = "ConfigDeprecated"
    CONFIG_UNSUPPORTED = "ConfigUnsupported"


def condition_type_key(value: Union[ConditionType, str]) -> str:
    """Normalise a condition type to the plain string used as mapping key."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _utc_epoch() -> datetime:
    return datetime.fromtimestamp(0, tz=timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; offset-less values are taken as UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Condition:
    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    last_transition_time: datetime = field(default_factory=_utc_epoch)

    def __post_init__(self) -> None:
        self.type = condition_type_key(self.type)
        self.status = ConditionStatus.coerce(self.status)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Condition":
        transition = parse_timestamp(payload.get("lastTransitionTime")) or _utc_epoch()
        return cls(
            type=str(payload["type"]),
            status=ConditionStatus.coerce(payload.get("status")),
            reason=str(payload.get("reason") or ""),
            message=str(payload.get("message") or ""),
            last_transition_time=transition,
        )


@dataclass
class RecommendedContainerResources:
    """Recommendation for one container; only ``target`` takes part in equality."""

    container_name: str
    target: ResourceList = field(default_factory=dict)
    lower_bound: ResourceList = field(default_factory=dict)
    upper_bound: ResourceList = field(default_factory=dict)
    uncapped_target: ResourceList = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RecommendedContainerResources":
        return cls(
            container_name=str(payload["containerName"]),
            target=resource_list_from_dict(payload.get("target")),
            lower_bound=resource_list_from_dict(payload.get("lowerBound")),
            upper_bound=resource_list_from_dict(payload.get("upperBound")),
            uncapped_target=resource_list_from_dict(payload.get("uncappedTarget")),
        )


@dataclass
class RecommendedPodResources:
    container_recommendations: List[RecommendedContainerResources] = field(default_factory=list)

    def targets(self) -> Dict[str, ResourceList]:
        return {item.container_name: dict(item.target) for item in self.container_recommendations}


@dataclass
class PolicyStatus:
    """Persisted status of a policy object."""

    recommendation: Optional[RecommendedPodResources] = None
    conditions: List[Condition] = field(default_factory=list)

    def recommendation_targets(self) -> Dict[str, ResourceList]:
        if self.recommendation is None:
            return {}
        return self.recommendation.targets()

    def conditions_by_type(self) -> Dict[str, Condition]:
        return {condition.type: condition for condition in self.conditions}

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "PolicyStatus":
        payload = payload or {}
        raw_recommendation = payload.get("recommendation")
        recommendation = None
        if raw_recommendation is not None:
            recommendation = RecommendedPodResources(
                container_recommendations=[
                    RecommendedContainerResources.from_dict(item)
                    for item in raw_recommendation.get("containerRecommendations") or []
                ]
            )
        return cls(
            recommendation=recommendation,
            conditions=[Condition.from_dict(item) for item in payload.get("conditions") or []],
        )
