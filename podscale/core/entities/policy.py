"""
Autoscaler policy object definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from podscale.core.entities.resources import ResourceList, resource_list_from_dict
from podscale.core.entities.types import PolicyStatus, parse_timestamp

# Name used on the wire for the rule that covers every container not named explicitly.
DEFAULT_CONTAINER_NAME = "*"


@dataclass(frozen=True)
class SpecificContainer:
    """Rule bound to exactly one container name."""

    name: str


@dataclass(frozen=True)
class DefaultContainer:
    """Rule bound to all containers that have no rule of their own."""


ContainerBinding = Union[SpecificContainer, DefaultContainer]


def binding_from_name(name: str) -> ContainerBinding:
    if name == DEFAULT_CONTAINER_NAME:
        return DefaultContainer()
    return SpecificContainer(name)


def binding_to_name(binding: ContainerBinding) -> str:
    if isinstance(binding, DefaultContainer):
        return DEFAULT_CONTAINER_NAME
    return binding.name


class UpdateMode(str, Enum):
    """How recommendations are applied to the governed pods."""

    OFF = "Off"
    INITIAL = "Initial"
    RECREATE = "Recreate"
    AUTO = "Auto"


class ContainerScalingMode(str, Enum):
    AUTO = "Auto"
    OFF = "Off"


@dataclass
class ContainerRule:
    """Per-container bounds inside a policy object's resource policy."""

    binding: ContainerBinding
    min_allowed: ResourceList = field(default_factory=dict)
    max_allowed: ResourceList = field(default_factory=dict)
    mode: Optional[ContainerScalingMode] = None

    @property
    def container_name(self) -> str:
        return binding_to_name(self.binding)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ContainerRule":
        raw_mode = payload.get("mode")
        return cls(
            binding=binding_from_name(str(payload.get("containerName", DEFAULT_CONTAINER_NAME))),
            min_allowed=resource_list_from_dict(payload.get("minAllowed")),
            max_allowed=resource_list_from_dict(payload.get("maxAllowed")),
            mode=ContainerScalingMode(raw_mode) if raw_mode else None,
        )


@dataclass
class PodResourcePolicy:
    container_policies: List[ContainerRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "PodResourcePolicy":
        payload = payload or {}
        return cls(
            container_policies=[
                ContainerRule.from_dict(item) for item in payload.get("containerPolicies") or []
            ]
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PolicyObject:
    """
    The autoscaler object.

    ``creation_timestamp`` is assigned when the object is created and is never
    changed afterwards. ``selector`` holds the raw selector; matching works on
    the compiled form carried by :class:`~podscale.core.matching.CandidatePolicy`.
    """

    name: str
    namespace: str = "default"
    creation_timestamp: datetime = field(default_factory=_now)
    selector: Optional[Union[str, Dict[str, Any]]] = None
    resource_policy: Optional[PodResourcePolicy] = None
    update_mode: Optional[UpdateMode] = None
    status: PolicyStatus = field(default_factory=PolicyStatus)

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PolicyObject":
        metadata = payload.get("metadata") or {}
        spec = payload.get("spec") or {}
        created = parse_timestamp(metadata.get("creationTimestamp")) or _now()
        update_policy = spec.get("updatePolicy") or {}
        raw_mode = update_policy.get("updateMode")
        raw_resource_policy = spec.get("resourcePolicy")
        return cls(
            name=str(metadata.get("name", "")),
            namespace=str(metadata.get("namespace") or "default"),
            creation_timestamp=created,
            selector=spec.get("selector"),
            resource_policy=PodResourcePolicy.from_dict(raw_resource_policy)
            if raw_resource_policy is not None
            else None,
            update_mode=UpdateMode(raw_mode) if raw_mode else None,
            status=PolicyStatus.from_dict(payload.get("status")),
        )
