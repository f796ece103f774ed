"""
Pod entity definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from podscale.core.entities.resources import ResourceList, resource_list_from_dict


@dataclass
class Container:
    """A single container of a pod with its requests and limits."""

    name: str
    requests: ResourceList = field(default_factory=dict)
    limits: ResourceList = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Container":
        resources = payload.get("resources") or {}
        return cls(
            name=str(payload.get("name", "")),
            requests=resource_list_from_dict(resources.get("requests")),
            limits=resource_list_from_dict(resources.get("limits")),
        )


@dataclass
class Pod:
    """Workload pod as seen during one reconciliation pass."""

    name: str
    namespace: str = "default"
    labels: Dict[str, str] = field(default_factory=dict)
    containers: List[Container] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Pod":
        """Build a pod from a manifest-shaped mapping (``metadata``/``spec``)."""
        metadata = payload.get("metadata") or {}
        spec = payload.get("spec") or {}
        return cls(
            name=str(metadata.get("name", "")),
            namespace=str(metadata.get("namespace") or "default"),
            labels=dict(metadata.get("labels") or {}),
            containers=[Container.from_dict(item) for item in spec.get("containers") or []],
        )
