"""
Domain entities used throughout the PodScale core.
"""

from .pod import Container, Pod  # noqa: F401
from .policy import (  # noqa: F401
    DEFAULT_CONTAINER_NAME,
    ContainerBinding,
    ContainerRule,
    ContainerScalingMode,
    DefaultContainer,
    PodResourcePolicy,
    PolicyObject,
    SpecificContainer,
    UpdateMode,
    binding_from_name,
)
from .resources import QuantityError, ResourceList, parse_quantity, resource_list  # noqa: F401
from .types import (  # noqa: F401
    Condition,
    ConditionStatus,
    ConditionType,
    PolicyStatus,
    RecommendedContainerResources,
    RecommendedPodResources,
    parse_timestamp,
)

__all__ = [
    "Container",
    "Pod",
    "DEFAULT_CONTAINER_NAME",
    "ContainerBinding",
    "ContainerRule",
    "ContainerScalingMode",
    "DefaultContainer",
    "PodResourcePolicy",
    "PolicyObject",
    "SpecificContainer",
    "UpdateMode",
    "binding_from_name",
    "QuantityError",
    "ResourceList",
    "parse_quantity",
    "resource_list",
    "Condition",
    "ConditionStatus",
    "ConditionType",
    "PolicyStatus",
    "RecommendedContainerResources",
    "RecommendedPodResources",
]
