"""
Per-container rule lookup inside a policy object's resource policy.
"""

from __future__ import annotations

from typing import Optional

from podscale.core.entities import (
    ContainerRule,
    ContainerScalingMode,
    DefaultContainer,
    PodResourcePolicy,
    PolicyObject,
    SpecificContainer,
    UpdateMode,
)


def get_container_resource_policy(
    container_name: str,
    resource_policy: Optional[PodResourcePolicy],
) -> Optional[ContainerRule]:
    """
    Return the rule that applies to ``container_name``.

    A rule naming the container always wins, wherever it sits in the list.
    Otherwise the first default rule applies. ``None`` if neither exists.
    """
    if resource_policy is None:
        return None

    default_rule: Optional[ContainerRule] = None
    for rule in resource_policy.container_policies:
        binding = rule.binding
        if isinstance(binding, SpecificContainer):
            if binding.name == container_name:
                return rule
        elif isinstance(binding, DefaultContainer):
            if default_rule is None:
                default_rule = rule
        else:
            raise TypeError(f"Unsupported container binding: {binding!r}")
    return default_rule


def get_container_scaling_mode(container_name: str, policy: PolicyObject) -> ContainerScalingMode:
    rule = get_container_resource_policy(container_name, policy.resource_policy)
    if rule is None or rule.mode is None:
        return ContainerScalingMode.AUTO
    return rule.mode


def get_update_mode(policy: Optional[PolicyObject]) -> Optional[UpdateMode]:
    """更新模式未设置时默认为 ``Auto``；policy 为空时返回 ``None``。"""
    if policy is None:
        return None
    return policy.update_mode or UpdateMode.AUTO
