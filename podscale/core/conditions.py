"""
Condition bookkeeping for a policy object.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, List, Optional, Union

from podscale.core.entities.types import (
    Condition,
    ConditionStatus,
    ConditionType,
    condition_type_key,
)

ConditionTypeLike = Union[ConditionType, str]
StatusLike = Union[ConditionStatus, bool, str, None]


class ConditionMap:
    """
    Conditions keyed by type; each type appears at most once.

    :meth:`set` owns the transition-time rule: the previous
    ``last_transition_time`` is kept while the status value stays the same
    and is stamped with the current time when it flips.
    """

    def __init__(self, conditions: Optional[Iterable[Condition]] = None):
        self._conditions: Dict[str, Condition] = {}
        for condition in conditions or ():
            self._conditions[condition.type] = condition

    def get(self, condition_type: ConditionTypeLike) -> Optional[Condition]:
        return self._conditions.get(condition_type_key(condition_type))

    def set(
        self,
        condition_type: ConditionTypeLike,
        status: StatusLike,
        reason: str = "",
        message: str = "",
        *,
        now: Optional[datetime] = None,
    ) -> Condition:
        key = condition_type_key(condition_type)
        value = ConditionStatus.coerce(status)
        previous = self._conditions.get(key)
        if previous is not None and previous.status == value:
            transition = previous.last_transition_time
        else:
            transition = now or datetime.now(timezone.utc)
        condition = Condition(
            type=key,
            status=value,
            reason=reason,
            message=message,
            last_transition_time=transition,
        )
        self._conditions[key] = condition
        return condition

    def remove(self, condition_type: ConditionTypeLike) -> Optional[Condition]:
        return self._conditions.pop(condition_type_key(condition_type), None)

    def is_active(self, condition_type: ConditionTypeLike) -> bool:
        condition = self.get(condition_type)
        return condition is not None and condition.status == ConditionStatus.TRUE

    def as_list(self) -> List[Condition]:
        """Conditions sorted by type."""
        return [self._conditions[key] for key in sorted(self._conditions)]

    def __contains__(self, condition_type: object) -> bool:
        if not isinstance(condition_type, str):
            return False
        return condition_type_key(condition_type) in self._conditions

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._conditions))

    def __len__(self) -> int:
        return len(self._conditions)

    def __repr__(self) -> str:
        return f"ConditionMap({self.as_list()!r})"
