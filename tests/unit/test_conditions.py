"""
Unit tests for ConditionMap transition-time bookkeeping.
"""

from __future__ import annotations

from podscale.core.conditions import ConditionMap
from podscale.core.entities import Condition, ConditionStatus, ConditionType
from tests.builders import at, condition


def test_set_stamps_new_condition():
    conditions = ConditionMap()
    created = conditions.set(ConditionType.LOW_CONFIDENCE, True, "few samples", "msg", now=at(10))
    assert created.status is ConditionStatus.TRUE
    assert created.last_transition_time == at(10)
    assert conditions.is_active("LowConfidence")


def test_same_status_keeps_transition_time():
    conditions = ConditionMap()
    conditions.set(ConditionType.RECOMMENDATION_PROVIDED, True, "a", "first", now=at(10))
    updated = conditions.set(ConditionType.RECOMMENDATION_PROVIDED, True, "b", "second", now=at(99))
    assert updated.last_transition_time == at(10)
    assert (updated.reason, updated.message) == ("b", "second")
    assert len(conditions) == 1


def test_flipped_status_moves_transition_time():
    conditions = ConditionMap([condition("RecommendationProvided", when=at(10))])
    flipped = conditions.set("RecommendationProvided", False, "reason", "msg", now=at(20))
    assert flipped.last_transition_time == at(20)
    assert not conditions.is_active(ConditionType.RECOMMENDATION_PROVIDED)

    unknown = conditions.set("RecommendationProvided", None, now=at(30))
    assert unknown.status is ConditionStatus.UNKNOWN
    assert unknown.last_transition_time == at(30)


def test_enum_and_string_types_share_a_key():
    conditions = ConditionMap()
    conditions.set(ConditionType.NO_PODS_MATCHED, True, now=at(1))
    assert conditions.get("NoPodsMatched") is conditions.get(ConditionType.NO_PODS_MATCHED)
    assert "NoPodsMatched" in conditions
    assert conditions.remove(ConditionType.NO_PODS_MATCHED) is not None
    assert conditions.get("NoPodsMatched") is None


def test_as_list_is_sorted_by_type():
    conditions = ConditionMap()
    conditions.set("RecommendationProvided", True, now=at(1))
    conditions.set("LowConfidence", False, now=at(1))
    conditions.set("FetchingHistory", "Unknown", now=at(1))
    assert [item.type for item in conditions.as_list()] == [
        "FetchingHistory",
        "LowConfidence",
        "RecommendationProvided",
    ]
    assert list(conditions) == ["FetchingHistory", "LowConfidence", "RecommendationProvided"]


def test_offset_less_transition_time_is_utc():
    parsed = Condition.from_dict(
        {"type": "LowConfidence", "status": "False", "lastTransitionTime": "1970-01-01T00:00:42"}
    )
    assert parsed.last_transition_time == at(42)
    assert parsed.last_transition_time.tzinfo is not None
