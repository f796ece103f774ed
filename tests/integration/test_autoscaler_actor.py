"""
Integration tests for the Ray-hosted autoscaler actor.
"""

from __future__ import annotations

import ray

from podscale.core.actors import ActorConfig, AutoscalerActor
from podscale.core.conditions import ConditionMap
from podscale.core.entities import ConditionType
from podscale.core.model import PolicyModel
from tests.builders import (
    ANYTIME,
    CONTAINER_NAME,
    RecordingStatusClient,
    at,
    candidate,
    condition,
    make_pod,
    make_policy,
    observed_status,
    recommendation,
)


class StoreConflict(Exception):
    pass


def _model(name: str) -> PolicyModel:
    conditions = ConditionMap()
    conditions.set(ConditionType.RECOMMENDATION_PROVIDED, True, "reason", "msg", now=ANYTIME)
    return PolicyModel(
        namespace="default",
        name=name,
        recommendation=recommendation({CONTAINER_NAME: ("5", "200")}),
        conditions=conditions,
    )


def test_actor_resolves_controlling_policies(ray_runtime):
    actor = AutoscalerActor.remote(ActorConfig(name="resolver"), RecordingStatusClient())
    candidates = [
        candidate(make_policy(name="b", created=at(10)), "app = testingApp"),
        candidate(make_policy(name="a", created=at(5)), "app = testingApp"),
        candidate(make_policy(name="n", created=at(2)), "app = other"),
    ]
    pods = [make_pod(name="web"), make_pod(name="lonely", labels={"app": "none"})]

    assignments = ray.get(actor.resolve.remote(pods, candidates))

    assert assignments == {"default/web": "default/a", "default/lonely": None}


def test_actor_reconcile_cycle(ray_runtime):
    client = RecordingStatusClient(error=StoreConflict("conflict"), fail_for={"broken"})
    actor = AutoscalerActor.remote(ActorConfig(name="reconciler", update_timeout=5.0), client)
    up_to_date = observed_status(
        {CONTAINER_NAME: ("5", "200")},
        [condition(ConditionType.RECOMMENDATION_PROVIDED.value)],
    )
    observed = {("default", "fresh"): up_to_date}

    first = ray.get(actor.reconcile.remote([_model("fresh"), _model("stale"), _model("broken")], observed))

    assert [(item["name"], item["written"], item["ok"]) for item in first] == [
        ("fresh", False, True),
        ("stale", True, True),
        ("broken", False, False),
    ]
    assert "conflict" in first[2]["error"]

    second = ray.get(actor.reconcile.remote([_model("fresh")], observed))
    assert second[0]["written"] is False
    assert ray.get(actor.stats.remote()) == {"name": "reconciler", "cycles": 2}
