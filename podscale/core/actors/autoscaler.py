"""
Autoscaler actor.

Hosts matching and status reconciliation for a fleet of policy objects on a
Ray worker, so several passes (one per actor) can run side by side.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

import ray

from .config import ActorConfig
from podscale.core.config import get_reconciler_config
from podscale.core.entities import Pod, PolicyStatus
from podscale.core.fleet import PolicyKey, assign_controlling_policies, reconcile_fleet
from podscale.core.matching import CandidatePolicy
from podscale.core.model import PolicyModel
from podscale.core.status import StatusClient
from podscale.core.utils import configure_runtime_logging

logger = logging.getLogger(__name__)


@ray.remote
class AutoscalerActor:
    """Runs reconciliation cycles against an injected status client."""

    def __init__(self, config: ActorConfig, client: StatusClient):
        settings = get_reconciler_config()
        configure_runtime_logging(level=settings.log_level_value)
        self.config = config
        self.client = client
        self.update_timeout = (
            config.update_timeout if config.update_timeout is not None else settings.update_timeout
        )
        self.stop_on_error = (
            config.stop_on_error if config.stop_on_error is not None else settings.fleet.stop_on_error
        )
        self.cycles = 0
        logger.debug("AutoscalerActor[%s] initialised", config.name)

    def resolve(
        self,
        pods: Sequence[Pod],
        candidates: Sequence[CandidatePolicy],
    ) -> Dict[str, Optional[str]]:
        """Return the controlling policy key for every pod."""
        return assign_controlling_policies(pods, candidates)

    def reconcile(
        self,
        models: Sequence[PolicyModel],
        observed: Mapping[PolicyKey, Optional[PolicyStatus]],
    ) -> List[Dict[str, object]]:
        """Run a reconciliation cycle and report one entry per policy object."""
        self.cycles += 1
        results = reconcile_fleet(
            self.client,
            models,
            observed,
            timeout=self.update_timeout,
            stop_on_error=self.stop_on_error,
        )
        logger.debug("AutoscalerActor[%s] reconcile cycle %d executed", self.config.name, self.cycles)
        return [result.to_dict() for result in results]

    def stats(self) -> Dict[str, object]:
        return {"name": self.config.name, "cycles": self.cycles}
