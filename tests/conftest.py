"""
Shared pytest fixtures.
"""

from __future__ import annotations

import logging

import pytest
import ray

from podscale.core.config import reset_reconciler_config
from tests.builders import RecordingStatusClient

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s", force=True)
logging.getLogger("podscale").setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def clear_config(monkeypatch):
    monkeypatch.delenv("PODSCALE_CONFIG", raising=False)
    reset_reconciler_config()
    yield
    reset_reconciler_config()


@pytest.fixture
def status_client():
    return RecordingStatusClient()


@pytest.fixture
def ray_runtime():
    """Spin up a single-CPU local Ray cluster for tests and mirror worker logs to the driver."""
    try:
        ray.init(
            ignore_reinit_error=True,
            num_cpus=1,
            include_dashboard=False,
            logging_level=logging.INFO,
        )
    except PermissionError as exc:
        pytest.skip(f"Ray init requires system permissions not available in this environment: {exc}")
    except Exception as exc:  # pragma: no cover - defensive guard for restricted sandboxes
        if "Operation not permitted" in str(exc):
            pytest.skip(f"Ray init skipped due to restricted environment: {exc}")
        raise
    try:
        yield
    finally:
        ray.shutdown()
