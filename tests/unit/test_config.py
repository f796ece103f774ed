from pathlib import Path
from textwrap import dedent

import pytest

from podscale.core.config import get_reconciler_config, reset_reconciler_config


def test_bundled_defaults(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = get_reconciler_config()
    assert cfg.update_timeout is None
    assert cfg.log_level == "INFO"
    assert cfg.fleet.stop_on_error is False


def test_env_config_file(tmp_path: Path, monkeypatch):
    config_file = tmp_path / "custom.yaml"
    config_file.write_text(
        dedent(
            """
            reconciler:
              update_timeout_seconds: 7.5
              log_level: debug
            fleet:
              stop_on_error: true
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("PODSCALE_CONFIG", str(config_file))
    reset_reconciler_config()

    cfg = get_reconciler_config()
    assert cfg.update_timeout == 7.5
    assert cfg.log_level == "DEBUG"
    assert cfg.log_level_value == 10
    assert cfg.fleet.stop_on_error is True
    assert get_reconciler_config() is cfg


def test_cwd_config_file(tmp_path: Path, monkeypatch):
    (tmp_path / "podscale.yaml").write_text("reconciler:\n  update_timeout_seconds: 3\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert get_reconciler_config().update_timeout == 3.0


@pytest.mark.parametrize(
    "content",
    [
        "reconciler: [1, 2]\n",
        "reconciler:\n  update_timeout_seconds: -1\n",
        "reconciler:\n  update_timeout_seconds: soon\n",
        "reconciler:\n  log_level: chatty\n",
        "fleet: yes\n",
    ],
)
def test_invalid_config(tmp_path: Path, monkeypatch, content):
    (tmp_path / "podscale.yaml").write_text(content, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError):
        get_reconciler_config()
