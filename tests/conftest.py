# tests/conftest.py
import pytest

from hostprep.config import load_config
from hostprep.lib.command import CmdResult


@pytest.fixture
def make_result():
    """Factory for CmdResult objects returned by patched run_cmd calls."""

    def _make(stdout="", returncode=0, stderr="", argv=None):
        return CmdResult(argv=list(argv or []), returncode=returncode, stdout=stdout, stderr=stderr)

    return _make


@pytest.fixture
def config(tmp_path):
    """Default configuration with host files redirected into tmp_path."""
    return load_config(
        sysctl={"path": str(tmp_path / "sysctl.conf")},
        docker={"daemon_config": str(tmp_path / "daemon.json")},
    )


@pytest.fixture
def state(config):
    return {"config": config, "execution": {"current_step": None, "decisions": {}}}
