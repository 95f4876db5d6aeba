from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import BootstrapConfig
from ..lib import docker

logger = logging.getLogger(__name__)


class InstallRuntimeStep:
    step_id = "40_install_runtime"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg: BootstrapConfig = state["config"]
        installed = False

        if docker.is_installed():
            logger.info("docker already installed; skipping installation")
        else:
            docker.install_docker(
                cfg.docker_install_url,
                version=cfg.docker_version,
                probe_timeout=cfg.probe_timeout,
                fetch_timeout=cfg.fetch_timeout,
                dry_run=cfg.dry_run,
            )
            docker.start_service(dry_run=cfg.dry_run)
            installed = True

        docker.ensure_enabled_at_boot(dry_run=cfg.dry_run)

        state.setdefault("execution", {}).setdefault("decisions", {})["docker_installed"] = installed
        return state
