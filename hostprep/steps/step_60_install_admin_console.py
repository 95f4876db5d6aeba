from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import BootstrapConfig
from ..lib.replicated import build_installer_args, installer_url, run_installer

logger = logging.getLogger(__name__)


class InstallAdminConsoleStep:
    step_id = "60_install_admin_console"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg: BootstrapConfig = state["config"]
        decisions = state.get("execution", {}).get("decisions") or {}
        bridge = decisions.get("bridge_address")
        host = decisions.get("host_address")
        if not bridge or not host:
            raise RuntimeError("Missing bridge/host address; run address discovery first")

        url = installer_url(cfg.replicated_install_url, cfg.replicated_version)
        args = build_installer_args(bridge, host, tags=cfg.installer_tags, ui_port=cfg.ui_port)
        state["execution"]["decisions"]["installer_args"] = args

        logger.info("Installing the Replicated Admin Console...")
        run_installer(url, args, fetch_timeout=cfg.fetch_timeout, dry_run=cfg.dry_run)
        return state
