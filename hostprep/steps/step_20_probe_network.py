from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import BootstrapConfig
from ..errors import NetworkUnreachable
from ..lib.net import find_unreachable

logger = logging.getLogger(__name__)


class ProbeNetworkStep:
    step_id = "20_probe_network"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg: BootstrapConfig = state["config"]

        logger.info("Testing network access...")
        unreachable = find_unreachable(cfg.endpoints, timeout=cfg.probe_timeout)
        state.setdefault("execution", {}).setdefault("decisions", {})["unreachable"] = unreachable

        if unreachable:
            for url in unreachable:
                logger.error("FAILED: %s", url)
            raise NetworkUnreachable(unreachable)
        return state
