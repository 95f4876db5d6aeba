from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import BootstrapConfig
from ..lib.netif import list_interfaces, resolve_bridge_address, resolve_host_address

logger = logging.getLogger(__name__)


class DiscoverAddressesStep:
    """private-address is the docker bridge, public-address the primary interface."""

    step_id = "50_discover_addresses"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg: BootstrapConfig = state["config"]

        bridge = resolve_bridge_address(cfg)
        host = resolve_host_address(list_interfaces(dry_run=cfg.dry_run), exclude=[bridge])

        decisions = state.setdefault("execution", {}).setdefault("decisions", {})
        decisions["bridge_address"] = bridge
        decisions["host_address"] = host
        return state
