from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import BootstrapConfig
from ..lib.sysctl import ensure_conf_parameter, ensure_live_parameter

logger = logging.getLogger(__name__)


class TuneKernelStep:
    """Elasticsearch needs vm.max_map_count raised, persistently and live."""

    step_id = "30_tune_kernel"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg: BootstrapConfig = state["config"]
        key, value = cfg.sysctl_key, cfg.sysctl_value

        wrote = ensure_conf_parameter(cfg.sysctl_path, key, value, dry_run=cfg.dry_run)
        applied = ensure_live_parameter(key, value, dry_run=cfg.dry_run)

        decisions = state.setdefault("execution", {}).setdefault("decisions", {})
        decisions["sysctl_written"] = wrote
        decisions["sysctl_applied"] = applied
        return state
