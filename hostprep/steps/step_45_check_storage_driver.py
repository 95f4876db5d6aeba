from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import BootstrapConfig
from ..errors import OperatorAbort
from ..lib.docker import storage_driver
from ..lib.prompt import confirm

logger = logging.getLogger(__name__)

OVERLAY_DOCS_URL = "https://docs.docker.com/storage/storagedriver/overlayfs-driver/"


class CheckStorageDriverStep:
    step_id = "45_check_storage_driver"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg: BootstrapConfig = state["config"]
        expected = cfg.expected_storage_driver

        driver = storage_driver(dry_run=cfg.dry_run)
        state.setdefault("execution", {}).setdefault("decisions", {})["storage_driver"] = driver

        if cfg.dry_run or driver == expected:
            logger.info("Docker is configured to use the '%s' storage driver", expected)
            return state

        if driver is None:
            logger.warning("WARNING: Could not determine the docker storage driver ('docker info' failed)... Proceed with caution!")
        else:
            logger.warning("WARNING: Docker is configured with a non-production storage driver (%s)... Proceed with caution!", driver)
        logger.warning("WARNING:   Configure docker to use the '%s' storage driver", expected)
        logger.warning("WARNING:   For more details see %s", OVERLAY_DOCS_URL)

        if cfg.assume_yes:
            choice: bool | None = True
        else:
            choice = confirm("Continue anyway (Y/n)?", cfg.prompt_timeout)

        if choice is None:
            logger.info("invalid choice")
            raise OperatorAbort("invalid choice at storage driver prompt")
        if not choice:
            raise OperatorAbort("operator declined non-production storage driver")

        logger.warning("WARNING: Risk of using non-production docker storage driver accepted. Continuing with installation...")
        return state
