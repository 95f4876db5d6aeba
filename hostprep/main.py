from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

import yaml

from .config import BootstrapConfig, load_config
from .errors import BootstrapError, OperatorAbort
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .steps import (
    CheckPrivilegesStep,
    CheckStorageDriverStep,
    DiscoverAddressesStep,
    InstallAdminConsoleStep,
    InstallRuntimeStep,
    ProbeNetworkStep,
    TuneKernelStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        CheckPrivilegesStep(),
        ProbeNetworkStep(),
        TuneKernelStep(),
        InstallRuntimeStep(),
        CheckStorageDriverStep(),
        DiscoverAddressesStep(),
        InstallAdminConsoleStep(),
    ]


def run(config: BootstrapConfig, *, steps=None) -> Dict[str, Any]:
    """Run the bootstrap pipeline and return the final state."""

    state: Dict[str, Any] = {
        "config": config,
        "execution": {"current_step": None, "decisions": {}},
    }

    try:
        result = run_pipeline(state=state, steps=steps if steps is not None else build_steps())
    except (BootstrapError, OperatorAbort):
        raise
    except Exception:
        logger.exception("Bootstrap failed in step %s", state["execution"].get("current_step"))
        raise

    result.state["execution"]["ran_steps"] = result.ran_steps
    return result.state


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="hostprep",
        description="Prepare this host for the Replicated admin console and install it.",
    )
    p.add_argument("--config", default=None, help="YAML file overriding built-in defaults")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to install log")
    p.add_argument("--dry-run", action="store_true", default=None, help="Log host changes instead of making them")
    p.add_argument("--yes", dest="assume_yes", action="store_true", default=None,
                   help="Continue past the storage driver warning without prompting")

    args = p.parse_args(argv)

    log_file = configure_logging(log_path=args.log)

    try:
        config = load_config(args.config, dry_run=args.dry_run, assume_yes=args.assume_yes)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error("ERROR: invalid configuration: %s", e)
        return 1

    try:
        state = run(config)
    except OperatorAbort as e:
        logger.info("Stopping: %s", e)
        return 0
    except BootstrapError as e:
        logger.error("ERROR: %s", e)
        logger.error("See %s for details", log_file)
        return 1

    decisions = state["execution"]["decisions"]
    logger.info(
        "Bootstrap complete (private-address=%s public-address=%s)",
        decisions.get("bridge_address"),
        decisions.get("host_address"),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
