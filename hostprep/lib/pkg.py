from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd, which

logger = logging.getLogger(__name__)


def package_manager() -> str | None:
    for pm in ("apt-get", "yum"):
        if which(pm):
            return pm
    return None


def install_packages(packages: Sequence[str], *, dry_run: bool = False) -> bool:
    """Install host packages with apt-get (Debian family) or yum (RHEL family).

    Returns False when no supported package manager exists or the install fails.
    """

    if not packages:
        return True

    pm = package_manager()
    if pm is None:
        logger.warning("No supported package manager found (apt-get/yum)")
        return False

    if pm == "apt-get":
        run_cmd(["apt-get", "update"], check=False, dry_run=dry_run)
        r = run_cmd(
            ["apt-get", "install", "-y", *packages],
            check=False,
            env={"DEBIAN_FRONTEND": "noninteractive"},
            dry_run=dry_run,
        )
    else:
        r = run_cmd(["yum", "-y", "install", *packages], check=False, dry_run=dry_run)

    if r.returncode != 0:
        logger.warning("Installing %s with %s failed: %s", " ".join(packages), pm, r.stderr.strip())
        return False
    return True
