from __future__ import annotations

import logging
from typing import Optional

import requests

from ..errors import InstallerUnreachable, InstallFailed
from .command import run_cmd, run_script, which
from .net import fetch_text, probe

logger = logging.getLogger(__name__)


def is_installed() -> bool:
    return which("docker") is not None


def install_docker(
    install_url: str,
    *,
    version: str,
    probe_timeout: float = 10,
    fetch_timeout: float = 60,
    dry_run: bool = False,
) -> None:
    """Run the vendor convenience script (``curl -fsSL get.docker.com | sh``)."""

    if not probe(install_url, timeout=probe_timeout):
        raise InstallerUnreachable(f"Access to {install_url} is not accessible from this server")

    try:
        script = fetch_text(install_url, timeout=fetch_timeout)
    except requests.exceptions.RequestException as e:
        raise InstallerUnreachable(f"Could not download {install_url}: {e}") from e

    # The convenience script pins its package version from $VERSION.
    env = {"VERSION": version} if version else {}
    r = run_script(script, ["sh"], env=env, dry_run=dry_run)
    if r.returncode != 0:
        raise InstallFailed(f"Something went wrong installing docker-ce-{version} (exit {r.returncode})")
    logger.info("Installed docker-ce-%s", version)


def start_service(*, dry_run: bool = False) -> None:
    r = run_cmd(["systemctl", "start", "docker"], check=False, dry_run=dry_run)
    if r.returncode != 0:
        logger.warning("Could not start docker service: %s", r.stderr.strip())


def ensure_enabled_at_boot(*, dry_run: bool = False) -> bool:
    """Enable the docker unit unless already enabled. Returns True if it ran enable."""

    r = run_cmd(["systemctl", "is-enabled", "docker"], check=False, dry_run=dry_run)
    if not dry_run and r.stdout.strip() == "enabled":
        return False

    r = run_cmd(["systemctl", "enable", "docker"], check=False, dry_run=dry_run)
    if r.returncode != 0:
        logger.warning("Could not enable docker service at boot: %s", r.stderr.strip())
    return True


def storage_driver(*, dry_run: bool = False) -> Optional[str]:
    r = run_cmd(["docker", "info", "--format", "{{.Driver}}"], check=False, dry_run=dry_run)
    if r.returncode != 0:
        return None
    return r.stdout.strip() or None
