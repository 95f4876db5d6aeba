from __future__ import annotations

import logging
from typing import List, Sequence

import requests

from ..errors import InstallerUnreachable, InstallFailed
from .command import run_script
from .net import fetch_text

logger = logging.getLogger(__name__)


def installer_url(base_url: str, version: str) -> str:
    return f"{base_url}{version}"


def build_installer_args(
    private_address: str,
    public_address: str,
    *,
    tags: Sequence[str] = (),
    ui_port: int = 8800,
) -> List[str]:
    return [
        f"private-address={private_address}",
        f"public-address={public_address}",
        *tags,
        f"ui-bind-port={ui_port}",
    ]


def run_installer(url: str, args: Sequence[str], *, fetch_timeout: float = 60, dry_run: bool = False) -> None:
    """Equivalent of ``curl -sSL <url> | bash -s <args>``."""

    try:
        script = fetch_text(url, timeout=fetch_timeout)
    except requests.exceptions.RequestException as e:
        raise InstallerUnreachable(f"Could not download {url}: {e}") from e

    r = run_script(script, ["bash", "-s", *args], dry_run=dry_run)
    if r.returncode != 0:
        raise InstallFailed(f"Replicated installer exited with {r.returncode}")
