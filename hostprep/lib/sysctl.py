from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from ..errors import ConfigWriteFailed, ParameterApplyFailed
from .command import run_cmd

logger = logging.getLogger(__name__)


def _line_pattern(key: str, value: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*{re.escape(key)}\s*=\s*{re.escape(value)}\s*$")


def conf_has_parameter(path: str, key: str, value: str) -> bool:
    p = Path(path)
    if not p.exists():
        return False
    pattern = _line_pattern(key, value)
    for line in p.read_text(encoding="utf-8", errors="ignore").splitlines():
        if line.lstrip().startswith(("#", ";")):
            continue
        if pattern.match(line):
            return True
    return False


def ensure_conf_parameter(path: str, key: str, value: str, *, dry_run: bool = False) -> bool:
    """Append ``key = value`` to a sysctl config file unless already present.

    Returns True if the file was (or would have been) written.
    """

    if conf_has_parameter(path, key, value):
        logger.info("%s already sets %s = %s", path, key, value)
        return False

    line = f"{key} = {value}\n"
    if dry_run:
        logger.info("Would append %r to %s", line.strip(), path)
        return True

    p = Path(path)
    try:
        existing = p.read_text(encoding="utf-8", errors="ignore") if p.exists() else ""
        with p.open("a", encoding="utf-8") as fh:
            if existing and not existing.endswith("\n"):
                fh.write("\n")
            fh.write(line)
    except OSError as e:
        raise ConfigWriteFailed(f"Failed to append '{line.strip()}' to {path}: {e}") from e

    logger.info("Appended '%s' to %s", line.strip(), path)
    return True


def live_value(key: str, *, dry_run: bool = False) -> Optional[str]:
    """Current kernel value for a sysctl key, whitespace-normalized."""

    r = run_cmd(["sysctl", "-n", key], check=False, dry_run=dry_run)
    if r.returncode != 0:
        return None
    return " ".join(r.stdout.split()) or None


def ensure_live_parameter(key: str, value: str, *, dry_run: bool = False) -> bool:
    """Apply ``key=value`` to the running kernel unless already active.

    Returns True if ``sysctl -w`` was run.
    """

    if dry_run:
        run_cmd(["sysctl", "-w", f"{key}={value}"], dry_run=True)
        return True

    current = live_value(key)
    if current == value:
        logger.info("Kernel already has %s = %s", key, value)
        return False

    r = run_cmd(["sysctl", "-w", f"{key}={value}"], check=False)
    if r.returncode != 0:
        raise ParameterApplyFailed(
            f"Failed to execute 'sysctl -w {key}={value}': {r.stderr.strip()}"
        )
    logger.info("Applied %s = %s (was %s)", key, value, current)
    return True
