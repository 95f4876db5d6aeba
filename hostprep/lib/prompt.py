from __future__ import annotations

import logging
import select
import sys
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

YES = {"y", "yes"}
NO = {"n", "no"}


def read_line_with_timeout(
    message: str,
    timeout: float,
    *,
    stream: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> Optional[str]:
    """Like ``read -t <timeout> -p <message>``. Returns None on timeout or EOF."""

    stream = stream or sys.stdin
    out = out or sys.stdout
    out.write(message)
    out.flush()

    ready, _, _ = select.select([stream], [], [], timeout)
    if not ready:
        out.write("\n")
        return None
    line = stream.readline()
    if not line:
        return None
    return line.strip()


def confirm(message: str, timeout: float, *, default: bool = True, **kwargs) -> Optional[bool]:
    """Yes/no prompt. Empty answer or timeout gives ``default``; garbage gives None."""

    answer = read_line_with_timeout(message, timeout, **kwargs)
    if not answer:
        return default
    answer = answer.lower()
    if answer in YES:
        return True
    if answer in NO:
        return False
    return None
