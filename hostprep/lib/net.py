from __future__ import annotations

import logging
from typing import Iterable, List

import requests

logger = logging.getLogger(__name__)


def probe(url: str, *, timeout: float = 10) -> bool:
    """Best-effort reachability check.

    Any HTTP response counts as reachable; only connection-level failures
    (DNS, refused, TLS, timeout) count as unreachable.
    """

    try:
        r = requests.get(url, timeout=timeout, allow_redirects=False)
        r.close()
        return True
    except requests.exceptions.RequestException as e:
        logger.debug("Probe %s failed: %s", url, e)
        return False


def find_unreachable(urls: Iterable[str], *, timeout: float = 10) -> List[str]:
    """Probe every URL and return the unreachable ones in input order."""

    failed: List[str] = []
    for url in urls:
        if probe(url, timeout=timeout):
            logger.info("SUCCESS: %s", url)
        else:
            failed.append(url)
    return failed


def fetch_text(url: str, *, timeout: float = 60) -> str:
    """GET a URL and return its body; HTTP errors raise."""

    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return r.text
