from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import PermissionDenied
from ..lib.env import is_root

logger = logging.getLogger(__name__)


class CheckPrivilegesStep:
    step_id = "10_check_privileges"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        if not is_root():
            raise PermissionDenied("Please run as root/sudo")
        return state
