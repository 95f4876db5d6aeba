from __future__ import annotations

from typing import Sequence


class BootstrapError(RuntimeError):
    """Fatal condition; the bootstrap stops and exits non-zero."""


class PermissionDenied(BootstrapError):
    pass


class NetworkUnreachable(BootstrapError):
    def __init__(self, endpoints: Sequence[str]):
        self.endpoints = list(endpoints)
        listing = "\n".join(f"  FAILED: {e}" for e in self.endpoints)
        super().__init__(
            "Please resolve network access to the domain(s) and try again:\n" + listing
        )


class ConfigWriteFailed(BootstrapError):
    pass


class ParameterApplyFailed(BootstrapError):
    pass


class InstallerUnreachable(BootstrapError):
    pass


class InstallFailed(BootstrapError):
    pass


class BridgeAddressNotFound(BootstrapError):
    pass


class HostAddressNotFound(BootstrapError):
    pass


class OperatorAbort(Exception):
    """The operator chose not to continue. Not a failure."""
