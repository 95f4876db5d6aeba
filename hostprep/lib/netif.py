"""Bridge and host address discovery.

Different distros and docker releases expose different tooling, so the bridge
address is looked up through an ordered list of strategies and the first one
that yields an address wins.
"""

from __future__ import annotations

import ipaddress
import json
import logging
import re
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..config import BootstrapConfig
from ..errors import BridgeAddressNotFound, HostAddressNotFound
from .command import run_cmd, which
from .pkg import install_packages

logger = logging.getLogger(__name__)

# Matches iproute2 ("inet 10.0.0.2/24"), net-tools ("inet 10.0.0.2  netmask")
# and old net-tools ("inet addr:10.0.0.2"). "inet6" does not match.
_INET_RE = re.compile(r"\binet (?:addr:)?(\d{1,3}(?:\.\d{1,3}){3})")

BridgeStrategy = Callable[[BootstrapConfig], Optional[str]]


def parse_ipv4_addresses(text: str) -> List[str]:
    """All IPv4 addresses from ``ip addr`` or ``ifconfig`` output, in order."""

    out: List[str] = []
    for m in _INET_RE.finditer(text or ""):
        try:
            out.append(str(ipaddress.IPv4Address(m.group(1))))
        except ipaddress.AddressValueError:
            continue
    return out


def first_routable(addresses: Iterable[str], exclude: Iterable[str] = ()) -> Optional[str]:
    skip = set(exclude)
    for addr in addresses:
        if addr in skip:
            continue
        if not ipaddress.IPv4Address(addr).is_loopback:
            return addr
    return None


def parse_bip(daemon_json: str) -> Optional[str]:
    """Address part of the ``bip`` key (e.g. "172.26.0.1/16") in daemon.json."""

    try:
        data = json.loads(daemon_json)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    bip = str(data.get("bip") or "").strip()
    if not bip:
        return None
    try:
        return str(ipaddress.IPv4Interface(bip).ip)
    except ValueError:
        return None


def parse_network_gateway(inspect_json: str) -> Optional[str]:
    """First IPv4 gateway from ``docker network inspect`` output."""

    try:
        data = json.loads(inspect_json)
    except ValueError:
        return None
    networks = data if isinstance(data, list) else [data]
    for net in networks:
        if not isinstance(net, dict):
            continue
        for cfg in (net.get("IPAM") or {}).get("Config") or []:
            gw = (cfg or {}).get("Gateway")
            if not gw:
                continue
            try:
                return str(ipaddress.IPv4Address(gw))
            except ValueError:
                continue
    return None


def _first_of(text: str) -> Optional[str]:
    addrs = parse_ipv4_addresses(text)
    return addrs[0] if addrs else None


def bridge_from_ip(config: BootstrapConfig) -> Optional[str]:
    r = run_cmd(["ip", "-4", "addr", "show", "dev", config.bridge_interface], check=False)
    return _first_of(r.stdout) if r.ok else None


def bridge_from_ifconfig(config: BootstrapConfig) -> Optional[str]:
    r = run_cmd(["ifconfig", config.bridge_interface], check=False)
    return _first_of(r.stdout) if r.ok else None


def bridge_from_daemon_config(config: BootstrapConfig) -> Optional[str]:
    p = Path(config.docker_daemon_config)
    try:
        return parse_bip(p.read_text(encoding="utf-8"))
    except OSError:
        return None


def bridge_from_docker_network(config: BootstrapConfig) -> Optional[str]:
    r = run_cmd(["docker", "network", "inspect", "bridge"], check=False)
    return parse_network_gateway(r.stdout) if r.ok else None


BRIDGE_STRATEGIES: Tuple[BridgeStrategy, ...] = (
    bridge_from_ip,
    bridge_from_ifconfig,
    bridge_from_daemon_config,
    bridge_from_docker_network,
)


def resolve_bridge_address(
    config: BootstrapConfig,
    strategies: Sequence[BridgeStrategy] = BRIDGE_STRATEGIES,
) -> str:
    for strategy in strategies:
        addr = strategy(config)
        if addr:
            logger.info("Bridge address %s (via %s)", addr, strategy.__name__)
            return addr
        logger.debug("No bridge address via %s", strategy.__name__)
    raise BridgeAddressNotFound(
        f"Unable to determine the {config.bridge_interface} interface IP address"
    )


def list_interfaces(*, dry_run: bool = False) -> str:
    """Raw interface table: iproute2 when present, net-tools otherwise.

    Installs net-tools if neither tool exists.
    """

    if not which("ip") and not which("ifconfig"):
        logger.info("Neither 'ip' nor 'ifconfig' found; installing net-tools")
        install_packages(["net-tools"], dry_run=dry_run)

    if which("ip"):
        r = run_cmd(["ip", "-4", "-o", "addr", "show"], check=False)
        if r.ok:
            return r.stdout
    if which("ifconfig"):
        r = run_cmd(["ifconfig", "-a"], check=False, env={"LANG": "C"})
        if r.ok:
            return r.stdout
    raise HostAddressNotFound("No interface listing tool available (ip/ifconfig)")


def resolve_host_address(interface_table: str, *, exclude: Sequence[str] = ()) -> str:
    """First non-loopback IPv4 address of the interface table.

    Pass the bridge address in ``exclude``: net-tools lists interfaces
    alphabetically, so docker0 comes before eth0.
    """

    addr = first_routable(parse_ipv4_addresses(interface_table), exclude)
    if addr is None:
        raise HostAddressNotFound("Unable to determine the routable, primary interface IP address")
    logger.info("Host address %s", addr)
    return addr
