from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

DEFAULTS: Dict[str, Any] = {
    # Domain list: https://help.replicated.com/community/t/customer-firewalls/55
    "endpoints": [
        "https://registry.replicated.com",
        "https://registry-data.replicated.com",
        "https://quay.io",
        "https://index.docker.io",
        "https://docker.io",
        "https://registry-1.docker.io",
        "https://api.replicated.com",
        "https://get.replicated.com",
    ],
    "probe_timeout": 10,
    "fetch_timeout": 60,
    # Elasticsearch memory map setting.
    "sysctl": {
        "path": "/etc/sysctl.conf",
        "key": "vm.max_map_count",
        "value": "262144",
    },
    "docker": {
        "install_url": "https://get.docker.com",
        # Docker version validated with Replicated; read by the docker installer as $VERSION.
        "version": "18.09.2",
        "daemon_config": "/etc/docker/daemon.json",
        "bridge_interface": "docker0",
    },
    "replicated": {
        "install_url": "https://get.replicated.com/docker?replicated_tag=",
        "version": "2.42.5",
        "ui_port": 8800,
        "tags": ["no-proxy", "no-auto"],
    },
    "storage": {
        "expected_driver": "overlay2",
        "prompt_timeout": 20,
    },
    "dry_run": False,
    "assume_yes": False,
}


def _value(mapping: Dict[str, Any], key: str, default: Any) -> Any:
    """mapping[key], falling back to default only when the key is unset."""
    v = mapping.get(key)
    return default if v is None else v


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def endpoints(self) -> Tuple[str, ...]:
        return tuple(str(u) for u in (self.raw.get("endpoints") or []))

    @property
    def probe_timeout(self) -> float:
        return float(_value(self.raw, "probe_timeout", 10))

    @property
    def fetch_timeout(self) -> float:
        return float(_value(self.raw, "fetch_timeout", 60))

    @property
    def sysctl_path(self) -> str:
        return str(self._section("sysctl").get("path") or "/etc/sysctl.conf")

    @property
    def sysctl_key(self) -> str:
        return str(self._section("sysctl").get("key") or "vm.max_map_count")

    @property
    def sysctl_value(self) -> str:
        return str(self._section("sysctl").get("value") or "262144")

    @property
    def docker_install_url(self) -> str:
        return str(self._section("docker").get("install_url") or "https://get.docker.com")

    @property
    def docker_version(self) -> str:
        return str(self._section("docker").get("version") or "")

    @property
    def docker_daemon_config(self) -> str:
        return str(self._section("docker").get("daemon_config") or "/etc/docker/daemon.json")

    @property
    def bridge_interface(self) -> str:
        return str(self._section("docker").get("bridge_interface") or "docker0")

    @property
    def replicated_install_url(self) -> str:
        return str(self._section("replicated").get("install_url") or "")

    @property
    def replicated_version(self) -> str:
        return str(self._section("replicated").get("version") or "")

    @property
    def ui_port(self) -> int:
        return int(_value(self._section("replicated"), "ui_port", 8800))

    @property
    def installer_tags(self) -> List[str]:
        return [str(t) for t in (self._section("replicated").get("tags") or [])]

    @property
    def expected_storage_driver(self) -> str:
        return str(self._section("storage").get("expected_driver") or "overlay2")

    @property
    def prompt_timeout(self) -> float:
        return float(_value(self._section("storage"), "prompt_timeout", 20))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def assume_yes(self) -> bool:
        return bool(self.raw.get("assume_yes", False))


def load_config(path: Optional[str] = None, **overrides: Any) -> BootstrapConfig:
    """Defaults, overlaid by an optional YAML file, overlaid by keyword overrides."""

    raw = copy.deepcopy(DEFAULTS)

    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(path)
        if p.suffix.lower() not in {".yaml", ".yml"}:
            raise ValueError("config must be YAML")

        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping/object")
        raw = _merge(raw, data)

    raw = _merge(raw, {k: v for k, v in overrides.items() if v is not None})
    return BootstrapConfig(raw=raw)
