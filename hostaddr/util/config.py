from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from hostaddr.types.endpoint import UnresolvedEndpoint
from hostaddr.util.ints import uint16
from hostaddr.util.network import parse_host_port


def config_path_for_filename(root_path: Path, filename: str = "config.yaml") -> Path:
    return root_path / "config" / filename


def load_config(root_path: Path, filename: str = "config.yaml", sub_config: Optional[str] = None) -> Dict[str, Any]:
    """
    Reads `<root_path>/config/<filename>`, optionally returning only the `sub_config` section of it.
    """
    path = config_path_for_filename(root_path, filename)
    if not path.is_file():
        raise ValueError(f"Config not found: {path}")
    with open(path) as opened_config_file:
        config = yaml.safe_load(opened_config_file)
    if not isinstance(config, dict):
        raise ValueError(f"Config {path} does not contain a mapping")
    if sub_config is None:
        return config
    section = config.get(sub_config)
    if not isinstance(section, dict):
        raise ValueError(f"Config {path} has no {sub_config!r} section")
    return section


def _endpoint_from_entry(entry: Any) -> UnresolvedEndpoint:
    # entries are either {"host": ..., "port": ...} or a "host:port" string
    if isinstance(entry, str):
        host, port = parse_host_port(entry)
        return UnresolvedEndpoint(host=host, port=port)
    if isinstance(entry, dict) and isinstance(entry.get("host"), str) and isinstance(entry.get("port"), int):
        if len(entry["host"]) == 0 or not 0 <= entry["port"] <= 0xFFFF:
            raise ValueError(f"Invalid endpoint {entry!r}")
        return UnresolvedEndpoint(host=entry["host"], port=uint16(entry["port"]))
    raise ValueError(f"Invalid endpoint {entry!r}")


def get_unresolved_endpoints(service_config: Dict[str, Any]) -> List[UnresolvedEndpoint]:
    """
    Collects the `endpoints` list and the single `endpoint` entry of a service config, in that order.
    """
    entries: List[Any] = list(service_config.get("endpoints", []))
    endpoint = service_config.get("endpoint")
    if endpoint is not None:
        entries.append(endpoint)

    return [_endpoint_from_entry(entry) for entry in entries]
