from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from hostaddr._tests.util.misc import DataCase, Marks, datacases
from hostaddr.types.endpoint import UnresolvedEndpoint
from hostaddr.util.config import config_path_for_filename, get_unresolved_endpoints, load_config
from hostaddr.util.ints import uint16
from hostaddr.util.network import resolve_endpoint


@dataclass
class GetUnresolvedEndpointsCase(DataCase):
    description: str
    service_config: dict[str, Any]
    expected_endpoints: list[UnresolvedEndpoint]
    marks: Marks = ()

    @property
    def id(self) -> str:
        return self.description


@datacases(
    GetUnresolvedEndpointsCase(
        description="multiple endpoints",
        service_config={
            "endpoints": [
                {"host": "127.0.0.1", "port": 8444},
                {"host": "node.example.tld", "port": 18444},
            ],
        },
        expected_endpoints=[
            UnresolvedEndpoint(host="127.0.0.1", port=uint16(8444)),
            UnresolvedEndpoint(host="node.example.tld", port=uint16(18444)),
        ],
    ),
    GetUnresolvedEndpointsCase(
        description="single endpoint",
        service_config={"endpoint": {"host": "node.example.tld", "port": 18444}},
        expected_endpoints=[UnresolvedEndpoint(host="node.example.tld", port=uint16(18444))],
    ),
    GetUnresolvedEndpointsCase(
        description="list and single endpoint",
        service_config={
            "endpoint": {"host": "::1", "port": 443},
            "endpoints": [{"host": "127.0.0.1", "port": 8444}],
        },
        expected_endpoints=[
            UnresolvedEndpoint(host="127.0.0.1", port=uint16(8444)),
            UnresolvedEndpoint(host="::1", port=uint16(443)),
        ],
    ),
    GetUnresolvedEndpointsCase(
        description="host:port strings",
        service_config={"endpoints": ["127.0.0.1:8444", "[::1]:443"], "endpoint": "localhost:80"},
        expected_endpoints=[
            UnresolvedEndpoint(host="127.0.0.1", port=uint16(8444)),
            UnresolvedEndpoint(host="::1", port=uint16(443)),
            UnresolvedEndpoint(host="localhost", port=uint16(80)),
        ],
    ),
    GetUnresolvedEndpointsCase(
        description="no endpoint",
        service_config={},
        expected_endpoints=[],
    ),
)
def test_get_unresolved_endpoints(case: GetUnresolvedEndpointsCase) -> None:
    assert get_unresolved_endpoints(case.service_config) == case.expected_endpoints


def test_get_unresolved_endpoints_does_not_modify_config() -> None:
    service_config: dict[str, Any] = {
        "endpoint": {"host": "::1", "port": 443},
        "endpoints": [{"host": "127.0.0.1", "port": 8444}],
    }
    get_unresolved_endpoints(service_config)
    assert len(service_config["endpoints"]) == 1


def test_load_config(root_path_populated_with_config: Path) -> None:
    config = load_config(root_path_populated_with_config, "config.yaml")
    assert config_path_for_filename(root_path_populated_with_config, "config.yaml").is_file()
    assert config["resolver"]["logging"]["log_stdout"] is False

    resolver_config = load_config(root_path_populated_with_config, "config.yaml", sub_config="resolver")
    endpoints = get_unresolved_endpoints(resolver_config)
    assert endpoints == [UnresolvedEndpoint(host="127.0.0.1", port=uint16(8444))]
    assert resolve_endpoint(endpoints[0]).description == "[IPv4]127.0.0.1:8444"


def test_load_config_missing(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Config not found"):
        load_config(tmp_path, "config.yaml")


@pytest.mark.parametrize(
    "entry",
    [
        "127.0.0.1",
        {"host": "127.0.0.1"},
        {"host": "", "port": 80},
        {"host": "127.0.0.1", "port": 65536},
        {"host": "127.0.0.1", "port": "80"},
        8444,
    ],
)
def test_get_unresolved_endpoints_invalid(entry: Any) -> None:
    with pytest.raises(ValueError, match="Invalid"):
        get_unresolved_endpoints({"endpoints": [entry]})


def test_load_config_sub_config_missing(root_path_populated_with_config: Path) -> None:
    with pytest.raises(ValueError, match="no 'wallet' section"):
        load_config(root_path_populated_with_config, "config.yaml", sub_config="wallet")


def test_load_config_not_a_mapping(tmp_path: Path) -> None:
    path = config_path_for_filename(tmp_path)
    path.parent.mkdir(parents=True)
    path.write_text(yaml.safe_dump(["resolver"]))
    with pytest.raises(ValueError, match="does not contain a mapping"):
        load_config(tmp_path)


def test_config_path_for_filename(tmp_path: Path) -> None:
    assert config_path_for_filename(tmp_path) == tmp_path / "config" / "config.yaml"
    assert config_path_for_filename(tmp_path, "other.yaml") == tmp_path / "config" / "other.yaml"
