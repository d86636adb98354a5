from __future__ import annotations

import logging
import socket
from typing import Any, Union

from hostaddr.types.endpoint import UnresolvedEndpoint
from hostaddr.types.sockaddr import SockaddrIn, SockaddrIn6
from hostaddr.types.socket_address import SocketAddress, from_ipv4, from_ipv6
from hostaddr.util.errors import Err, ResolutionError
from hostaddr.util.ints import uint16

log = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _socket_address_from_addrinfo(
    family: int, sockaddr: Union[tuple[str, int], tuple[str, int, int, int]], host: str
) -> SocketAddress:
    # Copies one getaddrinfo candidate into an owned structure, nothing of the resolver result is kept.
    if family == socket.AF_INET:
        return from_ipv4(SockaddrIn.create(sockaddr[0], sockaddr[1]), host)
    if family == socket.AF_INET6:
        ip, port, flowinfo, scope_id = sockaddr  # type: ignore[misc]
        # link local addresses come back as "fe80::1%eth0", the scope is carried in scope_id already
        return from_ipv6(SockaddrIn6.create(ip.partition("%")[0], port, flowinfo, scope_id), host)
    raise ResolutionError(Err.UNSUPPORTED_FAMILY, f"address family {family} for {host}")


def resolve(host: str, port: int) -> SocketAddress:
    """
    Resolves `host` and `port` into a SocketAddress using the name resolution of the operating system.

    This call is blocking. It holds the calling thread for as long as the lookup takes, which can involve
    network I/O, and there is neither a timeout nor a way to cancel it. Never call it from an event loop,
    hand it to a worker thread instead.

    Only the first candidate returned by the resolver is considered, trying further candidates is up to the
    caller.
    """
    if len(host) == 0:
        raise ValueError("host must not be empty")
    if "\x00" in host:
        raise ValueError(f"host {host!r} contains a NUL character")
    if not isinstance(port, int) or isinstance(port, bool):
        raise TypeError(f"port must be an int, got {type(port).__name__}")
    if not INT32_MIN <= port <= INT32_MAX:
        raise ValueError(f"port {port} does not fit into int32")

    service = str(int(port))
    if not 0 <= port <= 0xFFFF:
        # some resolvers silently truncate the service number, never hand them such a port
        log.warning(f"Failed to resolve {host}:{service}: port out of range")
        raise ResolutionError(Err.RESOLUTION_FAILED, f"{host}:{service}")
    try:
        addrset: list[Any] = socket.getaddrinfo(host, service)
    except (OSError, UnicodeError) as e:
        # gaierror is an OSError, UnicodeError comes from hosts that can't be IDNA encoded
        log.warning(f"Failed to resolve {host}:{service}: {e}")
        raise ResolutionError(Err.RESOLUTION_FAILED, f"{host}:{service}") from e

    if len(addrset) == 0:
        # getaddrinfo either fails or returns at least one entry, this should never happen
        raise ResolutionError(Err.UNSUPPORTED_FAMILY, f"no result for {host}:{service}")

    family, _, _, _, sockaddr = addrset[0]
    address = _socket_address_from_addrinfo(family, sockaddr, host)
    log.debug(f"Resolved {host}:{service} to {address.ip}")
    return address


def resolve_endpoint(endpoint: UnresolvedEndpoint) -> SocketAddress:
    return resolve(endpoint.host, endpoint.port)


def parse_host_port(host_port: str) -> tuple[str, uint16]:
    host, separator, port = host_port.rpartition(":")
    if separator == "" or host == "" or port == "":
        raise ValueError(f"Invalid host:port {host_port!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        # IPv6 literals need brackets, otherwise the port can't be told apart
        raise ValueError(f"Invalid host:port {host_port!r}, IPv6 addresses need to be enclosed in brackets")
    if host == "":
        raise ValueError(f"Invalid host:port {host_port!r}")
    port_int = int(port)
    if not 0 <= port_int <= 0xFFFF:
        raise ValueError(f"Invalid port {port_int} in {host_port!r}")
    return host, uint16(port_int)
