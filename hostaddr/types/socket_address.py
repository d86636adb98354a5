from __future__ import annotations

import socket
from dataclasses import dataclass
from typing import ClassVar, Union

from typing_extensions import final

from hostaddr.types.sockaddr import SockaddrIn, SockaddrIn6, read_family
from hostaddr.util.byte_order import uint16_from_big_endian, uint32_from_big_endian
from hostaddr.util.errors import Err, ResolutionError
from hostaddr.util.ints import uint16
from hostaddr.util.ip_address import IPAddress


@final
@dataclass(frozen=True)
class SocketAddressV4:
    address: SockaddrIn
    host: str

    family: ClassVar[socket.AddressFamily] = socket.AF_INET

    def __post_init__(self) -> None:
        if len(self.host) == 0:
            raise ValueError("host must not be empty")

    @property
    def port(self) -> uint16:
        return uint16_from_big_endian(self.address.sin_port)

    @property
    def ip(self) -> IPAddress:
        return self.address.ip

    @property
    def description(self) -> str:
        return f"[IPv4]{self.host}:{int(self.port)}"

    def __str__(self) -> str:
        return self.description

    def to_bytes(self) -> bytes:
        return self.address.to_bytes()

    def to_socket_address(self) -> tuple[str, int]:
        return str(self.ip), int(self.port)


@final
@dataclass(frozen=True)
class SocketAddressV6:
    address: SockaddrIn6
    host: str

    family: ClassVar[socket.AddressFamily] = socket.AF_INET6

    def __post_init__(self) -> None:
        if len(self.host) == 0:
            raise ValueError("host must not be empty")

    @property
    def port(self) -> uint16:
        return uint16_from_big_endian(self.address.sin6_port)

    @property
    def ip(self) -> IPAddress:
        return self.address.ip

    @property
    def description(self) -> str:
        return f"[IPv6]{self.host}:{int(self.port)}"

    def __str__(self) -> str:
        return self.description

    def to_bytes(self) -> bytes:
        return self.address.to_bytes()

    def to_socket_address(self) -> tuple[str, int, int, int]:
        return (
            str(self.ip),
            int(self.port),
            int(uint32_from_big_endian(self.address.sin6_flowinfo)),
            int(self.address.sin6_scope_id),
        )


SocketAddress = Union[SocketAddressV4, SocketAddressV6]


def from_ipv4(address: SockaddrIn, host: str) -> SocketAddressV4:
    return SocketAddressV4(address=address, host=host)


def from_ipv6(address: SockaddrIn6, host: str) -> SocketAddressV6:
    return SocketAddressV6(address=address, host=host)


def socket_address_from_bytes(data: bytes, host: str) -> SocketAddress:
    """
    Copies a raw socket address buffer, as handed out by the operating system, into a SocketAddress.

    Only the family tag is checked before the buffer is interpreted, the caller vouches for the rest.
    """
    family = read_family(data)
    if family == socket.AF_INET:
        return from_ipv4(SockaddrIn.from_bytes(bytes(data[: SockaddrIn.size])), host)
    if family == socket.AF_INET6:
        return from_ipv6(SockaddrIn6.from_bytes(bytes(data[: SockaddrIn6.size])), host)
    raise ResolutionError(Err.UNSUPPORTED_FAMILY, f"address family {family}")
