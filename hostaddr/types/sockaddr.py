from __future__ import annotations

import socket
import struct
import sys
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from typing_extensions import final

from hostaddr.util.byte_order import uint16_from_big_endian, uint16_to_big_endian, uint32_to_big_endian
from hostaddr.util.ints import uint16, uint32
from hostaddr.util.ip_address import IPAddress

# BSD derived systems start the structure with a one byte length followed by a one byte family,
# everybody else (Linux, Windows) uses a two byte family in native byte order.
BSD_LAYOUT = sys.platform == "darwin" or sys.platform.startswith(("freebsd", "openbsd", "netbsd", "dragonfly"))

# offset 0: family (or length + family), 2: port, 4: address, 8: zero padding
LINUX_SOCKADDR_IN_FORMAT = "=HH4s8s"
BSD_SOCKADDR_IN_FORMAT = "=BBH4s8s"
# offset 0: family (or length + family), 2: port, 4: flowinfo, 8: address, 24: scope id
LINUX_SOCKADDR_IN6_FORMAT = "=HHI16sI"
BSD_SOCKADDR_IN6_FORMAT = "=BBHI16sI"

SOCKADDR_IN_FORMAT = BSD_SOCKADDR_IN_FORMAT if BSD_LAYOUT else LINUX_SOCKADDR_IN_FORMAT
SOCKADDR_IN6_FORMAT = BSD_SOCKADDR_IN6_FORMAT if BSD_LAYOUT else LINUX_SOCKADDR_IN6_FORMAT

SOCKADDR_IN_SIZE = struct.calcsize(SOCKADDR_IN_FORMAT)
SOCKADDR_IN6_SIZE = struct.calcsize(SOCKADDR_IN6_FORMAT)


def read_family(data: bytes) -> int:
    """
    Returns the address family tag of a raw socket address buffer without interpreting the rest of it.
    """
    if len(data) < 2:
        raise ValueError(f"socket address buffer too short: {len(data)} bytes")
    if BSD_LAYOUT:
        return data[1]
    family: int = struct.unpack_from("=H", data)[0]
    return family


def _pack_family(family: int, size: int) -> tuple[int, ...]:
    if BSD_LAYOUT:
        return (size, family)
    return (family,)


def _unpack_family(fields: tuple[Any, ...]) -> tuple[int, tuple[Any, ...]]:
    if BSD_LAYOUT:
        return fields[1], fields[2:]
    return fields[0], fields[1:]


@final
@dataclass(frozen=True)
class SockaddrIn:
    """
    An IPv4 socket endpoint laid out like `struct sockaddr_in`.

    The fields hold the values exactly as they are stored in memory, `sin_port` is therefore in network byte
    order and needs to be converted before it is displayed or compared against a host order port.
    """

    sin_family: uint16
    sin_port: uint16
    sin_addr: bytes
    sin_zero: bytes = bytes(8)

    size: ClassVar[int] = SOCKADDR_IN_SIZE

    def __post_init__(self) -> None:
        if len(self.sin_addr) != 4:
            raise ValueError(f"sin_addr must be 4 bytes, got {len(self.sin_addr)}")
        if len(self.sin_zero) != 8:
            raise ValueError(f"sin_zero must be 8 bytes, got {len(self.sin_zero)}")

    @classmethod
    def create(cls, ip: Union[IPAddress, str], port: int) -> SockaddrIn:
        address = ip if isinstance(ip, IPAddress) else IPAddress.create(ip)
        if not address.is_v4:
            raise ValueError(f"{address} is not an IPv4 address")
        return cls(
            sin_family=uint16(socket.AF_INET),
            sin_port=uint16_to_big_endian(uint16(port)),
            sin_addr=address.packed,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> SockaddrIn:
        if len(data) != cls.size:
            raise ValueError(f"sockaddr_in must be {cls.size} bytes, got {len(data)}")
        family, (port, addr, zero) = _unpack_family(struct.unpack(SOCKADDR_IN_FORMAT, data))
        if family != socket.AF_INET:
            raise ValueError(f"unexpected address family {family} for sockaddr_in")
        return cls(sin_family=uint16(family), sin_port=uint16(port), sin_addr=addr, sin_zero=zero)

    def to_bytes(self) -> bytes:
        return struct.pack(
            SOCKADDR_IN_FORMAT,
            *_pack_family(self.sin_family, self.size),
            self.sin_port,
            self.sin_addr,
            self.sin_zero,
        )

    @property
    def port(self) -> uint16:
        return uint16_from_big_endian(self.sin_port)

    @property
    def ip(self) -> IPAddress:
        return IPAddress.from_packed(self.sin_addr)


@final
@dataclass(frozen=True)
class SockaddrIn6:
    """
    An IPv6 socket endpoint laid out like `struct sockaddr_in6`.

    `sin6_port` and `sin6_flowinfo` are in network byte order, `sin6_scope_id` in host byte order.
    """

    sin6_family: uint16
    sin6_port: uint16
    sin6_flowinfo: uint32
    sin6_addr: bytes
    sin6_scope_id: uint32

    size: ClassVar[int] = SOCKADDR_IN6_SIZE

    def __post_init__(self) -> None:
        if len(self.sin6_addr) != 16:
            raise ValueError(f"sin6_addr must be 16 bytes, got {len(self.sin6_addr)}")

    @classmethod
    def create(
        cls, ip: Union[IPAddress, str], port: int, flowinfo: int = 0, scope_id: int = 0
    ) -> SockaddrIn6:
        address = ip if isinstance(ip, IPAddress) else IPAddress.create(ip)
        if not address.is_v6:
            raise ValueError(f"{address} is not an IPv6 address")
        return cls(
            sin6_family=uint16(socket.AF_INET6),
            sin6_port=uint16_to_big_endian(uint16(port)),
            sin6_flowinfo=uint32_to_big_endian(uint32(flowinfo)),
            sin6_addr=address.packed,
            sin6_scope_id=uint32(scope_id),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> SockaddrIn6:
        if len(data) != cls.size:
            raise ValueError(f"sockaddr_in6 must be {cls.size} bytes, got {len(data)}")
        family, (port, flowinfo, addr, scope_id) = _unpack_family(struct.unpack(SOCKADDR_IN6_FORMAT, data))
        if family != socket.AF_INET6:
            raise ValueError(f"unexpected address family {family} for sockaddr_in6")
        return cls(
            sin6_family=uint16(family),
            sin6_port=uint16(port),
            sin6_flowinfo=uint32(flowinfo),
            sin6_addr=addr,
            sin6_scope_id=uint32(scope_id),
        )

    def to_bytes(self) -> bytes:
        return struct.pack(
            SOCKADDR_IN6_FORMAT,
            *_pack_family(self.sin6_family, self.size),
            self.sin6_port,
            self.sin6_flowinfo,
            self.sin6_addr,
            self.sin6_scope_id,
        )

    @property
    def port(self) -> uint16:
        return uint16_from_big_endian(self.sin6_port)

    @property
    def ip(self) -> IPAddress:
        return IPAddress.from_packed(self.sin6_addr)
