from __future__ import annotations

import struct

from hostaddr.util.ints import uint16, uint32


def uint16_from_big_endian(value: int) -> uint16:
    """
    Takes a 16 bit value as it is stored in a socket address structure (big-endian representation in memory)
    and converts it to whatever endianness we're running on. It works for both big and little endian machines
    since it looks at the individual bytes instead of checking the byte order of the host.
    """
    data = struct.pack("=H", value)
    return uint16((data[0] << 8) | data[1])


def uint16_to_big_endian(value: int) -> uint16:
    # the inverse: the returned value has a big-endian representation in memory
    return uint16(struct.unpack("=H", bytes([(value >> 8) & 0xFF, value & 0xFF]))[0])


def uint32_from_big_endian(value: int) -> uint32:
    data = struct.pack("=I", value)
    return uint32((data[0] << 24) | (data[1] << 16) | (data[2] << 8) | data[3])


def uint32_to_big_endian(value: int) -> uint32:
    return uint32(struct.unpack("=I", int(value).to_bytes(4, "big"))[0])
