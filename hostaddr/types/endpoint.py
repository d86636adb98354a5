from __future__ import annotations

from dataclasses import dataclass

from hostaddr.util.ints import uint16


@dataclass(frozen=True)
class UnresolvedEndpoint:
    host: str
    port: uint16
