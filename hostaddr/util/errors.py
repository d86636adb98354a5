from __future__ import annotations

from enum import Enum


class Err(Enum):
    # the resolver itself failed, the cause is not classified any further
    RESOLUTION_FAILED = 1
    # the resolver returned something that is neither IPv4 nor IPv6, or nothing at all
    UNSUPPORTED_FAMILY = 2


class ResolutionError(Exception):
    def __init__(self, code: Err, error_msg: str = ""):
        super().__init__(f"Error code: {code.name} {error_msg}")
        self.code = code
        self.error_msg = error_msg
