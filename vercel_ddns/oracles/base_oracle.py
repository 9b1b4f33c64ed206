"""
Base IP oracle interface.

This module defines the abstract base class that all public IP oracles must implement.
"""

import ipaddress
from abc import ABC, abstractmethod

from ..core.errors import OracleError
from ..core.models import AddressFamily
from ..utils.validators import validate_ip


class IPOracle(ABC):
    """Abstract base class for services that echo the caller's public IP."""

    name = "oracle"

    def __init__(self, family: AddressFamily, timeout: float = 5.0):
        self.family = family
        self.timeout = timeout

    @abstractmethod
    def attempt(self) -> str:
        """Return the caller's public address, or raise OracleError."""
        pass

    def _check_answer(self, answer: str) -> str:
        """Ensure an answer is an address of this oracle's family."""
        candidate = (answer or "").strip().strip('"')
        if not validate_ip(candidate, self.family.version):
            raise OracleError(
                self.name,
                f"expected an {self.family.label} address, got {answer!r}",
            )
        return str(ipaddress.ip_address(candidate))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.family.label})"
