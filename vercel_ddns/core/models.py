"""
Value objects shared by the resolver, the reconciler and the orchestrator.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

RECORD_TYPES = ("A", "AAAA")


class AddressFamily(Enum):
    """IP address family; decides the oracle chain and the record type."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @property
    def record_type(self) -> str:
        return "A" if self is AddressFamily.IPV4 else "AAAA"

    @property
    def version(self) -> int:
        return 4 if self is AddressFamily.IPV4 else 6

    @property
    def label(self) -> str:
        return "IPv4" if self is AddressFamily.IPV4 else "IPv6"

    @classmethod
    def from_text(cls, value: str) -> "AddressFamily":
        """Parse 'ipv4'/'ipv6' (or '4'/'6'), case-insensitively."""
        normalized = str(value).strip().lower()
        aliases = {"ipv4": cls.IPV4, "4": cls.IPV4, "ipv6": cls.IPV6, "6": cls.IPV6}
        try:
            return aliases[normalized]
        except KeyError:
            raise ValueError(
                f"Unknown IP type '{value}', expected one of: ipv4, ipv6"
            ) from None


class Outcome(Enum):
    """Result of converging one record."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class ResolvedAddress:
    family: AddressFamily
    value: str


@dataclass(frozen=True)
class RecordRequest:
    """Desired state of one DNS record."""

    name: str
    value: str
    record_type: str
    ttl: int

    def __post_init__(self):
        if self.record_type not in RECORD_TYPES:
            raise ValueError(
                f"Unsupported record type '{self.record_type}', expected A or AAAA"
            )
        if isinstance(self.ttl, bool) or not isinstance(self.ttl, int) or self.ttl < 0:
            raise ValueError(f"TTL must be a non-negative integer, got {self.ttl!r}")

    @classmethod
    def for_address(cls, name: str, address: ResolvedAddress, ttl: int) -> "RecordRequest":
        return cls(
            name=name,
            value=address.value,
            record_type=address.family.record_type,
            ttl=ttl,
        )


@dataclass(frozen=True)
class ProviderRecord:
    """A record as reported by the DNS provider."""

    id: str
    name: str
    type: str
    value: str
    ttl: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict) -> "ProviderRecord":
        ttl = data.get("ttl")
        return cls(
            id=str(data.get("id") or data.get("uid") or ""),
            name=data.get("name") or "",
            type=(data.get("type") or "").upper(),
            value=data.get("value") or "",
            ttl=int(ttl) if ttl is not None else None,
        )

    def same_value(self, value: str) -> bool:
        """Compare values as IP addresses when both parse, as text otherwise."""
        try:
            return ipaddress.ip_address(self.value) == ipaddress.ip_address(value)
        except ValueError:
            return self.value.strip() == value.strip()


@dataclass(frozen=True)
class RecordResult:
    """Outcome (or error) of reconciling one subdomain for one family."""

    subdomain: str
    family: AddressFamily
    request: Optional[RecordRequest] = None
    outcome: Optional[Outcome] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DDNSConfig:
    """Immutable configuration for one reconciliation run."""

    domain: str
    subdomains: Tuple[str, ...]
    token: str = field(default="", repr=False)
    families: Tuple[AddressFamily, ...] = (AddressFamily.IPV4,)
    ttl: int = 3600
    provider: str = "vercel"
    team_id: Optional[str] = None
    oracle_timeout: float = 5.0
    api_timeout: float = 10.0
    dry_run: bool = False
    keep_going: bool = False
