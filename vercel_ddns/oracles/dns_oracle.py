"""
DNS-based IP echo oracles.

These oracles ask an authoritative nameserver a question whose answer is the
source address of the query, using the dnspython library.
"""

import logging
from typing import Dict, List

import dns.exception
import dns.resolver

from .base_oracle import IPOracle
from ..core.errors import OracleError
from ..core.models import AddressFamily

logger = logging.getLogger(__name__)


class DNSOracle(IPOracle):
    """Query one nameserver directly and read the echoed address from the answer."""

    qname = ""
    nameservers: Dict[AddressFamily, str] = {}

    def __init__(self, family: AddressFamily, timeout: float = 5.0):
        super().__init__(family, timeout)
        if family not in self.nameservers:
            raise ValueError(f"{self.name} does not support {family.label}")
        self.nameserver = self.nameservers[family]

    def rdtype(self) -> str:
        return self.family.record_type

    def _initialize_dns_resolver(self) -> dns.resolver.Resolver:
        """Build a resolver that only talks to this oracle's nameserver."""
        resolver = dns.resolver.Resolver(configure=False)
        resolver.nameservers = [self.nameserver]
        resolver.timeout = self.timeout
        resolver.lifetime = self.timeout
        return resolver

    def attempt(self) -> str:
        resolver = self._initialize_dns_resolver()
        rdtype = self.rdtype()
        try:
            answers = resolver.resolve(self.qname, rdtype, lifetime=self.timeout)
        except dns.exception.Timeout:
            raise OracleError(self.name, f"timed out after {self.timeout}s") from None
        except (dns.exception.DNSException, OSError) as e:
            raise OracleError(self.name, f"query failed: {e}") from None

        last_error = OracleError(self.name, "empty answer")
        for rdata in answers:
            try:
                address = self._check_answer(rdata.to_text())
            except OracleError as e:
                last_error = e
                continue
            logger.debug(f"{self.name} reported {address} via {self.nameserver}")
            return address

        raise last_error


class OpenDNSOracle(DNSOracle):
    """myip.opendns.com answered by the OpenDNS resolvers as an A/AAAA record."""

    name = "opendns"
    qname = "myip.opendns.com"
    nameservers = {
        AddressFamily.IPV4: "208.67.222.222",
        AddressFamily.IPV6: "2620:119:35::35",
    }


class GoogleTXTOracle(DNSOracle):
    """o-o.myaddr.l.google.com answered by Google's nameservers as a TXT record."""

    name = "google"
    qname = "o-o.myaddr.l.google.com"
    nameservers = {
        AddressFamily.IPV4: "216.239.32.10",
        AddressFamily.IPV6: "2001:4860:4802:32::a",
    }

    def rdtype(self) -> str:
        return "TXT"


DEFAULT_ORACLES = (OpenDNSOracle, GoogleTXTOracle)


def default_oracles(family: AddressFamily, timeout: float = 5.0) -> List[IPOracle]:
    """Return the default oracle chain for a family, in priority order."""
    return [oracle_cls(family, timeout=timeout) for oracle_cls in DEFAULT_ORACLES]
