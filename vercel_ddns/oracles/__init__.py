"""
Public IP oracle implementations.

This package contains the services used to discover the caller's
public IPv4 and IPv6 addresses.
"""

from .base_oracle import IPOracle
from .dns_oracle import DNSOracle, GoogleTXTOracle, OpenDNSOracle, default_oracles

__all__ = ["IPOracle", "DNSOracle", "GoogleTXTOracle", "OpenDNSOracle", "default_oracles"]
