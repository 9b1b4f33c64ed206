"""
Utility functions and helpers.

This package contains validation helpers for configuration and
provider data.
"""

from .validators import (
    sanitize_name,
    validate_fqdn,
    validate_ip,
    validate_ipv4,
    validate_ipv6,
    validate_subdomain,
    validate_ttl,
)

__all__ = [
    "sanitize_name",
    "validate_fqdn",
    "validate_ip",
    "validate_ipv4",
    "validate_ipv6",
    "validate_subdomain",
    "validate_ttl",
]
