"""
Validators - Input validation for dynamic DNS configuration

This module provides validation functions for domains, subdomain labels,
IP addresses and TTLs before any network call is made.
"""

import ipaddress
import logging
import re

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^[a-zA-Z0-9_]([a-zA-Z0-9_-]*[a-zA-Z0-9_])?$")


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate Fully Qualified Domain Name (FQDN).

    Args:
        fqdn: The FQDN to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    if fqdn.endswith("."):
        logger.warning(f"FQDN ends with dot: {fqdn}")
        return False

    if len(fqdn) > 253:
        logger.warning(f"FQDN too long: {fqdn}")
        return False

    labels = fqdn.split(".")

    if len(labels) < 2:
        logger.warning(f"FQDN must have at least 2 labels: {fqdn}")
        return False

    if any(label == "" for label in labels):
        logger.warning(f"FQDN contains empty labels: {fqdn}")
        return False

    for label in labels:
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in FQDN: {fqdn}")
            return False

    return True


def _validate_label(label: str) -> bool:
    """
    Validate a single domain label.

    Labels contain letters, digits, hyphens and underscores, are 1-63
    characters long and cannot start or end with a hyphen.
    """
    if len(label) == 0 or len(label) > 63:
        return False

    return bool(_LABEL_RE.match(label))


def validate_subdomain(subdomain: str) -> bool:
    """
    Validate a subdomain relative to the managed domain.

    An empty string is the zone apex and a leading '*' label is a wildcard.

    Args:
        subdomain: The relative name to validate, e.g. 'home' or 'vpn.office'

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(subdomain, str):
        return False

    if subdomain == "":
        return True

    if subdomain.startswith(".") or subdomain.endswith("."):
        logger.warning(f"Subdomain must not start or end with a dot: {subdomain}")
        return False

    labels = subdomain.split(".")
    for i, label in enumerate(labels):
        if i == 0 and label == "*":
            continue
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in subdomain: {subdomain}")
            return False

    return True


def validate_ipv4(ipv4: str) -> bool:
    """
    Validate IPv4 address.

    Args:
        ipv4: The IPv4 address to validate

    Returns:
        True if valid, False otherwise
    """
    if not ipv4 or not isinstance(ipv4, str):
        return False

    try:
        ipaddress.IPv4Address(ipv4.strip())
        return True
    except ipaddress.AddressValueError:
        logger.warning(f"Invalid IPv4 address: {ipv4}")
        return False


def validate_ipv6(ipv6: str) -> bool:
    """Validate IPv6 address."""
    if not ipv6 or not isinstance(ipv6, str):
        return False

    try:
        ipaddress.IPv6Address(ipv6.strip())
        return True
    except ipaddress.AddressValueError:
        logger.warning(f"Invalid IPv6 address: {ipv6}")
        return False


def validate_ip(value: str, version: int) -> bool:
    """Validate an address of the given IP version (4 or 6)."""
    if version == 4:
        return validate_ipv4(value)
    if version == 6:
        return validate_ipv6(value)
    return False


def validate_ttl(ttl) -> bool:
    """TTL must be a non-negative integer number of seconds."""
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        return False
    return ttl >= 0


def sanitize_name(name: str) -> str:
    """
    Normalize a record name for comparison.

    Args:
        name: Relative or absolute record name

    Returns:
        Lowercased name without surrounding whitespace or trailing dot
    """
    if not name:
        return ""

    return name.strip().rstrip(".").lower()
