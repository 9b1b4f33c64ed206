"""
DNS provider implementations.

This package contains the Vercel DNS provider and an in-memory
mock provider for testing.
"""

from .base_provider import DNSProvider
from .dns_client import DNSClient
from .mock_provider import MockDNSProvider
from .vercel_provider import VercelProvider

__all__ = ["DNSClient", "DNSProvider", "MockDNSProvider", "VercelProvider"]
