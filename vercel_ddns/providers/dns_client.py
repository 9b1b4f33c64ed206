"""
DNS Client - Unified interface for DNS provider APIs

This module selects the provider implementation from configuration,
currently supporting Vercel and an in-memory mock.
"""

from typing import Dict, List

from .base_provider import DNSProvider
from .mock_provider import MockDNSProvider
from .vercel_provider import VercelProvider
from ..core.errors import ConfigurationError
from ..core.models import ProviderRecord, RecordRequest


class DNSClient(DNSProvider):
    """Unified DNS client that delegates to the configured provider."""

    def __init__(self, config: Dict):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = self._get_provider()

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.get("default_provider", "vercel")
        provider_config = self.config.get("dns_providers", {}).get(provider_name, {})

        if provider_name == "vercel":
            return VercelProvider(provider_config)
        elif provider_name == "mock":
            return MockDNSProvider(provider_config)
        else:
            raise ConfigurationError(f"Unknown provider '{provider_name}'")

    def list_records(self, domain: str, token: str) -> List[ProviderRecord]:
        return self.provider.list_records(domain, token)

    def create_record(self, domain: str, token: str, request: RecordRequest) -> str:
        return self.provider.create_record(domain, token, request)

    def update_record(self, domain: str, token: str, record_id: str, value: str, ttl: int) -> None:
        self.provider.update_record(domain, token, record_id, value, ttl)
