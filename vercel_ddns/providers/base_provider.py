"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
Implementations raise ProviderUnavailable for transport and auth failures.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.models import ProviderRecord, RecordRequest


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def list_records(self, domain: str, token: str) -> List[ProviderRecord]:
        """Get all DNS records for a domain."""
        pass

    @abstractmethod
    def create_record(self, domain: str, token: str, request: RecordRequest) -> str:
        """Create a new DNS record and return its identifier."""
        pass

    @abstractmethod
    def update_record(
        self, domain: str, token: str, record_id: str, value: str, ttl: int
    ) -> None:
        """Update the value and TTL of an existing DNS record."""
        pass
