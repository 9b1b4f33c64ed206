"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores records in memory
for safe testing and demonstration purposes.
"""

import itertools
import logging
from typing import Dict, List, Optional

from .base_provider import DNSProvider
from ..core.errors import ProviderUnavailable
from ..core.models import ProviderRecord, RecordRequest

logger = logging.getLogger(__name__)


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize mock provider."""
        config = config or {}
        self.token = config.get("token")
        self.records: Dict[str, List[ProviderRecord]] = {}
        self.calls: List[tuple] = []
        self._ids = itertools.count(1)
        logger.info("Mock DNS provider initialized")

    def add_existing(self, domain: str, name: str, record_type: str, value: str, ttl: int = 3600) -> str:
        """Seed a record without recording it as an API call."""
        record_id = f"rec_{next(self._ids)}"
        self.records.setdefault(domain, []).append(
            ProviderRecord(id=record_id, name=name, type=record_type, value=value, ttl=ttl)
        )
        return record_id

    def _authorize(self, token: str):
        if self.token is not None and token != self.token:
            raise ProviderUnavailable("authentication failed (403 Forbidden)")

    def list_records(self, domain: str, token: str) -> List[ProviderRecord]:
        """Get all DNS records for a domain."""
        self._authorize(token)
        self.calls.append(("list", domain))
        records = list(self.records.get(domain, []))
        logger.info(f"Mock: Retrieved {len(records)} records")
        return records

    def create_record(self, domain: str, token: str, request: RecordRequest) -> str:
        """Create a new DNS record."""
        self._authorize(token)
        self.calls.append(("create", domain, request.name))
        record_id = f"rec_{next(self._ids)}"
        self.records.setdefault(domain, []).append(
            ProviderRecord(
                id=record_id,
                name=request.name,
                type=request.record_type,
                value=request.value,
                ttl=request.ttl,
            )
        )
        logger.info(f"Mock: Created record {request.name} -> {request.value}")
        return record_id

    def update_record(self, domain: str, token: str, record_id: str, value: str, ttl: int) -> None:
        """Update an existing DNS record."""
        self._authorize(token)
        self.calls.append(("update", domain, record_id))
        records = self.records.get(domain, [])
        for i, existing in enumerate(records):
            if existing.id == record_id:
                records[i] = ProviderRecord(
                    id=existing.id,
                    name=existing.name,
                    type=existing.type,
                    value=value,
                    ttl=ttl,
                )
                logger.info(f"Mock: Updated record {existing.name} -> {value}")
                return

        raise ProviderUnavailable(f"record {record_id} not found (404 Not Found)")

    @property
    def writes(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in ("create", "update")]
