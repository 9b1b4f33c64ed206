"""
Record Reconciler - Converge one provider record to its desired state

This module compares the desired record against what the provider reports
and issues at most one write, so repeated runs are idempotent.
"""

import logging
from typing import List

from .errors import AmbiguousRecord, MalformedRecord
from .models import Outcome, ProviderRecord, RecordRequest
from ..providers.base_provider import DNSProvider
from ..utils.validators import sanitize_name

logger = logging.getLogger(__name__)


class RecordReconciler:
    """Creates, updates or leaves alone a single record per request."""

    def __init__(self, provider: DNSProvider):
        """Initialize record reconciler with a DNS provider."""
        self.provider = provider

    def upsert(
        self, domain: str, token: str, request: RecordRequest, dry_run: bool = False
    ) -> Outcome:
        """
        Converge the provider record matching the request's name and type.

        Args:
            domain: Zone the record lives in
            token: Provider credential, passed through untouched
            request: Desired name, type, value and TTL
            dry_run: Classify only, never write

        Returns:
            Outcome.CREATED, Outcome.UPDATED or Outcome.UNCHANGED

        Raises:
            AmbiguousRecord: if several records share the name and type
            ProviderUnavailable: on any transport or auth failure
            MalformedRecord: if the matching record has no identifier
        """
        matches = self._find_matches(self.provider.list_records(domain, token), request)
        label = self._display_name(request.name, domain)

        if len(matches) > 1:
            raise AmbiguousRecord(
                domain, request.name, request.record_type, [r.id for r in matches]
            )

        if not matches:
            logger.info(f"Create needed: {label} {request.record_type} -> {request.value}")
            if not dry_run:
                record_id = self.provider.create_record(domain, token, request)
                logger.info(f"Created record: {label} -> {request.value} ({record_id})")
            return Outcome.CREATED

        existing = matches[0]
        if existing.same_value(request.value) and existing.ttl == request.ttl:
            logger.info(f"No change needed: {label} -> {request.value}")
            return Outcome.UNCHANGED

        logger.info(
            f"Update needed: {label} {existing.value} (ttl {existing.ttl}) -> "
            f"{request.value} (ttl {request.ttl})"
        )
        if not existing.id:
            raise MalformedRecord(f"Provider returned {label} without a record id")
        if not dry_run:
            self.provider.update_record(domain, token, existing.id, request.value, request.ttl)
            logger.info(f"Updated record: {label} -> {request.value}")
        return Outcome.UPDATED

    def _find_matches(
        self, records: List[ProviderRecord], request: RecordRequest
    ) -> List[ProviderRecord]:
        """Filter the provider's records down to the request's name and type."""
        name = sanitize_name(request.name)
        return [
            record
            for record in records
            if sanitize_name(record.name) == name
            and record.type.upper() == request.record_type
        ]

    def _display_name(self, name: str, domain: str) -> str:
        return f"{name}.{domain}" if name else domain
