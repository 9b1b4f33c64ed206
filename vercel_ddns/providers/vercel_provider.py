"""
Vercel DNS provider implementation.

This module talks to the Vercel REST API using the requests library.
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

from .base_provider import DNSProvider
from ..core.errors import ProviderUnavailable
from ..core.models import ProviderRecord, RecordRequest

logger = logging.getLogger(__name__)

VERCEL_API_URL = "https://api.vercel.com"
PAGE_SIZE = 100


class VercelProvider(DNSProvider):
    """Vercel DNS provider implementation using the REST API."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize Vercel provider."""
        config = config or {}
        self.api_url = config.get("api_url", VERCEL_API_URL).rstrip("/")
        self.team_id = config.get("team_id")
        self.timeout = config.get("timeout", 10)
        self.session = requests.Session()
        logger.info(f"Vercel provider initialized for {self.api_url}")

    def _params(self, extra: Optional[Dict] = None) -> Dict:
        params = dict(extra or {})
        if self.team_id:
            params["teamId"] = self.team_id
        return params

    def _api_request(self, method: str, path: str, token: str, params=None, data=None) -> Dict:
        url = f"{self.api_url}{path}"
        headers = {"Authorization": f"Bearer {token}"}

        try:
            logger.debug(f"Vercel API request: {method} {url}")
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=self._params(params),
                json=data,
                timeout=self.timeout,
            )
            logger.debug(f"Vercel API response: {response.status_code} for {method} {path}")
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise ProviderUnavailable(self._describe_http_error(e)) from e
        except requests.exceptions.RequestException as e:
            raise ProviderUnavailable(f"{method} {path} failed: {e}") from e

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise ProviderUnavailable(f"{method} {path} returned invalid JSON") from e

        if not isinstance(body, dict):
            raise ProviderUnavailable(f"{method} {path} returned unexpected JSON: {body!r}")
        return body

    @staticmethod
    def _describe_http_error(error: requests.exceptions.HTTPError) -> str:
        response = error.response
        if response is None:
            return str(error)

        message = response.reason or "HTTP error"
        try:
            body = response.json()
            message = body.get("error", {}).get("message") or message
        except (AttributeError, ValueError):
            pass
        return f"HTTP {response.status_code}: {message}"

    def list_records(self, domain: str, token: str) -> List[ProviderRecord]:
        """Get all DNS records for a domain, following pagination."""
        path = f"/v4/domains/{quote(domain)}/records"
        records: List[ProviderRecord] = []
        params = {"limit": PAGE_SIZE}
        seen_cursors = set()

        while True:
            body = self._api_request("GET", path, token, params=params)
            try:
                records.extend(ProviderRecord.from_api(item) for item in body.get("records") or [])
                cursor = (body.get("pagination") or {}).get("next")
            except (AttributeError, TypeError, ValueError) as e:
                raise ProviderUnavailable(f"GET {path} returned malformed records: {e}") from e

            if not cursor or cursor in seen_cursors:
                break
            seen_cursors.add(cursor)
            params = {"limit": PAGE_SIZE, "until": cursor}

        logger.info(f"Retrieved {len(records)} records for {domain} from Vercel")
        return records

    def create_record(self, domain: str, token: str, request: RecordRequest) -> str:
        """Create a new DNS record."""
        body = self._api_request(
            "POST",
            f"/v2/domains/{quote(domain)}/records",
            token,
            data={
                "name": request.name,
                "type": request.record_type,
                "value": request.value,
                "ttl": request.ttl,
            },
        )
        record_id = body.get("uid") or body.get("id") or ""
        logger.debug(f"Created record {request.name} -> {request.value} ({record_id})")
        return record_id

    def update_record(self, domain: str, token: str, record_id: str, value: str, ttl: int) -> None:
        """Update an existing DNS record."""
        self._api_request(
            "PATCH",
            f"/v1/domains/records/{quote(record_id)}",
            token,
            data={"value": value, "ttl": ttl},
        )
        logger.debug(f"Updated record {record_id} in {domain} -> {value}")
