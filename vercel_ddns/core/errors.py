"""
Error types raised while resolving addresses and reconciling records.

Every failure the updater can hit on the network is one of these, so callers
can handle them as ordinary values instead of letting the process crash.
"""

from typing import List, Sequence, Tuple


class DDNSError(Exception):
    """Base class for all dynamic DNS errors."""


class ConfigurationError(DDNSError):
    """Raised when the run configuration is missing or invalid."""


class OracleError(DDNSError):
    """A single IP oracle failed to produce a usable answer."""

    def __init__(self, oracle: str, cause: str):
        self.oracle = oracle
        self.cause = cause
        super().__init__(f"{oracle}: {cause}")


class ResolutionFailed(DDNSError):
    """Every oracle configured for an address family failed."""

    def __init__(self, family, attempts: Sequence[Tuple[str, str]] = ()):
        self.family = family
        self.attempts: List[Tuple[str, str]] = list(attempts)
        details = "; ".join(f"{name}: {cause}" for name, cause in self.attempts)
        message = f"Unable to resolve public {family.label} address"
        if details:
            message += f" ({details})"
        super().__init__(message)


class ReconcileError(DDNSError):
    """Base class for failures while converging a provider record."""


class AmbiguousRecord(ReconcileError):
    """More than one provider record matches the same name and type."""

    def __init__(self, domain: str, name: str, record_type: str, record_ids: Sequence[str]):
        self.domain = domain
        self.name = name
        self.record_type = record_type
        self.record_ids = list(record_ids)
        super().__init__(
            f"Found {len(self.record_ids)} {record_type} records for "
            f"'{name or '@'}' in {domain} ({', '.join(self.record_ids)}); "
            "refusing to guess which one to update"
        )


class ProviderUnavailable(ReconcileError):
    """Transport or authentication failure while talking to the provider."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"DNS provider unavailable: {cause}")


class MalformedRecord(ReconcileError):
    """The provider returned a record that cannot be acted on."""
