"""
DDNS Manager - One reconciliation pass for a Vercel domain

Resolves the public addresses for the configured families, then converges
one record per subdomain and family. By default the first failure stops the
run; with keep_going every record is attempted and a partial summary is
reported.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .errors import ReconcileError, ResolutionFailed
from .ip_resolver import IPResolver
from .models import (
    AddressFamily,
    DDNSConfig,
    Outcome,
    RecordRequest,
    RecordResult,
    ResolvedAddress,
)
from .record_reconciler import RecordReconciler
from ..providers.base_provider import DNSProvider
from ..providers.dns_client import DNSClient

console = Console()
logger = logging.getLogger(__name__)

STAGE_RESOLUTION = "resolution"
STAGE_RECONCILIATION = "reconciliation"


@dataclass
class SyncReport:
    """Everything one run produced, in the order it happened."""

    addresses: Dict[AddressFamily, ResolvedAddress] = field(default_factory=dict)
    resolution_errors: List[ResolutionFailed] = field(default_factory=list)
    results: List[RecordResult] = field(default_factory=list)
    aborted_stage: Optional[str] = None

    @property
    def success(self) -> bool:
        return not self.resolution_errors and all(r.ok for r in self.results)

    @property
    def failures(self) -> List[RecordResult]:
        return [r for r in self.results if not r.ok]

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)


class DDNSManager:
    """Main dynamic DNS class that orchestrates resolution and reconciliation."""

    def __init__(
        self,
        config: DDNSConfig,
        provider: Optional[DNSProvider] = None,
        resolver: Optional[IPResolver] = None,
    ):
        """Initialize the manager; provider and resolver default from config."""
        self.config = config
        self.provider = provider or DNSClient(self._provider_config())
        self.resolver = resolver or IPResolver(timeout=config.oracle_timeout)
        self.reconciler = RecordReconciler(self.provider)

    def _provider_config(self) -> Dict:
        return {
            "default_provider": self.config.provider,
            "dns_providers": {
                self.config.provider: {
                    "team_id": self.config.team_id,
                    "timeout": self.config.api_timeout,
                }
            },
        }

    def run(self) -> SyncReport:
        """Run one reconciliation pass and return its report."""
        report = SyncReport()

        console.print(
            f"[green]Resolving public address for: "
            f"{', '.join(f.label for f in self.config.families)}[/green]"
        )
        if not self._resolve_addresses(report):
            report.aborted_stage = STAGE_RESOLUTION
            for error in report.resolution_errors:
                console.print(f"[red]Resolution failed: {escape(str(error))}[/red]")
            return report

        if self.config.dry_run:
            console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")

        self._reconcile_all(report)
        self._display_summary(report)

        if report.aborted_stage:
            console.print("[red]Stopped after the first failed record[/red]")
        elif report.success:
            console.print("[green]All DNS records are up to date[/green]")
        else:
            console.print(f"[red]{len(report.failures)} record(s) failed to update[/red]")
        return report

    def _resolve_addresses(self, report: SyncReport) -> bool:
        """Fill the report's addresses; False if any requested family failed."""
        resolved = self.resolver.resolve(self.config.families)
        for family in self.config.families:
            result = resolved.get(family)
            if isinstance(result, ResolvedAddress):
                report.addresses[family] = result
                console.print(f"[blue]Public {family.label} address: {result.value}[/blue]")
            elif result is not None and result not in report.resolution_errors:
                report.resolution_errors.append(result)
        return not report.resolution_errors

    def _reconcile_all(self, report: SyncReport):
        for subdomain in self.config.subdomains:
            for family, address in report.addresses.items():
                result = self._reconcile_one(subdomain, family, address)
                report.results.append(result)
                if not result.ok and not self.config.keep_going:
                    report.aborted_stage = STAGE_RECONCILIATION
                    return

    def _reconcile_one(
        self, subdomain: str, family: AddressFamily, address: ResolvedAddress
    ) -> RecordResult:
        request = RecordRequest.for_address(subdomain, address, self.config.ttl)
        try:
            outcome = self.reconciler.upsert(
                self.config.domain,
                self.config.token,
                request,
                dry_run=self.config.dry_run,
            )
        except ReconcileError as e:
            logger.error(f"Unable to add / update {request.record_type} record for '{subdomain}': {e}")
            return RecordResult(subdomain, family, request=request, error=e)

        return RecordResult(subdomain, family, request=request, outcome=outcome)

    def _display_summary(self, report: SyncReport):
        """Display a table with one row per reconciled record."""
        table = Table(title=f"DNS Records for {self.config.domain}")
        table.add_column("Name", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Value", style="white")
        table.add_column("TTL", style="white")
        table.add_column("Result", style="white")

        for result in report.results:
            request = result.request
            if result.ok:
                status = f"[green]{result.outcome.value}[/green]"
            else:
                status = f"[red]{escape(str(result.error))}[/red]"
            table.add_row(
                result.subdomain or "@",
                request.record_type,
                request.value,
                str(request.ttl),
                status,
            )

        console.print(table)
        console.print(
            f"\n[bold]Created: {report.count(Outcome.CREATED)}, "
            f"Updated: {report.count(Outcome.UPDATED)}, "
            f"Unchanged: {report.count(Outcome.UNCHANGED)}, "
            f"Failed: {len(report.failures)}[/bold]"
        )
