"""
Vercel DDNS - Keep Vercel DNS records pointed at your public IP

Resolves the current public IPv4/IPv6 address through DNS-based echo
services and upserts A/AAAA records at Vercel in an idempotent way.
"""

__version__ = "1.0.0"
__author__ = "Vercel DDNS Team"
__description__ = "Dynamic DNS updater for domains hosted on Vercel"

from .core.ddns_manager import DDNSManager
from .core.ip_resolver import IPResolver
from .core.record_reconciler import RecordReconciler
from .providers.dns_client import DNSClient

__all__ = [
    "DDNSManager",
    "IPResolver",
    "RecordReconciler",
    "DNSClient",
]
