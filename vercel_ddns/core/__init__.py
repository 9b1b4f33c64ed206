"""
Core dynamic DNS functionality.

This package contains the IP resolution and record reconciliation logic.
"""

from .ddns_manager import DDNSManager
from .ip_resolver import IPResolver
from .record_reconciler import RecordReconciler

__all__ = ["DDNSManager", "IPResolver", "RecordReconciler"]
