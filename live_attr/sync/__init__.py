"""
Synchronization package: batched write-back of live attributes.
"""

from .reconcile import ReconciliationEngine

__all__ = ["ReconciliationEngine"]
