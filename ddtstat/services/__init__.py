"""
ddtstat Services Module

Orchestrates pool queries, report parsing and metric calculation.
"""

from .dedup_service import DedupStatService

__all__ = ["DedupStatService"]
