"""Core domain entities"""

from .dedup_stats import DedupStats

__all__ = ['DedupStats']
