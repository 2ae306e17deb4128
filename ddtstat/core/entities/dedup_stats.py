from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class DedupStats:
    """Figures extracted from one `zpool status -D` report.

    `allocated_bytes` normally does not exceed `referenced_bytes`, but nothing
    here enforces it; the calculator propagates a negative difference.
    """
    entry_count: int
    core_bytes_per_entry: int
    referenced_bytes: int
    allocated_bytes: int

    def __post_init__(self):
        for name in ('entry_count', 'core_bytes_per_entry', 'referenced_bytes', 'allocated_bytes'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")

    @property
    def table_core_bytes(self) -> int:
        """In-core footprint of the whole table"""
        return self.entry_count * self.core_bytes_per_entry

    @property
    def saved_bytes(self) -> int:
        """Logical bytes reclaimed by deduplication"""
        return self.referenced_bytes - self.allocated_bytes

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'entry_count': self.entry_count,
            'core_bytes_per_entry': self.core_bytes_per_entry,
            'referenced_bytes': self.referenced_bytes,
            'allocated_bytes': self.allocated_bytes,
            'table_core_bytes': self.table_core_bytes,
            'saved_bytes': self.saved_bytes
        }
