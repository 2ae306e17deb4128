"""Report ZFS dedup table memory footprint and dedup disk savings."""

__version__ = "0.1.0"
