"""
Parser for the dedup section of `zpool status -D <pool>` output.

Only two lines of the report are read:

    dedup: DDT entries 2937, size 294B on disk, 156B in core

and the histogram totals row:

    bucket              allocated                       referenced
    ______   ______________________________   ______________________________
    refcnt   blocks   LSIZE   PSIZE   DSIZE   blocks   LSIZE   PSIZE   DSIZE
    ------   ------   -----   -----   -----   ------   -----   -----   -----
     Total    2.92K    373M    373M    373M    3.55K    454M    454M    454M

Everything else in the report is ignored.
"""
import re
from typing import Dict, List, Tuple

from ..entities.dedup_stats import DedupStats
from ..exceptions.dedup_exceptions import (
    DdtSummaryNotFound,
    TotalsRowNotFound,
    FieldCountMismatch
)
from ..value_objects.size_value import parse_size_token


DDT_ENTRIES_LABEL = "DDT entries"
TOTALS_LABEL = "Total"

# Column names of the histogram, in order, starting at the row label
TOTALS_COLUMNS = (
    "refcnt",
    "allocated_blocks",
    "allocated_lsize",
    "allocated_psize",
    "allocated_dsize",
    "referenced_blocks",
    "referenced_lsize",
    "referenced_psize",
    "referenced_dsize",
)

_ENTRY_COUNT_PATTERN = re.compile(r'DDT entries\s+(\d+)\s*$')
_CORE_SIZE_PATTERN = re.compile(r'(\d+(?:\.\d+)?[KMGT]?)B?\s+in\s+core\b')
_DECLARATION_SEGMENTS = 3


class DdtReportParser:
    """Extracts DedupStats from raw report text."""

    def parse(self, report: str) -> DedupStats:
        declaration = self.find_declaration_line(report)
        entry_count, core_bytes = self.parse_declaration(declaration)

        totals = self.parse_totals_row(self.find_totals_row(report))

        return DedupStats(
            entry_count=entry_count,
            core_bytes_per_entry=core_bytes,
            referenced_bytes=parse_size_token(totals["referenced_lsize"]),
            allocated_bytes=parse_size_token(totals["allocated_lsize"])
        )

    @staticmethod
    def find_declaration_line(report: str) -> str:
        for line in report.splitlines():
            if DDT_ENTRIES_LABEL in line:
                return line
        raise DdtSummaryNotFound()

    @staticmethod
    def find_totals_row(report: str) -> str:
        for line in report.splitlines():
            fields = line.split()
            if fields and fields[0] == TOTALS_LABEL:
                return line
        raise TotalsRowNotFound()

    @staticmethod
    def parse_declaration(line: str) -> Tuple[int, int]:
        """Return (entry_count, core_bytes_per_entry) from the declaration line."""
        segments = line.split(",")

        match = _ENTRY_COUNT_PATTERN.search(segments[0])
        if not match:
            raise DdtSummaryNotFound(line)

        if len(segments) < _DECLARATION_SEGMENTS:
            raise FieldCountMismatch(line, _DECLARATION_SEGMENTS, len(segments), "in core size")

        core_match = _CORE_SIZE_PATTERN.search(segments[2])
        if not core_match:
            raise FieldCountMismatch(
                line, _DECLARATION_SEGMENTS, _DECLARATION_SEGMENTS - 1, "in core size"
            )

        return int(match.group(1)), parse_size_token(core_match.group(1))

    @staticmethod
    def parse_totals_row(line: str) -> Dict[str, str]:
        """Map histogram column names to the raw tokens of the totals row."""
        fields: List[str] = line.split()
        required = TOTALS_COLUMNS.index("referenced_lsize") + 1
        if len(fields) < required:
            raise FieldCountMismatch(line, required, len(fields), TOTALS_COLUMNS[len(fields)])
        return dict(zip(TOTALS_COLUMNS, fields))


def parse_report(report: str) -> DedupStats:
    """Parse a `zpool status -D` report."""
    return DdtReportParser().parse(report)
