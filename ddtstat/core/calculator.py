"""
Dedup metric calculation.

Both metrics are integers scaled by a divisor the caller has already
resolved, either a fixed unit (1, 1024, ... 1024**4) or total/100 in percent
mode. Division truncates toward zero so a negative numerator from a malformed
report yields a negative result rather than an error.
"""
from .entities.dedup_stats import DedupStats
from .exceptions.dedup_exceptions import DivisionUndefined
from .value_objects.metric_request import MetricRequest, Subcommand


def _truncating_div(numerator: int, divisor: int) -> int:
    quotient = abs(numerator) // abs(divisor)
    if (numerator < 0) != (divisor < 0):
        return -quotient
    return quotient


def calculate_mem(stats: DedupStats, divisor: int) -> int:
    """In-core size of the dedup table."""
    if divisor == 0:
        raise DivisionUndefined(Subcommand.MEM.value)
    return _truncating_div(stats.entry_count * stats.core_bytes_per_entry, divisor)


def calculate_disk(stats: DedupStats, divisor: int) -> int:
    """Logical space reclaimed by deduplication."""
    if divisor == 0:
        raise DivisionUndefined(Subcommand.DISK.value)
    return _truncating_div(stats.referenced_bytes - stats.allocated_bytes, divisor)


_CALCULATORS = {
    Subcommand.MEM: calculate_mem,
    Subcommand.DISK: calculate_disk,
}


def calculate_metric(stats: DedupStats, request: MetricRequest) -> int:
    """Compute only the metric named by the request."""
    return _CALCULATORS[request.subcommand](stats, request.divisor)


def select_output(value: int) -> str:
    """Render the metric as the single line written to stdout."""
    return str(int(value))
