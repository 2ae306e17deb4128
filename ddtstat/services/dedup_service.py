from typing import Optional, Union

from pydantic import ValidationError

from ..core.interfaces.pool_query import IPoolQuery
from ..core.interfaces.security_validator import ISecurityValidator
from ..core.interfaces.logger_interface import ILogger
from ..core.entities.dedup_stats import DedupStats
from ..core.value_objects.metric_request import MetricRequest, Subcommand, Unit
from ..core.parsing.report_parser import DdtReportParser
from ..core.calculator import calculate_metric
from ..core.exceptions.dedup_exceptions import DedupException
from ..core.exceptions.validation_exceptions import (
    ValidationException,
    SecurityValidationError,
    InvalidOption,
    UnknownPool
)
from ..core.result import Result


ServiceError = Union[DedupException, ValidationException]


class DedupStatService:
    """Runs one parse-and-compute pass for a single pool."""

    def __init__(self,
                 pool_query: IPoolQuery,
                 validator: ISecurityValidator,
                 logger: ILogger,
                 parser: Optional[DdtReportParser] = None):
        self._pool_query = pool_query
        self._validator = validator
        self._logger = logger
        self._parser = parser or DdtReportParser()

    def validate_pool(self, pool_name: str) -> Result[str, ServiceError]:
        """Check the pool name is well formed and imported."""
        try:
            self._validator.validate_pool_name(pool_name)
        except SecurityValidationError as e:
            return Result.failure(UnknownPool(pool_name, str(e)))

        try:
            known_pools = self._pool_query.list_pools()
        except DedupException as e:
            return Result.failure(e)

        if pool_name not in known_pools:
            self._logger.debug("Known pools", {"pools": known_pools})
            return Result.failure(UnknownPool(pool_name, "no such pool"))

        return Result.success(pool_name)

    def get_stats(self, pool_name: str) -> Result[DedupStats, ServiceError]:
        """Fetch and parse the status report of a pool."""
        try:
            report = self._pool_query.get_status_report(pool_name)
            stats = self._parser.parse(report)
        except DedupException as e:
            self._logger.debug(f"Failed to read dedup stats for {pool_name}", {"error_code": e.error_code})
            return Result.failure(e)

        self._logger.debug(f"Parsed dedup stats for {pool_name}", stats.to_dict())
        return Result.success(stats)

    def resolve_request(self, subcommand: Subcommand, pool_name: str,
                        unit_divisor: int = Unit.BYTES.value,
                        percent: bool = False) -> Result[MetricRequest, ServiceError]:
        """Build the metric request, deriving total/100 in percent mode.

        Only the capacity figure the subcommand needs is queried.
        """
        if not percent:
            return self._build_request(subcommand, unit_divisor)

        try:
            if subcommand == Subcommand.MEM:
                total = self._pool_query.get_host_memory()
            else:
                total = self._pool_query.get_pool_capacity(pool_name)
        except DedupException as e:
            return Result.failure(e)

        divisor = total // 100
        self._logger.info(
            f"Percent divisor for {subcommand.value}: {divisor}",
            {"total_bytes": total}
        )
        return self._build_request(subcommand, divisor, is_percent=True)

    def _build_request(self, subcommand: Subcommand, divisor: int,
                       is_percent: bool = False) -> Result[MetricRequest, ServiceError]:
        try:
            return Result.success(MetricRequest(subcommand=subcommand, divisor=divisor, is_percent=is_percent))
        except ValidationError as e:
            reason = "; ".join(err["msg"] for err in e.errors())
            return Result.failure(InvalidOption(f"Invalid divisor {divisor}: {reason}", "divisor"))

    def compute(self, request: MetricRequest, stats: DedupStats) -> Result[int, ServiceError]:
        try:
            value = calculate_metric(stats, request)
        except DedupException as e:
            return Result.failure(e)

        self._logger.info(
            f"Computed {request.subcommand.value}",
            {"value": value, "divisor": request.divisor, "percent": request.is_percent}
        )
        return Result.success(value)

    def get_metric(self, subcommand: Subcommand, pool_name: str,
                   unit_divisor: int = Unit.BYTES.value,
                   percent: bool = False) -> Result[int, ServiceError]:
        """Validate, fetch, parse and compute; the first failure stops the pass."""
        self._logger.info(f"Computing {subcommand.value} for pool: {pool_name}")

        validation_result = self.validate_pool(pool_name)
        if validation_result.is_failure:
            return Result.failure(validation_result.error)

        stats_result = self.get_stats(pool_name)
        if stats_result.is_failure:
            return Result.failure(stats_result.error)

        request_result = self.resolve_request(subcommand, pool_name, unit_divisor, percent)
        if request_result.is_failure:
            return Result.failure(request_result.error)

        return self.compute(request_result.value, stats_result.value)
