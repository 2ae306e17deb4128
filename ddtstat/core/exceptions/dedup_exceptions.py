from typing import Dict, Any, Optional


class DedupException(Exception):
    """Base exception for dedup table report parsing and calculation"""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'message': str(self),
            'error_code': self.error_code,
            'details': self.details
        }


class MalformedSizeToken(DedupException):
    """Size token does not match <digits>[.<digits>][K|M|G|T]"""

    def __init__(self, token: str, reason: str = ""):
        message = f"Malformed size token '{token}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            error_code="MALFORMED_SIZE_TOKEN",
            details={"token": token, "reason": reason}
        )


class ReportParseException(DedupException):
    """Report text parsing exceptions"""
    pass


class DdtSummaryNotFound(ReportParseException):
    """No usable DDT entries declaration in the report"""

    def __init__(self, line: Optional[str] = None):
        message = "DDT summary line not found in report"
        if line is not None:
            message = f"DDT summary line has no entry count: {line.strip()}"
        super().__init__(
            message,
            error_code="DDT_SUMMARY_NOT_FOUND",
            details={"line": line}
        )


class TotalsRowNotFound(ReportParseException):
    """No Total row in the DDT histogram"""

    def __init__(self):
        super().__init__(
            "DDT histogram totals row not found in report",
            error_code="TOTALS_ROW_NOT_FOUND"
        )


class FieldCountMismatch(ReportParseException):
    """A located line has fewer fields than its format requires"""

    def __init__(self, line: str, expected: int, actual: int, field: str = ""):
        message = f"Expected at least {expected} fields, found {actual}"
        if field:
            message += f" (missing {field})"
        message += f": {line.strip()}"
        super().__init__(
            message,
            error_code="FIELD_COUNT_MISMATCH",
            details={
                "line": line,
                "expected": expected,
                "actual": actual,
                "field": field
            }
        )


class DivisionUndefined(DedupException):
    """Divisor of zero reached the calculator"""

    def __init__(self, subcommand: str = ""):
        message = "Divisor is zero"
        if subcommand:
            message += f" for '{subcommand}'"
        super().__init__(
            message,
            error_code="DIVISION_UNDEFINED",
            details={"subcommand": subcommand}
        )


class PoolQueryError(DedupException):
    """External pool or host query failed"""

    def __init__(self, command: str, exit_code: int, stderr: str = "", reason: str = ""):
        message = f"Command failed (exit code {exit_code}): {command}"
        if stderr:
            message += f"\nError: {stderr}"
        if reason:
            message += f"\nReason: {reason}"
        super().__init__(
            message,
            error_code="POOL_QUERY_FAILED",
            details={
                "command": command,
                "exit_code": exit_code,
                "stderr": stderr,
                "reason": reason
            }
        )
