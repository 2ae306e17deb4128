"""Core domain exceptions"""

from .dedup_exceptions import (
    DedupException,
    MalformedSizeToken,
    ReportParseException,
    DdtSummaryNotFound,
    TotalsRowNotFound,
    FieldCountMismatch,
    DivisionUndefined,
    PoolQueryError
)
from .validation_exceptions import (
    ValidationException,
    SecurityValidationError,
    InvalidOption,
    InvalidSubcommand,
    UnknownPool,
    MissingDependency
)

__all__ = [
    'DedupException',
    'MalformedSizeToken',
    'ReportParseException',
    'DdtSummaryNotFound',
    'TotalsRowNotFound',
    'FieldCountMismatch',
    'DivisionUndefined',
    'PoolQueryError',
    'ValidationException',
    'SecurityValidationError',
    'InvalidOption',
    'InvalidSubcommand',
    'UnknownPool',
    'MissingDependency'
]
