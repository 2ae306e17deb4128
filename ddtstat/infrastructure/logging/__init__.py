from .structured_logger import (
    LogConfig,
    StructuredLogger,
    ContextLogger,
    StructuredFormatter,
    TextFormatter
)

__all__ = ['LogConfig', 'StructuredLogger', 'ContextLogger', 'StructuredFormatter', 'TextFormatter']
