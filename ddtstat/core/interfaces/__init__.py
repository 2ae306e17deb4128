"""Core service interfaces"""

from .command_executor import ICommandExecutor, CommandResult
from .pool_query import IPoolQuery
from .logger_interface import ILogger
from .security_validator import ISecurityValidator

__all__ = [
    'ICommandExecutor',
    'CommandResult',
    'IPoolQuery',
    'ILogger',
    'ISecurityValidator'
]
