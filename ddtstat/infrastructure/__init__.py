"""Infrastructure layer: subprocess execution, pool queries and logging"""

from .command_executor import CommandExecutor, DEFAULT_SAFE_PATH
from .pool_query import LivePoolQuery, FakePoolQuery
from .security_validator import SecurityValidator

__all__ = ['CommandExecutor', 'DEFAULT_SAFE_PATH', 'LivePoolQuery', 'FakePoolQuery', 'SecurityValidator']
