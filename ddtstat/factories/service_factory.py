"""
Service factory for dependency injection and service creation.
"""
from typing import Dict, Any, Optional, TextIO

from ..core.interfaces.command_executor import ICommandExecutor
from ..core.interfaces.pool_query import IPoolQuery
from ..core.interfaces.security_validator import ISecurityValidator
from ..core.interfaces.logger_interface import ILogger
from ..infrastructure.command_executor import CommandExecutor, DEFAULT_SAFE_PATH
from ..infrastructure.pool_query import LivePoolQuery
from ..infrastructure.security_validator import SecurityValidator
from ..infrastructure.logging.structured_logger import ContextLogger, LogConfig
from ..services.dedup_service import DedupStatService


class ServiceFactory:
    """Factory for creating service instances with proper dependency injection."""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 pool_query: Optional[IPoolQuery] = None,
                 log_stream: Optional[TextIO] = None):
        self._config = config or {}
        self._log_stream = log_stream
        self._logger: Optional[ILogger] = None

        self._validator: ISecurityValidator = SecurityValidator()
        self._executor: ICommandExecutor = CommandExecutor(
            timeout=self._config.get('command_timeout', 30),
            safe_path=self._config.get('safe_path', DEFAULT_SAFE_PATH),
            validator=self._validator,
            zpool_binary=self._config.get('zpool_binary', 'zpool')
        )
        # An injected query replaces the live zpool/free backend
        self._pool_query: IPoolQuery = pool_query or LivePoolQuery(self._executor)
        self._uses_live_query = pool_query is None

    @property
    def executor(self) -> ICommandExecutor:
        return self._executor

    @property
    def uses_live_query(self) -> bool:
        return self._uses_live_query

    def get_logger(self) -> ILogger:
        """Get or create the shared logger."""
        if self._logger is None:
            self._logger = ContextLogger(
                name="ddtstat",
                config=LogConfig(
                    level=self._config.get('log_level', 'WARNING'),
                    format=self._config.get('log_format', 'text')
                ),
                stream=self._log_stream
            )
        return self._logger

    def create_dedup_service(self) -> DedupStatService:
        """Create a DedupStatService instance with injected dependencies."""
        return DedupStatService(
            pool_query=self._pool_query,
            validator=self._validator,
            logger=self.get_logger()
        )


class ServiceFactoryBuilder:
    """Builder for creating ServiceFactory instances with fluent configuration."""

    def __init__(self):
        self._config: Dict[str, Any] = {}
        self._pool_query: Optional[IPoolQuery] = None
        self._log_stream: Optional[TextIO] = None

    def with_command_timeout(self, timeout: int) -> 'ServiceFactoryBuilder':
        self._config['command_timeout'] = timeout
        return self

    def with_safe_path(self, safe_path: str) -> 'ServiceFactoryBuilder':
        self._config['safe_path'] = safe_path
        return self

    def with_zpool_binary(self, zpool_binary: str) -> 'ServiceFactoryBuilder':
        self._config['zpool_binary'] = zpool_binary
        return self

    def with_log_config(self, log_config: LogConfig) -> 'ServiceFactoryBuilder':
        self._config['log_level'] = log_config.level
        self._config['log_format'] = log_config.format
        return self

    def with_log_stream(self, stream: TextIO) -> 'ServiceFactoryBuilder':
        self._log_stream = stream
        return self

    def with_pool_query(self, pool_query: IPoolQuery) -> 'ServiceFactoryBuilder':
        self._pool_query = pool_query
        return self

    def build(self) -> ServiceFactory:
        return ServiceFactory(self._config, pool_query=self._pool_query, log_stream=self._log_stream)
