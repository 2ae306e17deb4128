"""
ddtstat Configuration Module

Loads settings from the environment (optionally seeded from a .env file)
into small dataclass sections.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .infrastructure.command_executor import DEFAULT_SAFE_PATH
from .infrastructure.logging.structured_logger import LogConfig, LEVEL_ORDER

ENV_PREFIX = "DDTSTAT_"
LOG_FORMATS = ("text", "json")


@dataclass
class ExecutorConfig:
    """Subprocess execution settings"""
    command_timeout: int = 30
    safe_path: str = DEFAULT_SAFE_PATH
    zpool_binary: str = "zpool"


@dataclass
class DdtStatConfig:
    """
    ddtstat configuration settings loaded from environment variables.

    Each key is looked up with the DDTSTAT_ prefix first, then unprefixed.
    Invalid values are reported on the logging sink and replaced by defaults.
    """
    log: LogConfig = field(default_factory=LogConfig)
    executor: ExecutorConfig = field(default_factory=ExecutorConfig)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_environment(cls) -> 'DdtStatConfig':
        config = cls()
        config._load_environment_variables()
        return config

    def _load_environment_variables(self) -> None:
        level = self._get_string("LOG_LEVEL", self.log.level).upper()
        if level == "WARN":
            level = "WARNING"
        elif level == "FATAL":
            level = "CRITICAL"
        if level not in LEVEL_ORDER:
            self._warn(f"Invalid log level: {level}, using WARNING")
            level = "WARNING"

        log_format = self._get_string("LOG_FORMAT", self.log.format).lower()
        if log_format not in LOG_FORMATS:
            self._warn(f"Invalid log format: {log_format}, using text")
            log_format = "text"

        self.log = LogConfig(level=level, format=log_format)

        self.executor.command_timeout = self._get_int("COMMAND_TIMEOUT", self.executor.command_timeout)
        if self.executor.command_timeout <= 0:
            self._warn(f"Invalid command timeout: {self.executor.command_timeout}, using 30")
            self.executor.command_timeout = 30

        self.executor.safe_path = self._get_string("SAFE_PATH", self.executor.safe_path)
        self.executor.zpool_binary = self._get_string("ZPOOL_BINARY", self.executor.zpool_binary)

    def _get_string(self, key: str, default: str) -> str:
        """Get string value from environment with multiple key attempts"""
        for prefix in [ENV_PREFIX, ""]:
            value = os.getenv(f"{prefix}{key}")
            if value is not None:
                return value
        return default

    def _get_int(self, key: str, default: int) -> int:
        """Get integer value from environment with validation"""
        value = self._get_string(key, str(default))
        try:
            return int(value)
        except ValueError:
            self._warn(f"Invalid integer value for {key}: {value}, using default: {default}")
            return default

    def _warn(self, message: str) -> None:
        # Reported by the CLI once its logger is configured
        self.warnings.append(message)

    def get_summary(self) -> dict:
        return {
            "log_level": self.log.level,
            "log_format": self.log.format,
            "command_timeout": self.executor.command_timeout,
            "safe_path": self.executor.safe_path,
            "zpool_binary": self.executor.zpool_binary,
        }


def load_dotenv_if_exists(env_file: Optional[Path] = None) -> bool:
    """Load a .env file from the working directory if present."""
    env_file = env_file or Path(".env")
    if not env_file.exists():
        return False
    return load_dotenv(env_file, override=False)


def get_config() -> DdtStatConfig:
    """Build configuration from .env and the process environment"""
    load_dotenv_if_exists()
    return DdtStatConfig.from_environment()
