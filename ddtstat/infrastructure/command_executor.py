"""
Concrete implementation of command executor interface.
"""
import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult
from ..core.interfaces.security_validator import ISecurityValidator
from ..core.exceptions.validation_exceptions import SecurityValidationError
from .security_validator import SecurityValidator


DEFAULT_SAFE_PATH = "/usr/sbin:/usr/bin:/sbin:/bin"


class CommandExecutor(ICommandExecutor):
    """Runs allow-listed commands synchronously with a sanitized environment."""

    def __init__(self, timeout: int = 30, safe_path: str = DEFAULT_SAFE_PATH,
                 validator: Optional[ISecurityValidator] = None,
                 zpool_binary: str = "zpool"):
        self.timeout = timeout
        self.safe_path = safe_path
        self.zpool_binary = zpool_binary
        self.logger = logging.getLogger(__name__)
        self._validator = validator or SecurityValidator()

        # Allowed system commands
        self._allowed_commands = {'zpool', 'sysctl', 'free'}

    def _environment(self) -> Dict[str, str]:
        """Minimal environment: fixed PATH, C locale for stable report text."""
        env = {
            "PATH": self.safe_path,
            "LC_ALL": "C",
            "LANG": "C",
        }
        if "HOME" in os.environ:
            env["HOME"] = os.environ["HOME"]
        return env

    def _resolve(self, command: str) -> str:
        if command == "zpool":
            return self.zpool_binary
        return command

    def is_available(self, command: str) -> bool:
        """Check the command resolves on the sanitized PATH."""
        return shutil.which(self._resolve(command), path=self.safe_path) is not None

    def execute(self, command: str, *args: str) -> CommandResult:
        """Execute system command with validation."""
        if command not in self._allowed_commands:
            return CommandResult(
                success=False,
                returncode=1,
                stdout="",
                stderr=f"System command '{command}' not allowed"
            )

        try:
            validated_args = self._validator.validate_command_args(command, list(args))
        except SecurityValidationError as e:
            return CommandResult(
                success=False,
                returncode=1,
                stdout="",
                stderr=str(e)
            )

        return self._execute_command([self._resolve(command)] + validated_args)

    def _execute_command(self, command: List[str]) -> CommandResult:
        """Execute command with proper error handling."""
        self.logger.debug(f"Executing command: {' '.join(command)}")
        try:
            process = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors='replace',
                env=self._environment(),
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                success=False,
                returncode=124,  # Timeout exit code
                stdout="",
                stderr=f"Command timed out after {self.timeout} seconds"
            )
        except OSError as e:
            self.logger.debug(f"Command execution failed: {str(e)}")
            return CommandResult(
                success=False,
                returncode=127,
                stdout="",
                stderr=f"Command execution failed: {str(e)}"
            )

        if process.returncode != 0:
            self.logger.debug(
                f"Command failed with exit code {process.returncode}: {process.stderr.strip()}"
            )

        return CommandResult(
            returncode=process.returncode,
            stdout=process.stdout,
            stderr=process.stderr.strip()
        )
