"""
Concrete implementation of security validator interface.
"""
import re
from typing import List
from ..core.interfaces.security_validator import ISecurityValidator
from ..core.exceptions.validation_exceptions import SecurityValidationError


class SecurityValidator(ISecurityValidator):
    """Validates names and arguments before they reach a subprocess."""

    def __init__(self):
        self._pool_name_pattern = re.compile(r'^[a-zA-Z][a-zA-Z0-9_\-\.:]*$')

        # Command injection patterns to block
        self._dangerous_patterns = [
            r'[;&|`$(){}[\]\\]',  # Command separators and shell metacharacters
            r'\.\./',             # Path traversal attempts
            r'<|>',               # Redirection operators
            r'\n|\r',             # Newline characters
        ]

        # Names zpool reserves for vdev types
        self._reserved_prefixes = ('mirror', 'raidz', 'draid', 'spare')
        self._reserved_names = {'log'}

    def validate_pool_name(self, pool_name: str) -> str:
        """Validate pool name for security and format compliance."""
        if not pool_name or not isinstance(pool_name, str):
            raise SecurityValidationError("Pool name cannot be empty or non-string", 'pool_name', pool_name)

        if len(pool_name) > 255:
            raise SecurityValidationError("Pool name too long (max 255 characters)", 'pool_name', pool_name)

        for pattern in self._dangerous_patterns:
            if re.search(pattern, pool_name):
                raise SecurityValidationError(
                    f"Pool name contains dangerous characters: {pool_name}",
                    'pool_name',
                    pool_name,
                    security_issue="shell_metacharacters"
                )

        if not self._pool_name_pattern.match(pool_name):
            raise SecurityValidationError(f"Invalid pool name format: {pool_name}", 'pool_name', pool_name)

        if pool_name in self._reserved_names or pool_name.startswith(self._reserved_prefixes):
            raise SecurityValidationError(f"Pool name is reserved: {pool_name}", 'pool_name', pool_name)

        return pool_name

    def validate_command_args(self, command: str, args: List[str]) -> List[str]:
        """Validate command and its arguments."""
        if not command or not isinstance(command, str):
            raise SecurityValidationError("Command cannot be empty or non-string")

        for pattern in self._dangerous_patterns:
            if re.search(pattern, command):
                raise SecurityValidationError(f"Command contains dangerous characters: {command}")

        validated_args = []
        for arg in args:
            if not isinstance(arg, str):
                raise SecurityValidationError("All arguments must be strings")

            for pattern in self._dangerous_patterns:
                if re.search(pattern, arg):
                    raise SecurityValidationError(f"Argument contains dangerous characters: {arg}")

            if len(arg) > 1024:
                raise SecurityValidationError("Argument too long (max 1024 characters)")

            validated_args.append(arg)

        return validated_args
