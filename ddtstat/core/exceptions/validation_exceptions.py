from typing import Dict, Any, Optional, Iterable


class ValidationException(Exception):
    """Base validation exception"""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        super().__init__(message)
        self.field = field
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'message': str(self),
            'field': self.field,
            'value': self.value
        }


class SecurityValidationError(ValidationException):
    """Security validation failed"""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None,
                 security_issue: Optional[str] = None):
        super().__init__(message, field, value)
        self.security_issue = security_issue


class InvalidOption(ValidationException):
    """Command line option or argument is not accepted"""

    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message, 'option', option)
        self.option = option


class InvalidSubcommand(ValidationException):
    """Subcommand is not one of the supported metrics"""

    def __init__(self, subcommand: str, allowed: Iterable[str] = ()):
        allowed = list(allowed)
        message = f"Invalid subcommand '{subcommand}'"
        if allowed:
            message += f" (expected one of: {', '.join(allowed)})"
        super().__init__(message, 'subcommand', subcommand)
        self.subcommand = subcommand
        self.allowed = allowed


class UnknownPool(ValidationException):
    """Pool name is invalid or not imported on this host"""

    def __init__(self, pool_name: str, reason: str = ""):
        message = f"Unknown pool '{pool_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, 'pool_name', pool_name)
        self.pool_name = pool_name
        self.reason = reason


class MissingDependency(ValidationException):
    """A required system binary is not available"""

    def __init__(self, binary: str, search_path: str):
        super().__init__(
            f"Required command '{binary}' not found in PATH {search_path}",
            'binary',
            binary
        )
        self.binary = binary
        self.search_path = search_path
