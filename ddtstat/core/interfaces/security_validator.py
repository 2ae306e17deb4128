from abc import ABC, abstractmethod
from typing import List


class ISecurityValidator(ABC):
    """Interface for security validation operations"""

    @abstractmethod
    def validate_pool_name(self, pool_name: str) -> str:
        """Validate and sanitize pool name"""
        pass

    @abstractmethod
    def validate_command_args(self, command: str, args: List[str]) -> List[str]:
        """Validate command and arguments"""
        pass
