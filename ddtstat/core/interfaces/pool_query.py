from abc import ABC, abstractmethod
from typing import List


class IPoolQuery(ABC):
    """Read-only queries against the pool and the host it lives on."""

    @abstractmethod
    def get_status_report(self, pool_name: str) -> str:
        """Raw `zpool status -D` text for one pool"""
        pass

    @abstractmethod
    def list_pools(self) -> List[str]:
        """Names of all imported pools"""
        pass

    @abstractmethod
    def get_pool_capacity(self, pool_name: str) -> int:
        """Total pool size in bytes"""
        pass

    @abstractmethod
    def get_host_memory(self) -> int:
        """Physical memory of the host in bytes"""
        pass
