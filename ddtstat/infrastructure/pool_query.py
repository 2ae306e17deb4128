"""
Pool and host queries backed by zpool(8), sysctl(8) and free(1).
"""
import logging
from typing import Dict, List, Optional

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult
from ..core.interfaces.pool_query import IPoolQuery
from ..core.exceptions.dedup_exceptions import PoolQueryError

logger = logging.getLogger(__name__)


class LivePoolQuery(IPoolQuery):
    """Shells out through the command executor."""

    def __init__(self, executor: ICommandExecutor):
        self._executor = executor

    def _run(self, command: str, *args: str) -> CommandResult:
        result = self._executor.execute(command, *args)
        if not result.success:
            raise PoolQueryError(" ".join((command,) + args), result.returncode, result.stderr)
        return result

    def get_status_report(self, pool_name: str) -> str:
        return self._run("zpool", "status", "-D", pool_name).stdout

    def list_pools(self) -> List[str]:
        result = self._run("zpool", "list", "-H", "-o", "name")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def get_pool_capacity(self, pool_name: str) -> int:
        args = ("list", "-Hp", "-o", "size", pool_name)
        result = self._run("zpool", *args)
        value = result.stdout.strip()
        if not value.isdigit():
            raise PoolQueryError(
                " ".join(("zpool",) + args),
                result.returncode,
                reason=f"Invalid pool size output: {value!r}"
            )
        return int(value)

    def get_host_memory(self) -> int:
        """Physical memory in bytes: hw.physmem on FreeBSD, `free -b` elsewhere."""
        try:
            return self._sysctl_physmem()
        except PoolQueryError as e:
            logger.debug(f"sysctl hw.physmem unavailable, falling back to free: {e}")
        return self._free_total()

    def _sysctl_physmem(self) -> int:
        args = ("-n", "hw.physmem")
        result = self._run("sysctl", *args)
        value = result.stdout.strip()
        if not value.isdigit():
            raise PoolQueryError(
                " ".join(("sysctl",) + args),
                result.returncode,
                reason=f"Invalid hw.physmem output: {value!r}"
            )
        return int(value)

    def _free_total(self) -> int:
        result = self._run("free", "-b")
        for line in result.stdout.splitlines():
            fields = line.split()
            if len(fields) >= 2 and fields[0] == "Mem:" and fields[1].isdigit():
                return int(fields[1])
        raise PoolQueryError("free -b", result.returncode, reason="No 'Mem:' row in output")


class FakePoolQuery(IPoolQuery):
    """Fixed reports and capacities, for tests and offline runs."""

    def __init__(self,
                 reports: Optional[Dict[str, str]] = None,
                 capacities: Optional[Dict[str, int]] = None,
                 host_memory: int = 0):
        self.reports = dict(reports or {})
        self.capacities = dict(capacities or {})
        self.host_memory = host_memory
        self.calls: List[str] = []

    def _missing(self, command: str, pool_name: str) -> PoolQueryError:
        return PoolQueryError(
            f"{command} {pool_name}",
            1,
            f"cannot open '{pool_name}': no such pool"
        )

    def get_status_report(self, pool_name: str) -> str:
        self.calls.append(f"status:{pool_name}")
        if pool_name not in self.reports:
            raise self._missing("zpool status -D", pool_name)
        return self.reports[pool_name]

    def list_pools(self) -> List[str]:
        self.calls.append("list")
        return sorted(set(self.reports) | set(self.capacities))

    def get_pool_capacity(self, pool_name: str) -> int:
        self.calls.append(f"capacity:{pool_name}")
        if pool_name not in self.capacities:
            raise self._missing("zpool list -Hp -o size", pool_name)
        return self.capacities[pool_name]

    def get_host_memory(self) -> int:
        self.calls.append("memory")
        return self.host_memory
