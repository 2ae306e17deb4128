import subprocess
from unittest.mock import patch, Mock

import pytest

from ddtstat.infrastructure.command_executor import CommandExecutor, DEFAULT_SAFE_PATH


class TestCommandExecutor:
    """Test suite for CommandExecutor."""

    @pytest.fixture
    def executor(self):
        return CommandExecutor(timeout=5)

    def test_disallowed_command_not_run(self, executor):
        with patch("ddtstat.infrastructure.command_executor.subprocess.run") as mock_run:
            result = executor.execute("rm", "-rf", "/")

        assert not result.success
        assert "not allowed" in result.stderr
        mock_run.assert_not_called()

    def test_sysctl_allowed(self, executor):
        completed = Mock(returncode=0, stdout="34359738368\n", stderr="")
        with patch("ddtstat.infrastructure.command_executor.subprocess.run",
                   return_value=completed) as mock_run:
            result = executor.execute("sysctl", "-n", "hw.physmem")

        assert result.success
        assert mock_run.call_args[0][0] == ["sysctl", "-n", "hw.physmem"]

    def test_dangerous_argument_not_run(self, executor):
        with patch("ddtstat.infrastructure.command_executor.subprocess.run") as mock_run:
            result = executor.execute("zpool", "status", "-D", "tank; reboot")

        assert not result.success
        mock_run.assert_not_called()

    def test_sanitized_environment(self, executor):
        completed = Mock(returncode=0, stdout="out\n", stderr="")
        with patch("ddtstat.infrastructure.command_executor.subprocess.run",
                   return_value=completed) as mock_run:
            result = executor.execute("zpool", "list", "-H", "-o", "name")

        assert result.success
        assert result.stdout == "out\n"
        args, kwargs = mock_run.call_args
        assert args[0] == ["zpool", "list", "-H", "-o", "name"]
        assert kwargs["env"]["PATH"] == DEFAULT_SAFE_PATH
        assert kwargs["env"]["LC_ALL"] == "C"
        assert kwargs["timeout"] == 5

    def test_custom_zpool_binary(self):
        executor = CommandExecutor(zpool_binary="/opt/zfs/bin/zpool")
        completed = Mock(returncode=0, stdout="", stderr="")
        with patch("ddtstat.infrastructure.command_executor.subprocess.run",
                   return_value=completed) as mock_run:
            executor.execute("zpool", "list")

        assert mock_run.call_args[0][0][0] == "/opt/zfs/bin/zpool"

    def test_nonzero_exit(self, executor):
        completed = Mock(returncode=1, stdout="", stderr="cannot open 'x': no such pool\n")
        with patch("ddtstat.infrastructure.command_executor.subprocess.run", return_value=completed):
            result = executor.execute("zpool", "status", "-D", "x")

        assert not result.success
        assert result.returncode == 1
        assert result.stderr == "cannot open 'x': no such pool"

    def test_timeout(self, executor):
        with patch("ddtstat.infrastructure.command_executor.subprocess.run",
                   side_effect=subprocess.TimeoutExpired(cmd="zpool", timeout=5)):
            result = executor.execute("zpool", "status", "-D", "tank")

        assert not result.success
        assert result.returncode == 124

    def test_missing_binary(self, executor):
        with patch("ddtstat.infrastructure.command_executor.subprocess.run",
                   side_effect=FileNotFoundError("zpool")):
            result = executor.execute("zpool", "list")

        assert not result.success
        assert result.returncode == 127

    def test_is_available_uses_safe_path(self, executor):
        with patch("ddtstat.infrastructure.command_executor.shutil.which",
                   return_value="/usr/sbin/zpool") as mock_which:
            assert executor.is_available("zpool")

        mock_which.assert_called_once_with("zpool", path=DEFAULT_SAFE_PATH)

    def test_is_available_missing(self):
        executor = CommandExecutor(safe_path="/nonexistent-ddtstat-path")
        assert not executor.is_available("zpool")
