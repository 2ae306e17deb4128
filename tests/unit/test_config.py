import pytest

from ddtstat.config import DdtStatConfig, load_dotenv_if_exists, get_config
from ddtstat.infrastructure.command_executor import DEFAULT_SAFE_PATH


@pytest.fixture
def clean_env(monkeypatch):
    for key in ["LOG_LEVEL", "LOG_FORMAT", "COMMAND_TIMEOUT", "SAFE_PATH", "ZPOOL_BINARY"]:
        for name in (key, f"DDTSTAT_{key}"):
            # setenv first so values loaded from .env files are undone too
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
    return monkeypatch


class TestDdtStatConfig:
    """Test suite for environment configuration."""

    def test_defaults(self, clean_env):
        config = DdtStatConfig.from_environment()

        assert config.log.level == "WARNING"
        assert config.log.format == "text"
        assert config.executor.command_timeout == 30
        assert config.executor.safe_path == DEFAULT_SAFE_PATH
        assert config.executor.zpool_binary == "zpool"
        assert config.warnings == []

    def test_prefixed_key_wins(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "ERROR")
        clean_env.setenv("DDTSTAT_LOG_LEVEL", "debug")

        assert DdtStatConfig.from_environment().log.level == "DEBUG"

    def test_level_aliases(self, clean_env):
        clean_env.setenv("DDTSTAT_LOG_LEVEL", "warn")
        assert DdtStatConfig.from_environment().log.level == "WARNING"

        clean_env.setenv("DDTSTAT_LOG_LEVEL", "fatal")
        assert DdtStatConfig.from_environment().log.level == "CRITICAL"

    def test_invalid_values_fall_back(self, clean_env):
        clean_env.setenv("DDTSTAT_LOG_LEVEL", "LOUD")
        clean_env.setenv("DDTSTAT_LOG_FORMAT", "xml")
        clean_env.setenv("DDTSTAT_COMMAND_TIMEOUT", "soon")

        config = DdtStatConfig.from_environment()

        assert config.log.level == "WARNING"
        assert config.log.format == "text"
        assert config.executor.command_timeout == 30
        assert len(config.warnings) == 3

    def test_non_positive_timeout(self, clean_env):
        clean_env.setenv("DDTSTAT_COMMAND_TIMEOUT", "0")

        config = DdtStatConfig.from_environment()

        assert config.executor.command_timeout == 30
        assert config.warnings

    def test_executor_overrides(self, clean_env):
        clean_env.setenv("DDTSTAT_COMMAND_TIMEOUT", "5")
        clean_env.setenv("DDTSTAT_SAFE_PATH", "/sbin")
        clean_env.setenv("DDTSTAT_ZPOOL_BINARY", "/sbin/zpool")

        summary = DdtStatConfig.from_environment().get_summary()

        assert summary["command_timeout"] == 5
        assert summary["safe_path"] == "/sbin"
        assert summary["zpool_binary"] == "/sbin/zpool"


class TestDotenv:
    """Test suite for .env loading."""

    def test_missing_file(self, tmp_path):
        assert load_dotenv_if_exists(tmp_path / ".env") is False

    def test_loads_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("DDTSTAT_LOG_FORMAT=json\n")

        assert load_dotenv_if_exists(env_file) is True
        assert DdtStatConfig.from_environment().log.format == "json"

    def test_environment_beats_dotenv(self, tmp_path, clean_env):
        clean_env.chdir(tmp_path)
        (tmp_path / ".env").write_text("DDTSTAT_LOG_LEVEL=DEBUG\n")
        clean_env.setenv("DDTSTAT_LOG_LEVEL", "ERROR")

        assert get_config().log.level == "ERROR"
