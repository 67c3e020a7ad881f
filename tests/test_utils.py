"""
Helper and logger tests.
"""
import logging

import pytest

from agroguard.utils.errors import AgroGuardError, ConfigurationError
from agroguard.utils.helpers import all_finite, deep_merge, is_finite_number, load_yaml
from agroguard.utils.logger import get_logger


class TestLoadYaml:

    def test_loads_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("weather:\n  timeout: 10\n", encoding="utf-8")

        assert load_yaml(str(path)) == {"weather": {"timeout": 10}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_yaml(str(path)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_yaml(str(tmp_path / "missing.yaml"))

    @pytest.mark.parametrize("content", ["- a\n- b\n", "key: [unclosed\n"])
    def test_rejects_invalid_content(self, tmp_path, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(AgroGuardError):
            load_yaml(str(path))


class TestDeepMerge:

    def test_nested_override(self):
        base = {"weather": {"timeout": 30, "max_retries": 3}, "monitor": {"enabled": True}}

        merged = deep_merge(base, {"weather": {"timeout": 5}})

        assert merged == {"weather": {"timeout": 5, "max_retries": 3}, "monitor": {"enabled": True}}
        assert base["weather"]["timeout"] == 30

    def test_scalar_replaces_mapping(self):
        assert deep_merge({"logging": {"level": "INFO"}}, {"logging": None}) == {"logging": None}


class TestFiniteChecks:

    @pytest.mark.parametrize("value, expected", [
        (1, True), (2.5, True), ("3.1", True),
        (float("nan"), False), (float("inf"), False), (None, False), ("abc", False),
    ])
    def test_is_finite_number(self, value, expected):
        assert is_finite_number(value) is expected

    def test_all_finite(self):
        assert all_finite([1.0, 2, 3.5])
        assert all_finite([])
        assert not all_finite([1.0, float("nan")])


class TestLogger:

    def test_configured_logger_writes_file(self, tmp_path):
        log_file = tmp_path / "logs" / "agroguard.log"
        logger = get_logger("agroguard_test_file", {"level": "DEBUG", "file": str(log_file), "console": False})

        logger.debug("scan started")
        for handler in logger.logger.handlers:
            handler.flush()

        assert logger.logger.level == logging.DEBUG
        assert "scan started" in log_file.read_text(encoding="utf-8")

    def test_reconfiguring_replaces_handlers(self):
        get_logger("agroguard_test_reconfig", {"console": True})
        logger = get_logger("agroguard_test_reconfig", {"console": True, "level": "warning"})

        assert len(logger.logger.handlers) == 1
        assert logger.logger.level == logging.WARNING

    def test_child_logger_uses_package_handlers(self):
        get_logger("agroguard_test_pkg", {"console": True})
        child = get_logger("agroguard_test_pkg.risk")

        assert child.logger.handlers == []
        assert child.logger.hasHandlers()
