"""
Tests for Configuration and Logging
"""

import logging

import pytest

from rustnarrator.configs import (
    DEFAULT_CONFIG,
    MAX_FILE_SIZE,
    get_config_path,
    get_data_path,
    get_full_config,
    get_logger,
    load_yaml_config,
    setup_logging,
)
from rustnarrator.exceptions import ConfigurationError, NarratorError


class TestPaths:
    """Test data path resolution."""

    def test_data_path_from_env(self, isolated_config):
        assert get_data_path() == isolated_config
        assert get_config_path() == isolated_config / "config.yaml"


class TestYamlConfig:
    """Test config.yaml loading."""

    def test_missing_file_is_empty(self):
        assert load_yaml_config() == {}

    def test_load_mapping(self, write_config):
        write_config({"debug": True, "source": {"max_file_size": 2048}})
        assert load_yaml_config() == {"debug": True, "source": {"max_file_size": 2048}}

    def test_empty_file(self, isolated_config):
        isolated_config.mkdir(parents=True)
        get_config_path().write_text("# nothing here\n")
        assert load_yaml_config() == {}

    def test_non_mapping_raises(self, isolated_config):
        isolated_config.mkdir(parents=True)
        get_config_path().write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            load_yaml_config()

    def test_invalid_yaml_raises(self, isolated_config):
        isolated_config.mkdir(parents=True)
        get_config_path().write_text("debug: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_yaml_config()


class TestFullConfig:
    """Test merging defaults, YAML and environment."""

    def test_defaults(self):
        config = get_full_config()
        assert config == DEFAULT_CONFIG
        assert config["max_file_size"] == MAX_FILE_SIZE

    def test_yaml_overrides_defaults(self, write_config):
        write_config({
            "debug": True,
            "log_file": "/tmp/narrate.log",
            "source": {"encoding": "latin-1", "max_file_size": 4096},
        })
        config = get_full_config()
        assert config["debug"] is True
        assert config["log_file"] == "/tmp/narrate.log"
        assert config["encoding"] == "latin-1"
        assert config["max_file_size"] == 4096

    def test_env_overrides_yaml(self, write_config, monkeypatch):
        write_config({"debug": True, "source": {"max_file_size": 4096}})
        monkeypatch.setenv("RUSTNARRATOR_DEBUG", "false")
        monkeypatch.setenv("RUSTNARRATOR_MAX_FILE_SIZE", "100")
        monkeypatch.setenv("RUSTNARRATOR_ENCODING", "utf-16")
        config = get_full_config()
        assert config["debug"] is False
        assert config["max_file_size"] == 100
        assert config["encoding"] == "utf-16"

    def test_bad_size(self, monkeypatch):
        monkeypatch.setenv("RUSTNARRATOR_MAX_FILE_SIZE", "-1")
        with pytest.raises(ConfigurationError):
            get_full_config()

    def test_bad_encoding(self, write_config):
        write_config({"source": {"encoding": "no-such-codec"}})
        with pytest.raises(ConfigurationError) as exc_info:
            get_full_config()
        assert exc_info.value.details["value"] == "no-such-codec"

    def test_bad_source_section(self, write_config):
        write_config({"source": "utf-8"})
        with pytest.raises(ConfigurationError):
            get_full_config()


class TestLogging:
    """Test logging setup."""

    def teardown_method(self):
        logger = logging.getLogger("rustnarrator")
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    def test_component_logger_name(self):
        assert get_logger("parser").name == "rustnarrator.parser"

    def test_default_level(self):
        logger = setup_logging(debug=False)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING

    def test_debug_level(self):
        logger = setup_logging(debug=True)
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.DEBUG

    def test_file_handler(self, temp_dir):
        log_file = temp_dir / "sub" / "out.log"
        logger = setup_logging(debug=True, log_file=str(log_file))
        assert len(logger.handlers) == 2
        get_logger("test").debug("hello from test")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from test" in log_file.read_text()

    def test_unopenable_log_file(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("")
        previous = setup_logging(debug=False).handlers[0]

        with pytest.raises(ConfigurationError) as exc_info:
            setup_logging(debug=True, log_file=str(blocker / "sub" / "out.log"))
        assert "Cannot open log file" in exc_info.value.message
        assert logging.getLogger("rustnarrator").handlers == [previous]

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging(debug=False)
        logger = setup_logging(debug=False)
        assert len(logger.handlers) == 1


class TestExceptions:
    """Test the exception hierarchy."""

    def test_details_in_message(self):
        error = ConfigurationError("bad value", {"key": "x"})
        assert isinstance(error, NarratorError)
        assert str(error) == "bad value ({'key': 'x'})"

    def test_plain_message(self):
        assert str(NarratorError("oops")) == "oops"
