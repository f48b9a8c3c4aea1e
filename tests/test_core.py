"""Tests for core module."""

import json

import pytest

from dorradar.core.config import CollectorConfig, Config
from dorradar.core.exceptions import (
    ConfigError,
    InvalidWindowError,
    ParseError,
    QueryFailedError,
    RadarError,
    TransportError,
    ValueFormatError,
)
from dorradar.topology.reshape import ReshapeRule


class TestConfig:
    """Test configuration management."""

    def test_default_config(self):
        """Test default configuration values."""
        config = Config()
        assert config.verbose is False
        assert config.collector.filter == ""
        assert config.collector.timeout == 20.0
        assert config.collector.shapes == ()
        assert config.collector.snapshot_propagation is False

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test loading a config file that does not exist."""
        config = Config.from_file(tmp_path / "absent.toml")
        assert config.collector.target == "http://localhost:9090/"

    def test_load_toml(self, tmp_path):
        """Test loading collector and shapes from TOML."""
        path = tmp_path / "config.toml"
        path.write_text(
            "[collector]\n"
            'target = "http://u:p@prom:9090/"\n'
            "filter = '{job=\"blackbox\"}'\n"
            "timeout = 5\n"
            "\n"
            "[[collector.shapes]]\n"
            'from = "10.0.0.1"\n'
            'to = "edge-1"\n'
            'attrs = ["dc1"]\n'
            "size = 25\n"
            "\n"
            "[[collector.shapes]]\n"
            'from = "10.0.0.2"\n'
        )

        collector = Config.from_file(path).collector
        assert collector.target == "http://u:p@prom:9090/"
        assert collector.filter == '{job="blackbox"}'
        assert collector.timeout == 5.0
        assert collector.shapes == (
            ReshapeRule(source="10.0.0.1", to="edge-1", attrs=("dc1",), size=25),
            ReshapeRule(source="10.0.0.2"),
        )

    def test_load_json(self, tmp_path):
        """Test loading from JSON."""
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "verbose": True,
                    "collector": {
                        "target": "http://prom/",
                        "snapshot_propagation": True,
                        "shapes": [{"from": "a", "to": "A"}],
                    },
                }
            )
        )

        config = Config.from_file(path)
        assert config.verbose is True
        assert config.collector.snapshot_propagation is True
        assert config.collector.shapes[0].to == "A"

    def test_timeout_capped(self):
        """Test that the collector timeout never exceeds 20 seconds."""
        assert CollectorConfig.from_dict({"timeout": 120}).timeout == 20.0
        assert CollectorConfig(timeout=90).timeout == 20.0

    def test_invalid_timeout(self):
        """Test rejecting non-positive timeouts."""
        with pytest.raises(ConfigError):
            CollectorConfig.from_dict({"timeout": 0})
        with pytest.raises(ConfigError):
            CollectorConfig.from_dict({"timeout": "soon"})

    def test_flags_must_be_booleans(self, tmp_path):
        """Test that string flags such as "false" are rejected, not coerced."""
        with pytest.raises(ConfigError):
            CollectorConfig.from_dict({"snapshot_propagation": "false"})

        path = tmp_path / "config.json"
        path.write_text(json.dumps({"verbose": 1}))
        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_invalid_toml(self, tmp_path):
        """Test that malformed files raise ConfigError."""
        path = tmp_path / "broken.toml"
        path.write_text("[collector\n")
        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_rule_requires_from(self):
        """Test that a reshape rule without 'from' is rejected."""
        with pytest.raises(ConfigError):
            CollectorConfig.from_dict({"shapes": [{"to": "A"}]})

    def test_save_roundtrip(self, tmp_path):
        """Test saving and reloading a configuration."""
        config = Config(
            collector=CollectorConfig(
                target="http://prom/",
                shapes=(ReshapeRule(source="a", to="A", attrs=("x",), size=7),),
            )
        )
        path = tmp_path / "out" / "config.json"
        config.save(path)

        loaded = Config.from_file(path)
        assert loaded.collector.target == "http://prom/"
        assert loaded.collector.shapes == config.collector.shapes


class TestExceptions:
    """Test custom exceptions."""

    def test_base_exception(self):
        """Test base RadarError."""
        err = RadarError("Test error", "Details")
        assert str(err) == "Test error: Details"
        assert str(RadarError("Plain")) == "Plain"

    def test_invalid_window(self):
        """Test InvalidWindowError is a client error."""
        err = InvalidWindowError(0)
        assert "window out of range" in str(err)
        assert err.window == 0
        assert err.status_code == 400

    def test_server_errors(self):
        """Test the remaining errors map to server errors."""
        for err in (
            TransportError("down"),
            ParseError("garbage"),
            QueryFailedError("error"),
            ValueFormatError("abc", 0),
        ):
            assert isinstance(err, RadarError)
            assert err.status_code == 500

    def test_query_failed(self):
        """Test QueryFailedError carries the status."""
        err = QueryFailedError("error", "bad_data: parse error")
        assert err.status == "error"
        assert str(err) == "query failed: error: bad_data: parse error"
