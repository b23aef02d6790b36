"""Tests for availability/utils/config.py and logging_config.py"""

import io
import json
import logging

import pytest
import yaml

from availability.engine import ConflictDetector
from availability.errors import OperationCancelled
from availability.utils.cancellation import CancellationToken, check_cancelled
from availability.utils.config import get_default_config, get_section, load_config, merge_config
from availability.utils.logging_config import get_logger, setup_logging


class TestLoadConfig:
    """Tests for load_config()."""

    def test_yaml_overrides_merge_over_defaults(self, tmp_path):
        """Only the given keys change; siblings keep their defaults."""
        path = tmp_path / "engine.yaml"
        path.write_text(yaml.safe_dump({"conflicts": {"buffer_minutes": 5}}))

        config = load_config(str(path))
        assert config["conflicts"]["buffer_minutes"] == 5
        assert config["conflicts"]["max_suggestions"] == 5
        assert config["time_blocks"] == get_default_config()["time_blocks"]

    def test_json_is_supported(self, tmp_path):
        """JSON files load the same way."""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"goals": {"horizon_days": 7}}))
        assert load_config(str(path))["goals"]["horizon_days"] == 7

    def test_empty_yaml_gives_defaults(self, tmp_path):
        """An empty file is an empty override."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_config(str(path)) == get_default_config()

    def test_missing_file(self, tmp_path):
        """Absent paths raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_unsupported_suffix(self, tmp_path):
        """Only YAML and JSON are read."""
        path = tmp_path / "engine.toml"
        path.write_text("x = 1")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_non_mapping_root(self, tmp_path):
        """A list at the root is rejected."""
        path = tmp_path / "engine.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(str(path))


class TestSections:
    """Tests for merge_config() and get_section()."""

    def test_merge_does_not_mutate(self):
        """The base mapping is left untouched."""
        base = get_default_config()
        merge_config(base, {"optimizer": {"preferences": {"workday_start": 6}}})
        assert base["optimizer"]["preferences"]["workday_start"] == 8

    def test_partial_section(self):
        """Missing keys fall back to defaults."""
        section = get_section({"find_time": {"slot_interval": 15}}, "find_time")
        assert section["slot_interval"] == 15
        assert section["end_hour"] == 17

    def test_component_reads_its_section(self, make_event):
        """The detector honours a configured buffer."""
        first = make_event("a", "09:00", "10:00")
        second = make_event("b", "10:20", "11:00")
        assert ConflictDetector().detect(first, [first, second]).has_conflicts is False
        strict = ConflictDetector({"conflicts": {"buffer_minutes": 30}})
        assert strict.detect(first, [first, second]).warning_count == 1


class TestCancellation:
    """Tests for CancellationToken."""

    def test_no_token_is_a_no_op(self):
        """Calls without a token never cancel."""
        check_cancelled(None, "noop")

    def test_expired_deadline(self):
        """A zero timeout is already expired."""
        token = CancellationToken(timeout_seconds=0)
        assert token.cancelled is True
        with pytest.raises(OperationCancelled):
            token.check("search")

    def test_fresh_token(self):
        """A new token without deadline is live."""
        assert CancellationToken().cancelled is False


class TestLogging:
    """Tests for setup_logging()."""

    def test_setup_sets_root_level(self):
        """The requested level lands on the root logger."""
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            setup_logging(level="DEBUG", json_output=True)
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            get_logger("availability.test").debug("logging_configured", check=True)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_format_from_environment(self, monkeypatch):
        """AVAILABILITY_LOG_FORMAT=json renders events as JSON lines."""
        monkeypatch.setenv("AVAILABILITY_LOG_FORMAT", "json")
        monkeypatch.setenv("AVAILABILITY_LOG_LEVEL", "warning")
        stream = io.StringIO()
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            setup_logging(stream=stream)
            assert root.level == logging.WARNING
            get_logger("availability.test.env").warning("slot_rejected", slot="09:00")
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        line = stream.getvalue().strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "slot_rejected"
        assert record["slot"] == "09:00"
        assert record["level"] == "warning"
