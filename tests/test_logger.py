# ABOUTME: Tests for chess client logging setup and formatters
# ABOUTME: Checks JSON log lines carry extra fields and console output hides debug records

import json
import logging

import pytest

from chess_client.configuration import ClientConfiguration
from chess_client.logger import (
    HumanReadableFormatter,
    JSONFormatter,
    setup_logging,
    setup_logging_from_config,
)


def make_record(level=logging.INFO, msg="hello", **extra):
    record = logging.LogRecord("chess_client.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_includes_extra_fields(self):
        record = make_record(event_type="move_submitted", src="e2", dst="e4")
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["message"] == "hello"
        assert data["event_type"] == "move_submitted"
        assert data["src"] == "e2"
        assert "lineno" not in data


class TestHumanReadableFormatter:
    def test_hides_debug(self):
        assert HumanReadableFormatter().format(make_record(level=logging.DEBUG)) is None

    def test_prefixes_errors(self):
        text = HumanReadableFormatter().format(make_record(level=logging.ERROR, msg="boom"))
        assert text == "ERROR: boom"

    def test_formats_rejection(self):
        record = make_record(event_type="move_rejected", src="e2", dst="e5", error="illegal move")
        text = HumanReadableFormatter().format(record)
        assert "e2" in text and "e5" in text and "illegal move" in text

    def test_formats_position_fetched(self):
        record = make_record(event_type="position_fetched", position="8/8/8/8/8/8/8/8 w - - 0 1")
        text = HumanReadableFormatter().format(record)
        assert text == "Position: 8/8/8/8/8/8/8/8 w - - 0 1"

    def test_formats_move_submitted(self):
        record = make_record(event_type="move_submitted", src="e2", dst="e4", position="fen")
        text = HumanReadableFormatter().format(record)
        assert text.startswith("Move e2")
        assert "e4" in text and text.endswith(": fen")

    def test_plain_info_passes_through(self):
        assert HumanReadableFormatter().format(make_record(msg="plain")) == "plain"


def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "client.jsonl"
    logger = setup_logging("DEBUG", json_log_file=str(log_file))
    try:
        logger.getChild("game_client").info(
            "Fetched position", extra={"event_type": "position_fetched"}
        )
        for handler in logger.handlers:
            handler.flush()

        lines = log_file.read_text().strip().splitlines()
        assert json.loads(lines[-1])["event_type"] == "position_fetched"
        assert logger.level == logging.DEBUG
    finally:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)


def test_setup_logging_rejects_unknown_level_name():
    with pytest.raises(ValueError, match="Unknown log level: LOUD"):
        setup_logging("LOUD")


def test_setup_logging_from_config(tmp_path):
    log_file = tmp_path / "configured.jsonl"
    config = ClientConfiguration(log_level="warning", json_log_file=str(log_file))
    logger = setup_logging_from_config(config)
    try:
        assert logger.level == logging.WARNING
        json_handlers = [h for h in logger.handlers if getattr(h, "is_json_handler", False)]
        assert len(json_handlers) == 1
        assert json_handlers[0].baseFilename == str(log_file)
    finally:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
