import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .configuration import ClientConfiguration

LOGGER_NAME = "chess_client"


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs log records as JSON objects."""

    # Attributes every LogRecord carries; anything else came in via extra={}
    standard_attrs = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "exc_info",
        "exc_text",
        "stack_info",
        "getMessage",
    }

    def format(self, record):
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr_name, attr_value in record.__dict__.items():
            if attr_name not in self.standard_attrs and not attr_name.startswith("_"):
                log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Custom formatter for one-line console output of client events."""

    def format(self, record):
        message = record.getMessage()

        if record.levelname == "DEBUG":
            return None  # Raw responses stay out of the console

        if record.levelname in ["ERROR", "WARNING", "CRITICAL"]:
            return f"{record.levelname}: {message}"

        event_type = getattr(record, "event_type", None)

        if event_type == "position_fetched":
            position = getattr(record, "position", "?")
            return f"Position: {position}"

        elif event_type == "move_submitted":
            src = getattr(record, "src", "?")
            dst = getattr(record, "dst", "?")
            position = getattr(record, "position", "?")
            return f"Move {src} → {dst}: {position}"

        elif event_type == "move_rejected":
            src = getattr(record, "src", "?")
            dst = getattr(record, "dst", "?")
            error = getattr(record, "error", "")
            return f"Move {src} → {dst} rejected: {error}"

        return message


class FilteringStreamHandler(logging.StreamHandler):
    """Stream handler that filters out None messages from formatter."""

    def emit(self, record):
        try:
            msg = self.format(record)
            if msg is not None:  # Only emit if formatter didn't return None
                stream = self.stream
                stream.write(msg + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(
    log_level: Union[int, str] = logging.INFO, json_log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging for the chess client.

    Args:
        log_level: Logging level, as a number or a name like "DEBUG"
        json_log_file: Optional path for a JSON lines log file

    Returns:
        The configured "chess_client" logger
    """
    if isinstance(log_level, str):
        level_names = logging.getLevelNamesMapping()
        if log_level.upper() not in level_names:
            raise ValueError(f"Unknown log level: {log_level}")
        log_level = level_names[log_level.upper()]

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = FilteringStreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(console_handler)

    if json_log_file:
        json_handler = logging.FileHandler(json_log_file, mode="a", encoding="utf-8")
        json_handler.setLevel(log_level)
        json_handler.setFormatter(JSONFormatter())
        json_handler.is_json_handler = True  # Mark for identification
        logger.addHandler(json_handler)

    return logger


def setup_logging_from_config(config: "ClientConfiguration") -> logging.Logger:
    """Set up logging from the log_level and json_log_file of a ClientConfiguration."""
    return setup_logging(config.log_level, json_log_file=config.json_log_file)
