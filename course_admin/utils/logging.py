import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from course_admin.config.settings import settings
from course_admin.utils.context import get_request_id

# Stdlib loggers that would otherwise print every HTTP exchange on their own
INTERCEPTED_LOGGERS = ["httpx", "httpcore"]


class InterceptHandler(logging.Handler):
    """Route stdlib log records into loguru, tagged with the current request id."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(request_id=get_request_id() or "app").opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


class CustomizeLogger:
    @classmethod
    def make_logger(
        cls,
        config_path: Path,
        environment: str = "logger",
        level_override: Optional[str] = None,
    ):
        config = cls.load_logging_config(config_path)
        section = dict(config.get(environment, config.get("logger")))
        if level_override:
            section["level"] = level_override
        return cls.customize_logging(section)

    @classmethod
    def customize_logging(cls, section: Dict[str, Any]):
        level = section.get("level", "info").upper()
        enqueue = section.get("enqueue", True)

        logger.remove()
        logger.configure(extra={"request_id": "app"})

        # Console logger with colors
        logger.add(
            sys.stdout,
            enqueue=enqueue,
            backtrace=True,
            level=level,
            format=section.get("console_format"),
            colorize=True,
        )

        # File logger without colors; the test profile has no log_dir
        log_dir = section.get("log_dir")
        if log_dir:
            filename = f"{date.today().strftime('%Y-%m-%d')}-{section.get('filename')}"
            file_options: Dict[str, Any] = {
                "rotation": section.get("rotation"),
                "retention": section.get("retention"),
                "enqueue": enqueue,
                "backtrace": True,
                "level": level,
                "colorize": False,
            }
            if section.get("use_json_logs") and section.get("file_format") == "json":
                file_options["serialize"] = True
            else:
                file_options["format"] = section.get("file_format")
            logger.add(str(Path(log_dir) / filename), **file_options)

        cls._setup_intercept_handlers()
        return logger

    @staticmethod
    def _setup_intercept_handlers():
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

        for log_name in INTERCEPTED_LOGGERS:
            _logger = logging.getLogger(log_name)
            _logger.handlers = [InterceptHandler()]
            _logger.propagate = False

    @staticmethod
    def load_logging_config(config_path: Path):
        with open(config_path) as config_file:
            return json.load(config_file)


# Initialize logger
custom_logger = CustomizeLogger.make_logger(
    settings.LOG_CONFIG_PATH,
    settings.ENVIRONMENT,
    level_override=settings.LOG_LEVEL or None,
)


def get_logger():
    """Get the custom logger bound to the id of the API call in flight, if any."""
    return custom_logger.bind(request_id=get_request_id() or "app")
