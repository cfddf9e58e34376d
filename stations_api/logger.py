import logging
import json
import os

LOG_COLORS = {
    'DEBUG': "\033[94m",
    'INFO': "\033[92m",
    'WARNING': "\033[93m",
    'ERROR': "\033[91m",
    'CRITICAL': "\033[95m",
    'RESET': "\033[0m"
}

DEFAULT_NAME = "stations_logs"

class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)

class ColorFormatter(logging.Formatter):
    def format(self, record):
        log_color = LOG_COLORS.get(record.levelname, LOG_COLORS['RESET'])
        message = super().format(record)
        return f"{log_color}{message}{LOG_COLORS['RESET']}"


def parse_level(level) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


class CustomLogger:
    """Thin wrapper around a named stdlib logger.

    Handlers are attached once per logger name, so every module asking for the
    service logger shares the same console and file outputs.
    """

    def __init__(self, level=None, name=DEFAULT_NAME, log_dir=None):
        self.__logger = logging.getLogger(name)
        self.__logger.propagate = False
        if level is not None:
            self.__logger.setLevel(parse_level(level))

        if not self.__logger.handlers:
            if level is None:
                self.__logger.setLevel(logging.DEBUG)
            stream_handler = logging.StreamHandler()
            stream_handler.setFormatter(ColorFormatter("%(asctime)s - %(levelname)s - %(message)s"))
            self.__logger.addHandler(stream_handler)

        if log_dir is not None and not self._has_file_handler():
            os.makedirs(log_dir, exist_ok=True)
            file_path = os.path.join(log_dir, f"{name}.json.log")
            file_handler = logging.FileHandler(file_path)
            file_handler.setFormatter(JsonFormatter())
            self.__logger.addHandler(file_handler)

    def _has_file_handler(self) -> bool:
        return any(isinstance(h, logging.FileHandler) for h in self.__logger.handlers)

    @property
    def name(self) -> str:
        return self.__logger.name

    def debug(self, msg):
        self.__logger.debug(msg)

    def log(self, msg):
        self.__logger.info(msg)

    def warning(self, msg):
        self.__logger.warning(msg)

    def error(self, msg):
        self.__logger.error(msg)

    def exception(self, msg):
        self.__logger.exception(msg)

    def critical(self, msg):
        self.__logger.critical(msg)


def configure_logging(level="INFO", log_dir=None, name=DEFAULT_NAME) -> CustomLogger:
    """Apply the configured level and file output to the service logger."""
    return CustomLogger(level=level, name=name, log_dir=log_dir)
