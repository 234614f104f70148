"""Logging configuration for overall"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers that flood DEBUG output (GitPython logs every git call)
NOISY_LOGGERS = ('git',)


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name when stderr is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color is None or not sys.stderr.isatty():
            return super().format(record)
        # Colour a copy so file handlers sharing the record stay plain
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def get_log_dir() -> Path:
    """Directory holding the debug log file."""
    return Path.home() / '.overall'


def _level_for(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DEBUG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        handler.setFormatter(ColoredFormatter(fmt=DEBUG_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(ColoredFormatter(fmt='[%(name)s] %(message)s'))
    return handler


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages with timestamps and also
            write them to a log file
        log_file: Debug log location (default: ~/.overall/overall.log)
    """
    level = _level_for(verbose, debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        path = Path(log_file) if log_file else get_log_dir() / 'overall.log'
        root_logger.addHandler(_file_handler(path))

    root_logger.addHandler(_console_handler(level, debug))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # overall.services.report_service -> report_service
    for prefix in ('overall.', 'services.'):
        if name.startswith(prefix):
            name = name[len(prefix):]

    return logging.getLogger(name)
