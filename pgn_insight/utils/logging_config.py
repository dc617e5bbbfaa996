# pgn_insight/pgn_insight/utils/logging_config.py
"""
Logging configuration for the PGN Insight application.

The analysis engine only creates named loggers; the CLI decides where
records go by calling `setup_logging` once at start-up. Single-game runs log
plainly to stderr, keeping stdout free for the JSON record. Batch runs pass
a `TqdmLoggingHandler` so log lines are printed above the progress bar
instead of tearing through it.
"""
import logging
import sys
from typing import Iterable, List, Optional

from tqdm import tqdm

from pgn_insight.config import settings


class TqdmLoggingHandler(logging.Handler):
    """Writes log records through `tqdm.write`, which redraws any active progress bar."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def setup_logging(
    log_level_str: Optional[str] = None,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    extra_handlers: Optional[Iterable[logging.Handler]] = None,
) -> None:
    """
    Configures application-wide logging on the root logger.

    Args:
        log_level_str: Logging level name. Defaults to `settings.DEFAULT_LOG_LEVEL`.
        log_file: Path of the log file. Defaults to `settings.DEFAULT_LOG_FILENAME`.
        log_to_console: Whether to log to stderr.
        log_to_file: Whether to log to `log_file`.
        extra_handlers: Console handlers to use instead of the plain stderr
                        handler, such as a TqdmLoggingHandler for batch runs.
                        Handlers without a formatter get the console format.
    """
    level_name = (log_level_str or settings.DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logging.warning(f"Invalid log level string: '{level_name}'. Defaulting to 'INFO'.")
        level, level_name = logging.INFO, "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Drop handlers from any earlier call so records are not duplicated.
    root_logger.handlers.clear()

    handlers: List[logging.Handler] = []
    if log_to_console:
        handlers.extend(extra_handlers or [logging.StreamHandler(sys.stderr)])
        for handler in handlers:
            if handler.formatter is None:
                handler.setFormatter(logging.Formatter(settings.CONSOLE_LOG_FORMAT))

    effective_log_file = log_file or settings.DEFAULT_LOG_FILENAME
    if log_to_file:
        file_handler = logging.FileHandler(effective_log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(settings.FILE_LOG_FORMAT))
        handlers.append(file_handler)

    if not handlers:
        root_logger.addHandler(logging.NullHandler())
        return
    for handler in handlers:
        root_logger.addHandler(handler)

    setup_logger = logging.getLogger(settings.APP_NAME + ".Logging")
    setup_logger.debug(f"Logging initialized. Level: {level_name}.")
    if log_to_file:
        setup_logger.debug(f"Logging to file enabled: '{effective_log_file}'.")
