"""Logging configuration for waiting.

Console records go to stderr so they never land inside a progress line
redrawn on stdout. Level tags are colored only when that stream is a
terminal. File logging is opt-in through the 'logging' section of
config.yaml.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_FILE = "~/.waiting/logs/debug.log"

RESET = "\033[0m"

# levelno -> (SGR color, tag)
LEVEL_STYLES = {
    logging.DEBUG: ("\033[0;36m", "[DEBUG]"),
    logging.INFO: ("\033[0;32m", "[INFO]"),
    logging.WARNING: ("\033[1;33m", "[WARN]"),
    logging.ERROR: ("\033[0;31m", "[ERROR]"),
    logging.CRITICAL: ("\033[1;31m", "[CRITICAL]"),
}

# Sentinel to track whether file logging has already been configured
_file_logging_configured = False


def stream_is_tty(stream):
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream
        return False


class ColorFormatter(logging.Formatter):
    """Prefix each record with its level tag, colored when ``use_color`` is set."""

    def __init__(self, use_color=True):
        super().__init__()
        self.use_color = use_color

    def format(self, record):
        color, tag = LEVEL_STYLES.get(record.levelno, ("", "[LOG]"))
        if self.use_color and color:
            tag = f"{color}{tag}{RESET}"
        return f"{tag} {record.getMessage()}"


def setup_logging(name, verbose=False, quiet=False, config=None, stream=None):
    """Configure a logger that writes to stderr.

    Progress lines are drawn on stdout, so log output goes to stderr and
    never mixes into the redrawn line.

    Args:
        name: Logger name (usually "waiting" so every module logger propagates to it)
        verbose: If True, show DEBUG messages
        quiet: If True, show only WARNING and above
        config: Optional config dict; its 'logging' section may enable a
                rotating file handler via configure_file_logging()
        stream: Console stream, defaults to sys.stderr

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    stream = stream if stream is not None else sys.stderr

    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(ColorFormatter(use_color=stream_is_tty(stream)))
        logger.addHandler(handler)

    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.INFO)

    if config is not None:
        configure_file_logging(config)

    return logger


def configure_file_logging(config):
    """Attach a RotatingFileHandler to the root logger if config enables it.

    Reads the 'logging' section of the config:

        logging:
          enabled: true
          level: debug
          file: ~/.waiting/logs/debug.log
          max_size_mb: 5
          backup_count: 3

    Returns:
        The file handler if logging was enabled, None otherwise.
    """
    global _file_logging_configured

    if not config:
        return None

    log_config = config.get("logging")
    if not log_config or not log_config.get("enabled", False):
        return None

    if _file_logging_configured:
        return None

    level_str = str(log_config.get("level", "debug")).upper()
    level = getattr(logging, level_str, logging.DEBUG)
    log_file = os.path.expanduser(log_config.get("file", DEFAULT_LOG_FILE))
    max_bytes = log_config.get("max_size_mb", 5) * 1024 * 1024
    backup_count = log_config.get("backup_count", 3)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    # Plain-text format, no ANSI codes in files
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)

    _file_logging_configured = True
    logging.getLogger("waiting").debug(
        "File logging enabled: %s (level=%s)", log_file, level_str
    )

    return handler
