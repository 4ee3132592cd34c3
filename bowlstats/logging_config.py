"""Logging configuration for bowlstats."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
SIMPLE_FORMAT = '%(levelname)s: %(message)s'


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level (quiet wins)."""
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    run_name: str = 'run',
) -> logging.Logger:
    """
    Configure the bowlstats logger.

    Engine modules log to children of 'bowlstats', so one call covers the
    whole package. The file gets the detailed format; the console gets
    the short one on stderr, leaving stdout for reports.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Whether to log to file (default: True)
        log_to_console: Whether to log to console (default: True)
        run_name: Part of the log file name, e.g. the league id

    Returns:
        Configured logger instance

    Example:
        from bowlstats.logging_config import setup_logging
        logger = setup_logging(log_to_file=False)
        logger.info("Decorating league")
    """
    logger = logging.getLogger('bowlstats')
    logger.setLevel(level)
    logger.handlers = []

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'bowlstats_{run_name}_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = '') -> logging.Logger:
    """
    Get a child of the bowlstats logger, e.g. get_logger('cli') -> 'bowlstats.cli'.

    Works before setup_logging() is called; records then go to the root logger.
    """
    return logging.getLogger(f'bowlstats.{name}' if name else 'bowlstats')
