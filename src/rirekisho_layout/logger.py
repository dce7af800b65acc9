"""
Centralized logging configuration for the rirekisho layout solver.

Library modules only ask for named loggers through get_logger(); handlers are
attached once by the command line entry point via init_logger().
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

ROOT_LOGGER_NAME = "rirekisho_layout"


def setup_logging(
    log_dir: Path,
    log_level: str = "INFO",
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Set up logging configuration.
    
    Args:
        log_dir: Directory where log files will be stored
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to also log to a timestamped file
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))
    
    # Clear existing handlers
    logger.handlers.clear()
    
    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)8s] %(name)s:%(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    
    simple_formatter = logging.Formatter(
        fmt="[%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )
    
    # File handler - detailed logs
    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"rirekisho_layout_{timestamp}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
        
        # Store a pointer to the newest log file
        latest_log = log_dir / "latest.log"
        latest_log.write_text(str(log_file.name), encoding="utf-8")
    
    # Console handler goes to stderr so JSON on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)
    
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance.
    
    Args:
        name: Optional logger name (defaults to 'rirekisho_layout')
        
    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)


def init_logger(log_dir: Path, log_level: str = "INFO", log_to_file: bool = True) -> logging.Logger:
    """Attach handlers to the package logger; called once by the CLI."""
    return setup_logging(log_dir, log_level, log_to_file=log_to_file)
