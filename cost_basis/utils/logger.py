"""
================================================================================
LOGGER - Unified Logging Configuration
================================================================================

Centralized logging infrastructure for all application contexts.

Logging Contexts:
    - 'cli' - Command-line runs
    - 'test' - Unit and integration tests (console only)
    - 'imported' - Library/module imports (console only)

Log Destinations:
    1. File Logs - outputs/logs/{timestamp}.{context}.log
    2. Console Output - stdout
    3. Rotating Backups - 5MB max per file, 5 backup files

Log Format:
    {timestamp} {level} [{context}]: {message}
    Example: 2025-12-16 10:30:45 WARNING [cli]: No matching withdrawal for deposit ...

Usage:
    from cost_basis.utils.logger import set_run_context, logger

    set_run_context('cli')
    logger.info('Classifying transactions')

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

import sys
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler

logger = logging.getLogger("cost_basis")
logger.setLevel(logging.INFO)

# Global run context state
_RUN_CONTEXT = 'imported'

# Contexts that never write log files
_CONSOLE_ONLY_CONTEXTS = {'imported', 'test'}

LOG_FORMAT = "%(asctime)s %(levelname)s [%(run_context)s]: %(message)s"


class RunContextFilter(logging.Filter):
    """
    Logging filter that adds run context to all log records
    Allows distinguishing between different execution contexts
    """

    def filter(self, record):
        record.run_context = _RUN_CONTEXT
        return True


def get_run_context() -> str:
    return _RUN_CONTEXT


def set_run_context(context: str):
    """
    Set the execution context for logging

    Args:
        context: String identifier ('cli', 'test', 'imported')
    """
    global _RUN_CONTEXT
    _RUN_CONTEXT = context

    # Clear existing handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if context not in _CONSOLE_ONLY_CONTEXTS:
        try:
            from cost_basis.utils.constants import LOG_DIR

            LOG_DIR.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            log_file = LOG_DIR / f"{timestamp}.{context}.log"

            file_handler = RotatingFileHandler(
                str(log_file),
                maxBytes=5_000_000,  # 5MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            file_handler.addFilter(RunContextFilter())
            logger.addHandler(file_handler)
        except OSError as e:
            # Console logging still works without a log directory
            print(f"Could not open log file: {e}", file=sys.stderr)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler.addFilter(RunContextFilter())
    logger.addHandler(console_handler)


# Initialize with default context
set_run_context(_RUN_CONTEXT)
