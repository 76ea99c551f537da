"""
Unified Logging Utility for the zpool agent

Provides a centralized logging system that:
- Writes prefix-tagged lines to stderr, which the orchestrator captures
- Filters DEBUG-level messages based on --debug / settings
- Optionally mirrors every emitted line to the local syslog

Usage:
    from zfs_pool_agent.debug_logging import log, log_debug, set_debug_mode

Modules call:
    log("PROBE", "message")                    # INFO level (always logged)
    log("PROBE", "verbose details", "DEBUG")   # Only logged with --debug
    log("LIFECYCLE", "export failed", "ERROR")
"""

import logging
import logging.handlers
import sys
from typing import Optional

# Global state
_debug_enabled = False
_syslog_logger: Optional[logging.Logger] = None

SYSLOG_IDENT = "zpool-agent"

# Map our level names onto stdlib logging levels for the syslog mirror
_SYSLOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "IMPORTANT": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def set_debug_mode(enabled: bool) -> None:
    """Enable or disable debug logging globally."""
    global _debug_enabled
    _debug_enabled = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return _debug_enabled


def enable_syslog(address: str = "/dev/log") -> bool:
    """
    Mirror log lines to syslog via the standard logging library.

    Returns False (and keeps logging to stderr only) if the syslog socket
    cannot be opened.
    """
    global _syslog_logger
    logger = logging.getLogger(SYSLOG_IDENT)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    try:
        handler = logging.handlers.SysLogHandler(address=address)
    except OSError as e:
        print(f"LOGGING [WARNING]: Could not open syslog at {address}: {e}", file=sys.stderr)
        return False
    handler.setFormatter(logging.Formatter(f"{SYSLOG_IDENT}: %(message)s"))
    logger.handlers = [handler]
    _syslog_logger = logger
    return True


def disable_syslog() -> None:
    """Stop mirroring to syslog and release the handler."""
    global _syslog_logger
    if _syslog_logger is not None:
        for handler in list(_syslog_logger.handlers):
            _syslog_logger.removeHandler(handler)
            handler.close()
    _syslog_logger = None


def log(prefix: str, message: str, level: str = "INFO") -> None:
    """
    Log a message with the specified level.

    Args:
        prefix: Module prefix (e.g., "PROBE", "LIFECYCLE", "AGENT")
        message: The log message
        level: Log level - DEBUG, INFO, WARNING, IMPORTANT, ERROR, CRITICAL
               DEBUG messages are only shown when debug mode is enabled.
    """
    if level == "DEBUG" and not _debug_enabled:
        return

    txt = f"{prefix} [{level}]: {message}" if prefix else f"[{level}]: {message}"
    print(txt, file=sys.stderr)

    if _syslog_logger is not None:
        _syslog_logger.log(_SYSLOG_LEVELS.get(level, logging.INFO), txt)


# Convenience aliases for cleaner code
def log_debug(prefix: str, message: str) -> None:
    """Shortcut for DEBUG level logging."""
    log(prefix, message, "DEBUG")

def log_info(prefix: str, message: str) -> None:
    """Shortcut for INFO level logging."""
    log(prefix, message, "INFO")

def log_error(prefix: str, message: str) -> None:
    """Shortcut for ERROR level logging."""
    log(prefix, message, "ERROR")

def log_warning(prefix: str, message: str) -> None:
    """Shortcut for WARNING level logging."""
    log(prefix, message, "WARNING")

def log_critical(prefix: str, message: str) -> None:
    """Shortcut for CRITICAL level logging."""
    log(prefix, message, "CRITICAL")
