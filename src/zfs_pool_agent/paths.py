# Path configuration module for zpool-agent
# This module centralizes all path logic for the agent
#
# The agent runs as root under the orchestrator, so there is no per-user
# resolution here: settings live under /etc and the command log under the
# system runtime directory.

import os
import platform
import shutil
from pathlib import Path

# System configuration paths
SYSTEM_CONFIG_DIR = Path("/etc/zpool-agent")
SYSTEM_CONFIG_FILE_PATH = str(SYSTEM_CONFIG_DIR / "config.json")
CONFIG_PATH_ENV = "ZPOOL_AGENT_CONFIG"  # Overrides SYSTEM_CONFIG_FILE_PATH

# Log file paths
COMMAND_LOG_FILE_NAME = "zpool-agent-commands.log"
RUNTIME_DIR_CANDIDATES = ["/run", "/var/run"]  # linux-only: /run is systemd-style
RUNTIME_FALLBACK_DIR = "/tmp"


def get_config_file_path() -> str:
    """Return the settings file path, honouring the environment override."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return override
    return SYSTEM_CONFIG_FILE_PATH


def get_runtime_dir() -> str:
    """Return the first existing system runtime directory, falling back to /tmp."""
    for candidate in RUNTIME_DIR_CANDIDATES:
        if os.path.isdir(candidate):
            return candidate
    return RUNTIME_FALLBACK_DIR


def get_command_log_path(log_name: str | None = None) -> str:
    """Gets the path for the command audit log within the runtime directory."""
    if log_name is None:
        log_name = COMMAND_LOG_FILE_NAME
    return os.path.join(get_runtime_dir(), log_name)


def find_executable(name: str, additional_paths: list[str] | None = None) -> str | None:
    """Find an executable by name.

    First tries shutil.which which searches PATH, then falls back to searching
    common platform-specific directories plus any additional_paths provided.
    Cluster managers often run agents with a minimal PATH, so the sbin
    directories matter here.

    Args:
        name: Executable base name to find
        additional_paths: Optional list of paths to search before the defaults

    Returns:
        Absolute path if found, otherwise None
    """
    # 1) Check PATH via shutil.which
    path = shutil.which(name)
    if path:
        return path

    # 2) Platform-specific common locations
    system = platform.system()
    if system == 'Linux':
        base_paths = ['/usr/sbin', '/sbin', '/usr/bin', '/bin', '/usr/local/sbin', '/usr/local/bin']
    elif 'BSD' in system:
        base_paths = ['/sbin', '/usr/sbin', '/usr/local/sbin', '/usr/local/bin', '/usr/bin', '/bin']
    else:
        base_paths = ['/usr/local/bin', '/usr/local/sbin', '/usr/bin', '/bin', '/sbin', '/usr/sbin']

    if additional_paths:
        base_paths = additional_paths + base_paths

    for p in base_paths:
        candidate = os.path.join(p, name)
        if os.path.exists(candidate) and os.access(candidate, os.X_OK):
            return candidate  # The first match is returned so earlier entries override later ones
    return None


# Export list for module
__all__ = [
    'SYSTEM_CONFIG_DIR', 'SYSTEM_CONFIG_FILE_PATH', 'CONFIG_PATH_ENV',
    'COMMAND_LOG_FILE_NAME', 'RUNTIME_FALLBACK_DIR',
    'get_config_file_path', 'get_runtime_dir', 'get_command_log_path', 'find_executable',
]
