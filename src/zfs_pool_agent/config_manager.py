# --- START OF FILE config_manager.py ---

import json
import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from zfs_pool_agent import constants
from zfs_pool_agent.debug_logging import log_warning
from zfs_pool_agent.models import PoolResource
from zfs_pool_agent.paths import find_executable, get_command_log_path, get_config_file_path

DEBUG_ENV = "ZPOOL_AGENT_DEBUG"


class ConfigError(Exception):
    """Raised when the resource parameters cannot describe a pool."""
    pass


@dataclass(frozen=True)
class AgentSettings:
    zpool_path: Optional[str]
    kstat_dir: str = constants.DEFAULT_KSTAT_DIR
    debug: bool = False
    syslog: bool = False
    syslog_address: str = "/dev/log"
    log_commands: bool = False
    command_log_path: Optional[str] = None


@dataclass(frozen=True)
class AgentConfig:
    """Everything an action needs, resolved once at process entry."""
    settings: AgentSettings
    resource: Optional[PoolResource] = None
    resource_error: Optional[str] = None  # Why resource is None


def parse_ocf_bool(value, default: bool) -> bool:
    """Interpret an OCF boolean parameter; unrecognised spellings yield default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "":
        return default
    if text in constants.OCF_TRUE_VALUES:
        return True
    if text in constants.OCF_FALSE_VALUES:
        return False
    log_warning("CONFIG", f"Unrecognised boolean value '{value}'. Using default: {default}")
    return default


def load_settings_file(config_path: Optional[str] = None) -> dict:
    """Loads the agent settings from the JSON file; missing or invalid files yield {}."""
    if config_path is None:
        config_path = get_config_file_path()
    if not os.path.exists(config_path):
        return {}
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (ValueError, OSError) as e:  # ValueError covers JSONDecodeError and UnicodeDecodeError
        log_warning("CONFIG", f"Error loading config file '{config_path}': {e}. Using defaults.")
        return {}
    if not isinstance(config, dict):
        log_warning("CONFIG", f"Config file '{config_path}' does not contain a valid JSON object. Using defaults.")
        return {}
    unknown = sorted(set(config) - set(constants.DEFAULT_SETTINGS))
    if unknown:
        log_warning("CONFIG", f"Ignoring unknown settings in '{config_path}': {', '.join(unknown)}")
    return config


def build_settings(raw: Mapping, environ: Mapping[str, str]) -> AgentSettings:
    """Merge raw settings over the defaults and resolve derived values."""
    merged = dict(constants.DEFAULT_SETTINGS)
    merged.update({k: v for k, v in raw.items() if k in constants.DEFAULT_SETTINGS})

    zpool_path = merged.get("zpool_path") or find_executable("zpool")
    command_log_path = merged.get("command_log_path") or get_command_log_path()
    debug = parse_ocf_bool(environ.get(DEBUG_ENV), parse_ocf_bool(merged.get("debug"), False))

    return AgentSettings(
        zpool_path=zpool_path,
        kstat_dir=merged.get("kstat_dir") or constants.DEFAULT_KSTAT_DIR,
        debug=debug,
        syslog=parse_ocf_bool(merged.get("syslog"), False),
        syslog_address=merged.get("syslog_address") or "/dev/log",
        log_commands=parse_ocf_bool(merged.get("log_commands"), False),
        command_log_path=command_log_path,
    )


def _reskey(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{constants.OCF_RESKEY_PREFIX}{name}")


def load_resource(environ: Mapping[str, str]) -> PoolResource:
    """
    Build the PoolResource from OCF_RESKEY_* variables.

    Raises:
        ConfigError: pool is missing or not a valid zpool name, or importargs
            cannot be split into words.
    """
    pool = (_reskey(environ, constants.PARAM_POOL) or "").strip()
    if not pool:
        raise ConfigError(f"Required parameter '{constants.PARAM_POOL}' is not set.")
    if not re.fullmatch(constants.POOL_NAME_PATTERN, pool) or pool in constants.POOL_NAME_RESERVED:
        raise ConfigError(f"Invalid '{constants.PARAM_POOL}' value {pool!r}: not a valid zpool name.")

    import_args = _reskey(environ, constants.PARAM_IMPORT_ARGS)
    if import_args is None:
        import_args = constants.DEFAULT_IMPORT_ARGS
    import_force = parse_ocf_bool(_reskey(environ, constants.PARAM_IMPORT_FORCE), constants.DEFAULT_IMPORT_FORCE)

    try:
        return PoolResource(pool=pool, import_args=import_args, import_force=import_force)
    except ValueError as e:  # shlex on unbalanced quotes
        raise ConfigError(f"Invalid '{constants.PARAM_IMPORT_ARGS}' value {import_args!r}: {e}") from e


def load_agent_config(environ: Optional[Mapping[str, str]] = None, config_path: Optional[str] = None) -> AgentConfig:
    """Resolve settings and resource parameters into one immutable AgentConfig."""
    if environ is None:
        environ = os.environ
    settings = build_settings(load_settings_file(config_path), environ)
    try:
        resource = load_resource(environ)
    except ConfigError as e:
        return AgentConfig(settings=settings, resource=None, resource_error=str(e))
    return AgentConfig(settings=settings, resource=resource)

# --- END OF FILE config_manager.py ---
