# --- START OF FILE constants.py ---

"""
Central location for constants used across the agent modules.
"""

# --- OCF Environment ---
# The orchestrator passes resource parameters as OCF_RESKEY_<name> variables
OCF_RESKEY_PREFIX = "OCF_RESKEY_"
PARAM_POOL = "pool"
PARAM_IMPORT_ARGS = "importargs"
PARAM_IMPORT_FORCE = "importforce"

# --- Default Parameter Values ---
DEFAULT_IMPORT_ARGS = ""
DEFAULT_IMPORT_FORCE = True

# zpool naming rules: a letter first, then alphanumerics, '_', '-', ':', '.' or ' '.
# The name is also a kstat directory, so '.', '..' and '/' must never get through.
POOL_NAME_PATTERN = r"[A-Za-z][A-Za-z0-9_.: -]*"
POOL_NAME_RESERVED = ("mirror", "raidz", "draid", "spare", "log")

# OCF boolean spellings (compared lowercase)
OCF_TRUE_VALUES = ("true", "yes", "on", "1", "y")
OCF_FALSE_VALUES = ("false", "no", "off", "0", "n")

# --- Kernel Statistics ---
# Lock-free per-pool state exposed by the SPL kstat module on Linux
DEFAULT_KSTAT_DIR = "/proc/spl/kstat/zfs"
KSTAT_STATE_FILE = "state"

# --- zpool Output Markers ---
NO_POOLS_AVAILABLE_MSG = "no pools available for import"
POOL_BUSY_MARKERS = ("pool is busy", "device busy", "dataset is busy")

# Import property that keeps the pool out of the boot-time cache file;
# the orchestrator decides which node owns the pool after a reboot.
IMPORT_CACHEFILE_PROPERTY = ("cachefile", "none")

# --- Agent Settings (JSON config file) ---
DEFAULT_SETTINGS = {
    "zpool_path": None,          # Override executable discovery
    "kstat_dir": DEFAULT_KSTAT_DIR,
    "debug": False,
    "syslog": False,             # Mirror log lines to the local syslog
    "syslog_address": "/dev/log",
    "log_commands": False,       # Append every zpool invocation to the command log
    "command_log_path": None,    # Defaults to paths.get_command_log_path()
}

# --- Meta-data Action Timeouts (seconds) ---
ACTION_TIMEOUTS = [
    # (action, timeout, interval or None, depth or None)
    ("start", 60, None, None),
    ("stop", 60, None, None),
    ("monitor", 30, 5, 0),
    ("validate-all", 30, None, None),
    ("meta-data", 5, None, None),
]

# --- END OF FILE constants.py ---
