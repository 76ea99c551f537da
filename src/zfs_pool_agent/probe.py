# --- START OF FILE probe.py ---
"""
Attachment and health probing for a single pool.

The SPL kstat tree (/proc/spl/kstat/zfs/<pool>) is read first because it
takes no pool locks; `zpool list` is only used where kstat is unavailable,
since it can block behind a concurrent import/export.
"""

import os

from zfs_pool_agent import constants
from zfs_pool_agent.debug_logging import log_debug
from zfs_pool_agent.models import HealthState, PoolState
from zfs_pool_agent.zpool_core import ZpoolTool


class PoolStateProbe:

    def __init__(self, tool: ZpoolTool, kstat_dir: str = constants.DEFAULT_KSTAT_DIR):
        self.tool = tool
        self.kstat_dir = kstat_dir

    def _kstat_available(self) -> bool:
        return os.path.isdir(self.kstat_dir)

    def probe(self, pool_name: str) -> PoolState:
        if self._kstat_available():
            attached = os.path.isdir(os.path.join(self.kstat_dir, pool_name))
            source = "kstat"
        else:
            attached = bool(self.tool.zpool_path) and self.tool.is_listed(pool_name)
            source = "zpool list"
        state = PoolState.ATTACHED if attached else PoolState.UNATTACHED
        log_debug("PROBE", f"Pool '{pool_name}' is {state.value} (via {source})")
        return state

    def read_health(self, pool_name: str) -> HealthState:
        """Health of an attached pool; anything unreadable or unexpected is UNKNOWN."""
        state_file = os.path.join(self.kstat_dir, pool_name, constants.KSTAT_STATE_FILE)
        raw = None
        if os.path.isfile(state_file):
            try:
                with open(state_file, 'r') as f:
                    raw = f.read()
            except OSError as e:
                log_debug("PROBE", f"Could not read {state_file}: {e}")
        elif self.tool.zpool_path:
            raw = self.tool.health(pool_name)

        health = HealthState.from_text(raw)
        log_debug("PROBE", f"Pool '{pool_name}' health reading {raw!r} -> {health.value}")
        return health

# --- END OF FILE probe.py ---
