# --- START OF FILE lifecycle.py ---
"""
Idempotent import (start) and export (stop) of the managed pool.

Resource ordering constraint: anything that keeps the pool busy (mounted
datasets exported over NFS, zvols opened by iSCSI targets or VMs, swap on a
zvol) must be stopped by the orchestrator before this resource. A forced
export still fails with "pool is busy" while those hold references, and that
failure is reported, never masked.
"""

from zfs_pool_agent.debug_logging import log_error, log_info
from zfs_pool_agent.models import ActionResult, PoolResource, PoolState
from zfs_pool_agent.probe import PoolStateProbe
from zfs_pool_agent.zpool_core import ZfsCommandError, ZpoolTool


class LifecycleController:

    def __init__(self, tool: ZpoolTool, probe: PoolStateProbe):
        self.tool = tool
        self.probe = probe

    def start(self, resource: PoolResource) -> ActionResult:
        if self.probe.probe(resource.pool) == PoolState.ATTACHED:
            log_info("LIFECYCLE", f"Pool '{resource.pool}' already imported, nothing to do")
            return ActionResult.SUCCESS

        log_info("LIFECYCLE", f"Importing pool '{resource.pool}' (force={resource.import_force})")
        try:
            self.tool.import_pool(resource.pool, resource.import_argv, force=resource.import_force)
        except ZfsCommandError as e:
            log_error("LIFECYCLE", str(e))
            return ActionResult.GENERIC_ERROR

        log_info("LIFECYCLE", f"Pool '{resource.pool}' imported")
        return ActionResult.SUCCESS

    def stop(self, resource: PoolResource) -> ActionResult:
        if self.probe.probe(resource.pool) == PoolState.UNATTACHED:
            log_info("LIFECYCLE", f"Pool '{resource.pool}' not imported, nothing to do")
            return ActionResult.SUCCESS

        log_info("LIFECYCLE", f"Exporting pool '{resource.pool}' (forced)")
        try:
            self.tool.export_pool(resource.pool, force=True)
        except ZfsCommandError as e:
            log_error("LIFECYCLE", str(e))
            if e.is_busy:
                log_error("LIFECYCLE", f"Pool '{resource.pool}' is still in use; stop its consumers before this resource. The pool remains imported.")
            return ActionResult.GENERIC_ERROR

        log_info("LIFECYCLE", f"Pool '{resource.pool}' exported")
        return ActionResult.SUCCESS

# --- END OF FILE lifecycle.py ---
