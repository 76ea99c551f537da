# --- START OF FILE validator.py ---

from zfs_pool_agent.debug_logging import log_debug, log_error
from zfs_pool_agent.models import ActionResult, PoolResource, PoolState
from zfs_pool_agent.probe import PoolStateProbe
from zfs_pool_agent.zpool_core import ZfsCommandError, ZpoolTool


class Validator:

    def __init__(self, tool: ZpoolTool, probe: PoolStateProbe):
        self.tool = tool
        self.probe = probe

    def check_installed(self) -> bool:
        """False (and logged) when the zpool executable is absent; needs no resource."""
        if self.tool.is_installed():
            return True
        log_error("VALIDATE", f"zpool executable not found (looked for: {self.tool.zpool_path or 'zpool in PATH'})")
        return False

    def validate(self, resource: PoolResource) -> ActionResult:
        if not self.check_installed():
            return ActionResult.NOT_INSTALLED

        if self.probe.probe(resource.pool) == PoolState.ATTACHED:
            return ActionResult.SUCCESS

        try:
            records = self.tool.discover_importable(resource.import_argv)
        except ZfsCommandError as e:
            log_error("VALIDATE", str(e))
            return ActionResult.MISCONFIGURED

        # Exact name match: 'tank' must not be satisfied by 'tank2' or 'my-tank'
        log_debug("VALIDATE", f"Importable pools: {[record['name'] for record in records]}")
        for record in records:
            if record['name'] == resource.pool:
                log_debug("VALIDATE", f"Pool '{resource.pool}' is importable (state: {record['state'] or 'unknown'})")
                return ActionResult.SUCCESS

        log_error("VALIDATE", f"Pool '{resource.pool}' is neither imported nor importable with args {list(resource.import_argv)}")
        return ActionResult.MISCONFIGURED

# --- END OF FILE validator.py ---
