# --- START OF FILE health.py ---

from zfs_pool_agent.debug_logging import log_debug, log_error, log_warning
from zfs_pool_agent.models import ActionResult, HealthState, PoolResource, PoolState
from zfs_pool_agent.probe import PoolStateProbe

# Every recognised health state maps to a result; anything else fails closed
HEALTH_RESULTS = {
    HealthState.ONLINE: ActionResult.SUCCESS,
    HealthState.DEGRADED: ActionResult.SUCCESS,
    HealthState.FAULTED: ActionResult.NOT_RUNNING,
}


class HealthMonitor:

    def __init__(self, probe: PoolStateProbe):
        self.probe = probe

    def monitor(self, resource: PoolResource) -> ActionResult:
        if self.probe.probe(resource.pool) == PoolState.UNATTACHED:
            log_debug("MONITOR", f"Pool '{resource.pool}' is not imported")
            return ActionResult.NOT_RUNNING

        health = self.probe.read_health(resource.pool)
        result = HEALTH_RESULTS.get(health, ActionResult.GENERIC_ERROR)

        if health == HealthState.DEGRADED:
            # Device replacement is left to the node's ZFS event daemon
            log_warning("MONITOR", f"Pool '{resource.pool}' is DEGRADED but still serving")
        elif health == HealthState.FAULTED:
            log_error("MONITOR", f"Pool '{resource.pool}' is FAULTED")
        elif result == ActionResult.GENERIC_ERROR:
            log_error("MONITOR", f"Pool '{resource.pool}' reports unrecognised health state")
        else:
            log_debug("MONITOR", f"Pool '{resource.pool}' is {health.value}")
        return result

# --- END OF FILE health.py ---
