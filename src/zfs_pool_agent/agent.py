# --- START OF FILE agent.py ---

import sys
from typing import Callable, Dict, Optional, Sequence, TextIO

from zfs_pool_agent.config_manager import AgentConfig
from zfs_pool_agent.debug_logging import log_debug, log_error, log_info
from zfs_pool_agent.health import HealthMonitor
from zfs_pool_agent.help_strings import usage_text
from zfs_pool_agent.lifecycle import LifecycleController
from zfs_pool_agent.metadata import metadata_xml
from zfs_pool_agent.models import Action, ActionResult, PoolResource
from zfs_pool_agent.probe import PoolStateProbe
from zfs_pool_agent.validator import Validator
from zfs_pool_agent.zpool_core import ProcessRunner, ZpoolTool


class ActionDispatcher:
    """
    Maps one action name to its handler and returns the handler's result.

    Actions that only describe the agent (meta-data, usage) run without a
    pool; every other action requires a resolved PoolResource.
    """

    def __init__(self, config: AgentConfig, tool: ZpoolTool, prog: str = "zpool-agent", out: Optional[TextIO] = None):
        self.config = config
        self.prog = prog
        self._out = out

        probe = PoolStateProbe(tool, config.settings.kstat_dir)
        self.lifecycle = LifecycleController(tool, probe)
        self.monitor = HealthMonitor(probe)
        self.validator = Validator(tool, probe)

        self.standalone_handlers: Dict[Action, Callable[[], ActionResult]] = {
            Action.META_DATA: self._meta_data,
            Action.USAGE: self._usage,
            Action.HELP: self._usage,
        }
        self.resource_handlers: Dict[Action, Callable[[PoolResource], ActionResult]] = {
            Action.START: self.lifecycle.start,
            Action.STOP: self.lifecycle.stop,
            Action.STATUS: self.monitor.monitor,
            Action.MONITOR: self.monitor.monitor,
            Action.VALIDATE_ALL: self.validator.validate,
        }

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _meta_data(self) -> ActionResult:
        self.out.write(metadata_xml())
        return ActionResult.SUCCESS

    def _usage(self) -> ActionResult:
        self.out.write(usage_text(self.prog))
        return ActionResult.SUCCESS

    def dispatch(self, args: Sequence[str]) -> ActionResult:
        if len(args) != 1:
            log_error("AGENT", f"Expected exactly one action argument, got {len(args)}")
            self._usage()
            return ActionResult.BAD_ARGUMENTS

        try:
            action = Action.parse(args[0])
        except ValueError:
            log_error("AGENT", f"Unsupported action '{args[0]}'")
            self._usage()
            return ActionResult.UNIMPLEMENTED

        if action in self.standalone_handlers:
            return self.standalone_handlers[action]()

        resource = self.config.resource
        if resource is None:
            # A missing tool outranks any parameter problem for validate-all
            if action is Action.VALIDATE_ALL and not self.validator.check_installed():
                return ActionResult.NOT_INSTALLED
            log_error("AGENT", f"Cannot run '{action.value}': {self.config.resource_error}")
            return ActionResult.MISCONFIGURED

        log_debug("AGENT", f"Running '{action.value}' for {resource}")
        result = self.resource_handlers[action](resource)
        log_info("AGENT", f"{action.value} for pool '{resource.pool}' finished: {result.name}")
        return result


def build_dispatcher(config: AgentConfig, prog: str = "zpool-agent", out: Optional[TextIO] = None) -> ActionDispatcher:
    """Wire the production runner and zpool tool around config."""
    settings = config.settings
    runner = ProcessRunner(log_enabled=settings.log_commands, log_path=settings.command_log_path)
    tool = ZpoolTool(settings.zpool_path, runner)
    return ActionDispatcher(config, tool, prog=prog, out=out)

# --- END OF FILE agent.py ---
