# --- START OF FILE help_strings.py ---
"""
Centralized help content for the agent.
Used by the meta-data document and the usage text.
"""

from zfs_pool_agent import constants

HELP = {
    "agent": {
        "short": "Manages a ZFS pool as a cluster resource",
        "long": (
            "This agent imports a ZFS pool on start and exports it on stop, so the "
            "orchestrator can move the pool between nodes that share its disks. "
            "Pools are imported with cachefile=none so no node re-imports them on boot."
        ),
    },
    "parameters": {
        constants.PARAM_POOL: {
            "short": "Pool name",
            "long": "Name of the ZFS pool to manage, as seen by zpool import.",
            "type": "string",
            "required": True,
            "unique": True,
            "default": None,
        },
        constants.PARAM_IMPORT_ARGS: {
            "short": "Import arguments",
            "long": "Additional arguments passed to zpool import, e.g. '-d /dev/disk/by-id'.",
            "type": "string",
            "required": False,
            "unique": False,
            "default": constants.DEFAULT_IMPORT_ARGS,
        },
        constants.PARAM_IMPORT_FORCE: {
            "short": "Force import",
            "long": (
                "Import with -f, even if the pool appears to be in use by another node. "
                "Required after a node failure, when the pool was never cleanly exported."
            ),
            "type": "boolean",
            "required": False,
            "unique": False,
            "default": "true" if constants.DEFAULT_IMPORT_FORCE else "false",
        },
    },
}

USAGE = """\
usage: {prog} {{start|stop|status|monitor|validate-all|meta-data|usage}}

  start         Import the pool (no-op if already imported)
  stop          Export the pool (no-op if not imported)
  status        Same as monitor
  monitor       Report whether the pool is imported and healthy
  validate-all  Check that zpool exists and the pool is importable
  meta-data     Print the resource agent XML description
  usage         Print this text

Parameters are read from OCF_RESKEY_{pool}, OCF_RESKEY_{importargs} and OCF_RESKEY_{importforce}.
"""


def usage_text(prog: str) -> str:
    return USAGE.format(
        prog=prog,
        pool=constants.PARAM_POOL,
        importargs=constants.PARAM_IMPORT_ARGS,
        importforce=constants.PARAM_IMPORT_FORCE,
    )

# --- END OF FILE help_strings.py ---
