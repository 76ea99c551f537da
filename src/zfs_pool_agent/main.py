#!/usr/bin/env python3
# --- START OF FILE main.py ---
import argparse
import os
import sys
import traceback
from typing import List, Optional

from zfs_pool_agent.agent import build_dispatcher
from zfs_pool_agent.config_manager import load_agent_config
from zfs_pool_agent.debug_logging import disable_syslog, enable_syslog, log_critical, log_debug, set_debug_mode
from zfs_pool_agent.models import ActionResult
from zfs_pool_agent.version import __app_name__, __version__


def _build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Cluster resource agent for a single ZFS pool",
        epilog=(
            "Resource parameters come from the environment:\n"
            "  OCF_RESKEY_pool=tank OCF_RESKEY_importforce=true %(prog)s start"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # The action is collected as a list so the dispatcher can enforce the arity
    parser.add_argument("action", nargs="*", help="start, stop, status, monitor, validate-all, meta-data or usage")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG level logging to stderr")
    parser.add_argument("--config", metavar="PATH", default=None,
                        help="Agent settings file (default: $ZPOOL_AGENT_CONFIG or /etc/zpool-agent/config.json)")
    parser.add_argument("--version", action="version", version=f"{__app_name__} {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the OCF exit code."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else __app_name__
    if prog in ("__main__.py", "-m", "-c"):
        prog = __app_name__
    # argparse exits with 2 on bad options, which is also OCF_ERR_ARGS
    args = _build_parser(prog).parse_args(argv)

    set_debug_mode(args.debug)
    try:
        config = load_agent_config(os.environ, args.config)
        set_debug_mode(args.debug or config.settings.debug)
        if config.settings.syslog:
            enable_syslog(config.settings.syslog_address)

        log_debug("MAIN", f"Settings: {config.settings}")
        dispatcher = build_dispatcher(config, prog=prog)
        return int(dispatcher.dispatch(args.action))
    except Exception as e:
        log_critical("MAIN", f"Unexpected error: {e}\n{traceback.format_exc()}")
        return int(ActionResult.GENERIC_ERROR)
    finally:
        disable_syslog()


if __name__ == "__main__":
    sys.exit(main())

# --- END OF FILE main.py ---
