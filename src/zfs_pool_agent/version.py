# --- START OF FILE src/zfs_pool_agent/version.py ---
"""
Single source of truth for the agent version and app information.
All other components should import from this module.
"""

__version__ = "1.0.0"
__app_name__ = "zpool-agent"

