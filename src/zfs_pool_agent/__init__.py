"""zfs_pool_agent - OCF-style resource agent for ZFS pool import/export."""

from zfs_pool_agent.version import __version__

__all__ = ["__version__"]
