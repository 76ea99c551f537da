# --- START OF FILE parsers/zpool.py ---
"""
Parsers for `zpool` command outputs (list health column, import discovery).
Plain text parsing: `-H` output for list, the human layout for import.
"""

import re
from typing import Dict, List, Optional


class ZPoolParser:
    """Parses output from the `zpool` commands the agent runs."""

    # "key: value" lines of `zpool import`, allowing leading whitespace
    _IMPORT_KEY_RE = re.compile(r'^\s*(\w+):\s*(.*)$')

    @staticmethod
    def parse_health(raw_output: str) -> Optional[str]:
        """
        Parses `zpool list -H -o health <pool>` output.

        Returns:
            The first non-empty line, stripped, or None for empty output.
        """
        if not raw_output:
            return None
        for line in raw_output.splitlines():
            value = line.strip()
            if value:
                # -H separates columns with tabs; only one column was requested
                return value.split('\t')[0]
        return None

    @classmethod
    def parse_import_discovery(cls, raw_output: str) -> List[Dict[str, str]]:
        """
        Parses the output of `zpool import` run without a pool argument.

        Returns:
            A list of records, one per importable pool: [{"name": str, "state": str}]
        """
        pools: List[Dict[str, str]] = []
        output = (raw_output or "").strip()
        if not output:
            return pools

        current_pool = None
        for line in output.split('\n'):
            match = cls._IMPORT_KEY_RE.match(line)
            if not match:
                continue  # config tree, blank lines
            key = match.group(1)
            value = match.group(2).strip()
            if key == 'pool':
                current_pool = {'name': value, 'state': ''}
                pools.append(current_pool)
            elif key == 'state' and current_pool:
                current_pool['state'] = value
            # else: ignore id, status, action, see, config, etc.

        return pools

# --- END OF FILE parsers/zpool.py ---
