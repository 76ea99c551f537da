# --- START OF FILE models.py ---

import shlex
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Tuple


class ActionResult(IntEnum):
    """OCF exit codes returned to the orchestrator."""
    SUCCESS = 0
    GENERIC_ERROR = 1
    BAD_ARGUMENTS = 2
    UNIMPLEMENTED = 3
    NOT_INSTALLED = 5
    MISCONFIGURED = 6
    NOT_RUNNING = 7


class PoolState(Enum):
    UNATTACHED = "unattached"
    ATTACHED = "attached"


class HealthState(Enum):
    ONLINE = "ONLINE"
    DEGRADED = "DEGRADED"
    FAULTED = "FAULTED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_text(cls, text) -> "HealthState":
        """Map a raw health reading (kstat file or zpool column) to a HealthState."""
        if not isinstance(text, str):
            return cls.UNKNOWN
        value = text.strip().upper()
        for state in (cls.ONLINE, cls.DEGRADED, cls.FAULTED):
            if value == state.value:
                return state
        return cls.UNKNOWN


class Action(Enum):
    START = "start"
    STOP = "stop"
    STATUS = "status"
    MONITOR = "monitor"
    VALIDATE_ALL = "validate-all"
    META_DATA = "meta-data"
    USAGE = "usage"
    HELP = "help"

    @classmethod
    def parse(cls, name: str) -> "Action":
        """Return the Action for name; raises ValueError for anything outside the set."""
        return cls(name)


@dataclass(frozen=True)
class PoolResource:
    pool: str
    import_args: str = ""
    import_force: bool = True

    # Parsed once; import_args is an opaque string of zpool import flags
    import_argv: Tuple[str, ...] = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "import_argv", tuple(shlex.split(self.import_args)) if self.import_args else ())

# --- END OF FILE models.py ---
