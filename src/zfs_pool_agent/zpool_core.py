# --- START OF FILE zpool_core.py ---

import datetime  # For logging timestamp
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from zfs_pool_agent import constants
from zfs_pool_agent.debug_logging import log_debug, log_error, log_warning
from zfs_pool_agent.parsers.zpool import ZPoolParser


# --- Error Classes ---
class ZfsError(Exception):
    """Base class for ZFS related errors."""
    pass

class ZfsCommandError(ZfsError):
    """Custom exception for ZFS command execution errors."""
    def __init__(self, message, command_parts=None, stderr=None, returncode=None):
        super().__init__(message)
        self.command_parts = command_parts
        self.stderr = stderr
        self.returncode = returncode

    @property
    def is_busy(self) -> bool:
        """True when zpool refused because something still holds the pool."""
        text = (self.stderr or "").lower()
        return any(marker in text for marker in constants.POOL_BUSY_MARKERS)

    def __str__(self):
        details = []
        if self.command_parts:
            details.append(f"Command: {shlex.join(self.command_parts)}")
        if self.returncode is not None: details.append(f"Return Code: {self.returncode}")
        if self.stderr:
            stderr_short = self.stderr.strip()
            if len(stderr_short) > 300: stderr_short = stderr_short[:300] + "..."
            details.append(f"Stderr: {stderr_short}")
        details_str = " (" + ", ".join(details) + ")" if details else ""
        return f"{super().__str__()}{details_str}"


# --- Process Runner ---
@dataclass(frozen=True)
class CommandResult:
    command_parts: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """
    Runs external commands and captures their output.

    A missing, non-executable or unrunnable binary is reported as returncode -1 with an
    explanatory stderr instead of an exception, so callers only ever look at
    the CommandResult. No timeout is applied: the orchestrator kills the agent
    when an action exceeds its configured timeout.
    """

    def __init__(self, log_enabled: bool = False, log_path: Optional[str] = None):
        self.log_enabled = log_enabled and bool(log_path)
        self.log_path = log_path

    def run(self, command_parts: Sequence[str]) -> CommandResult:
        command_parts = list(command_parts)
        if not command_parts or not command_parts[0]:
            err_msg = "Error: Invalid command parts provided to run()."
            log_error("RUNNER", err_msg)
            return CommandResult(command_parts, -1, "", err_msg)

        cmd_str_safe = shlex.join(command_parts)
        log_debug("RUNNER", f"Executing: {cmd_str_safe}")

        start_time = datetime.datetime.now()
        stdout, stderr, returncode = "", "", -1
        try:
            process = subprocess.run(
                command_parts,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                text=False,  # Read bytes
                check=False,  # Don't raise exception on non-zero exit
            )
            returncode = process.returncode
            stdout = process.stdout.decode('utf-8', errors='replace') if process.stdout else ""
            stderr = process.stderr.decode('utf-8', errors='replace') if process.stderr else ""

            if returncode != 0:
                log_debug("RUNNER", f"Command failed (ret={returncode}) for: {cmd_str_safe}")
                if stderr: log_debug("RUNNER", f"Stderr:\n{stderr.strip()}")
                elif stdout: log_debug("RUNNER", f"Stdout:\n{stdout.strip()}")
        except FileNotFoundError:
            stderr = f"Error: Command not found: '{command_parts[0]}'."
            log_error("RUNNER", stderr)
        except PermissionError:
            stderr = f"Error: Permission denied executing '{command_parts[0]}'."
            log_error("RUNNER", stderr)
        except OSError as e:  # e.g. ENOEXEC for a corrupt binary
            stderr = f"Error: Could not execute '{command_parts[0]}': {e}"
            log_error("RUNNER", stderr)
        finally:
            if self.log_enabled:
                self._write_command_log(cmd_str_safe, start_time, returncode, stdout, stderr)

        return CommandResult(command_parts, returncode, stdout, stderr)

    def _write_command_log(self, cmd_str: str, start_time, returncode: int, stdout: str, stderr: str) -> None:
        duration = datetime.datetime.now() - start_time
        try:
            log_dir = os.path.dirname(self.log_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            if not os.path.exists(self.log_path):
                open(self.log_path, 'a').close()
                os.chmod(self.log_path, 0o640)  # rw-r-----
            with open(self.log_path, 'a', encoding='utf-8') as log_file:
                log_file.write(f"--- {start_time.strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]} ---\n")
                log_file.write(f"COMMAND: {cmd_str}\n")
                log_file.write(f"RETURN CODE: {returncode}\n")
                log_file.write(f"DURATION: {duration.total_seconds():.3f}s\n")
                if stdout: log_file.write("STDOUT:\n"); log_file.write(stdout.strip() + "\n")
                if stderr: log_file.write("STDERR:\n"); log_file.write(stderr.strip() + "\n")
                log_file.write("\n")
        except OSError as log_e:
            log_warning("RUNNER", f"Error writing to command log '{self.log_path}': {log_e}")


# --- Command Builder Base Class ---
class CommandBuilder:
    def __init__(self, base_command: str):
        if not base_command:
            raise ValueError("Base command cannot be empty")
        self._parts: List[str] = [base_command]

    def _add_option(self, flag: str, value: Union[str, bool]):
        if isinstance(value, bool):
            if value: self._parts.append(flag)
        elif value is not None:
            self._parts.extend([flag, str(value)])
        return self

    def _add_flag(self, flag: str, condition: bool = True):
        if condition:
            self._parts.append(flag)
        return self

    def _add_key_value_option(self, flag: str, key: str, value: str):
        if key and value is not None:
            self._parts.extend([flag, f"{key}={value}"])
        return self

    def _add_args(self, *args: Optional[str]):
        for arg in args:
            if arg is not None:
                self._parts.append(arg)
        return self

    def _add_arg_list(self, args: Optional[Sequence[str]]):
        if args:
            self._parts.extend(args)
        return self

    def build(self) -> List[str]:
        return list(self._parts)

    def run(self, runner: ProcessRunner) -> CommandResult:
        """Builds and runs the command with the given runner."""
        return runner.run(self.build())


# --- ZPOOL Command Builder ---
class ZpoolCommandBuilder(CommandBuilder):
    def __init__(self, zpool_path: str, action: str):
        if not zpool_path: raise ZfsCommandError("zpool command not found.")
        super().__init__(zpool_path)
        self._add_args(action)

    def force(self, condition=True): return self._add_flag('-f', condition)
    def script(self, condition=True): return self._add_flag('-H', condition)  # No header, tab separated
    def output_props(self, props: List[str]): return self._add_option('-o', ','.join(props))
    def pool_option(self, key: str, value: str): return self._add_key_value_option('-o', key, value)
    def extra_args(self, args: Sequence[str]): return self._add_arg_list(args)
    def pool(self, name: str): return self._add_args(name)


# --- zpool Tool Facade ---
class ZpoolTool:
    """
    The storage-pool tool as seen by the agent: the handful of zpool
    invocations it needs, each built with ZpoolCommandBuilder and executed
    through the injected ProcessRunner.
    """

    def __init__(self, zpool_path: Optional[str], runner: ProcessRunner, parser=ZPoolParser):
        self.zpool_path = zpool_path
        self.runner = runner
        self.parser = parser

    def is_installed(self) -> bool:
        return bool(self.zpool_path) and os.path.isfile(self.zpool_path) and os.access(self.zpool_path, os.X_OK)

    def _builder(self, action: str) -> ZpoolCommandBuilder:
        return ZpoolCommandBuilder(self.zpool_path, action)

    def is_listed(self, pool_name: str) -> bool:
        """True if `zpool list` knows the pool (i.e. it is imported here)."""
        result = self._builder('list').script().pool(pool_name).run(self.runner)
        return result.ok

    def health(self, pool_name: str) -> Optional[str]:
        """Raw health column for the pool, or None if zpool could not report it."""
        builder = self._builder('list').script().output_props(['health']).pool(pool_name)
        result = builder.run(self.runner)
        if not result.ok:
            log_debug("ZPOOL", f"Health query failed for '{pool_name}' (ret={result.returncode})")
            return None
        return self.parser.parse_health(result.stdout)

    def import_pool(self, pool_name: str, import_args: Sequence[str] = (), force: bool = True) -> None:
        key, value = constants.IMPORT_CACHEFILE_PROPERTY
        builder = (self._builder('import')
                   .extra_args(import_args)
                   .force(force)
                   .pool_option(key, value)
                   .pool(pool_name))
        result = builder.run(self.runner)
        if not result.ok:
            raise ZfsCommandError(f"Failed to import pool '{pool_name}'.", result.command_parts, result.stderr, result.returncode)

    def export_pool(self, pool_name: str, force: bool = True) -> None:
        result = self._builder('export').force(force).pool(pool_name).run(self.runner)
        if not result.ok:
            raise ZfsCommandError(f"Failed to export pool '{pool_name}'.", result.command_parts, result.stderr, result.returncode)

    def discover_importable(self, import_args: Sequence[str] = ()) -> List[dict]:
        """Run `zpool import` without a target (dry run) and return the parsed records."""
        result = self._builder('import').extra_args(import_args).run(self.runner)

        # Check stderr *first* for the specific "no pools" message
        if constants.NO_POOLS_AVAILABLE_MSG in result.stderr.lower():
            return []
        if not result.ok:
            raise ZfsCommandError("Failed to search for importable pools.", result.command_parts, result.stderr, result.returncode)
        return self.parser.parse_import_discovery(result.stdout)

# --- END OF FILE zpool_core.py ---
