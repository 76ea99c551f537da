"""Shared test fixtures for zfs_pool_agent."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from zfs_pool_agent import debug_logging
from zfs_pool_agent.models import PoolResource
from zfs_pool_agent.probe import PoolStateProbe
from zfs_pool_agent.zpool_core import CommandResult, ZpoolTool


class FakeRunner:
    """Stands in for ProcessRunner; records every command and replays canned results.

    ``responses`` maps a zpool subcommand ("list", "import", "export") to a
    ``(returncode, stdout, stderr)`` tuple or to a callable taking the command
    parts and returning such a tuple. Unlisted subcommands succeed silently.
    """

    def __init__(self, responses: dict | None = None):
        self.calls: list[list[str]] = []
        self.responses = dict(responses or {})

    def run(self, command_parts) -> CommandResult:
        parts = list(command_parts)
        self.calls.append(parts)
        response = self.responses.get(parts[1] if len(parts) > 1 else "", (0, "", ""))
        if callable(response):
            response = response(parts)
        returncode, stdout, stderr = response
        return CommandResult(parts, returncode, stdout, stderr)

    def calls_for(self, subcommand: str) -> list[list[str]]:
        return [c for c in self.calls if len(c) > 1 and c[1] == subcommand]


def attach_in_kstat(kstat_dir: Path, pool: str, state: str | None = None) -> Path:
    """Create the per-pool kstat directory (and state file) the kernel would expose."""
    pool_dir = kstat_dir / pool
    pool_dir.mkdir(parents=True, exist_ok=True)
    if state is not None:
        (pool_dir / "state").write_text(f"{state}\n")
    return pool_dir


@pytest.fixture(autouse=True)
def _reset_logging():
    """Keep the module-level logging state from leaking between tests."""
    debug_logging.set_debug_mode(False)
    yield
    debug_logging.disable_syslog()
    debug_logging.set_debug_mode(False)


@pytest.fixture
def fake_zpool(tmp_path: Path) -> str:
    """An executable file standing in for the zpool binary (never actually run)."""
    path = tmp_path / "bin" / "zpool"
    path.parent.mkdir()
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def kstat_dir(tmp_path: Path) -> Path:
    """An existing (empty) kstat tree: no pools imported."""
    path = tmp_path / "kstat" / "zfs"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def no_kstat_dir(tmp_path: Path) -> Path:
    """A kstat path that does not exist, forcing the zpool list fallback."""
    return tmp_path / "no-such-kstat"


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def tool(fake_zpool: str, runner: FakeRunner) -> ZpoolTool:
    return ZpoolTool(fake_zpool, runner)


@pytest.fixture
def probe(tool: ZpoolTool, kstat_dir: Path) -> PoolStateProbe:
    return PoolStateProbe(tool, str(kstat_dir))


@pytest.fixture
def tank() -> PoolResource:
    return PoolResource(pool="tank")


@pytest.fixture
def clean_ocf_env(monkeypatch):
    """Strip OCF_RESKEY_* and agent variables inherited from the test environment."""
    for key in list(os.environ):
        if key.startswith("OCF_RESKEY_") or key.startswith("ZPOOL_AGENT_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
