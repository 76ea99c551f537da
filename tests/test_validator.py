"""Tests for the validate-all preflight."""

from __future__ import annotations

import pytest

from conftest import FakeRunner, attach_in_kstat
from zfs_pool_agent.models import ActionResult, PoolResource
from zfs_pool_agent.probe import PoolStateProbe
from zfs_pool_agent.validator import Validator
from zfs_pool_agent.zpool_core import ZpoolTool

DISCOVERY = """\
   pool: tank2
     id: 1
  state: ONLINE
 config:

        tank2  ONLINE
   pool: my-tank
     id: 2
  state: ONLINE
"""


def _validator(zpool_path, kstat_dir, runner):
    tool = ZpoolTool(zpool_path, runner)
    return Validator(tool, PoolStateProbe(tool, str(kstat_dir)))


class TestValidate:

    @pytest.mark.parametrize("attached", [True, False])
    @pytest.mark.parametrize("resource", [
        PoolResource(pool="tank"),
        PoolResource(pool="other", import_args="-d /dev", import_force=False),
    ])
    def test_missing_tool_is_not_installed(self, tmp_path, kstat_dir, attached, resource):
        if attached:
            attach_in_kstat(kstat_dir, resource.pool, "ONLINE")
        runner = FakeRunner()
        validator = _validator(str(tmp_path / "absent" / "zpool"), kstat_dir, runner)
        assert validator.validate(resource) == ActionResult.NOT_INSTALLED
        assert runner.calls == []

    def test_unresolved_tool_is_not_installed(self, kstat_dir, tank):
        assert _validator(None, kstat_dir, FakeRunner()).validate(tank) == ActionResult.NOT_INSTALLED

    def test_attached_pool_is_valid(self, fake_zpool, kstat_dir, tank):
        attach_in_kstat(kstat_dir, "tank")
        runner = FakeRunner()
        assert _validator(fake_zpool, kstat_dir, runner).validate(tank) == ActionResult.SUCCESS
        assert runner.calls == []

    def test_importable_pool_is_valid(self, fake_zpool, kstat_dir):
        runner = FakeRunner({"import": (0, DISCOVERY, "")})
        resource = PoolResource(pool="my-tank", import_args="-d /dev/disk/by-id")
        assert _validator(fake_zpool, kstat_dir, runner).validate(resource) == ActionResult.SUCCESS
        assert runner.calls == [[fake_zpool, "import", "-d", "/dev/disk/by-id"]]

    def test_name_must_match_exactly(self, fake_zpool, kstat_dir, tank):
        runner = FakeRunner({"import": (0, DISCOVERY, "")})
        assert _validator(fake_zpool, kstat_dir, runner).validate(tank) == ActionResult.MISCONFIGURED

    def test_nothing_importable_is_misconfigured(self, fake_zpool, kstat_dir, tank):
        runner = FakeRunner({"import": (1, "", "no pools available for import\n")})
        assert _validator(fake_zpool, kstat_dir, runner).validate(tank) == ActionResult.MISCONFIGURED

    def test_discovery_failure_is_misconfigured(self, fake_zpool, kstat_dir):
        runner = FakeRunner({"import": (2, "", "invalid option 'z'\n")})
        resource = PoolResource(pool="tank", import_args="-z")
        assert _validator(fake_zpool, kstat_dir, runner).validate(resource) == ActionResult.MISCONFIGURED

    def test_discovery_never_imports(self, fake_zpool, kstat_dir):
        runner = FakeRunner({"import": (0, DISCOVERY, "")})
        _validator(fake_zpool, kstat_dir, runner).validate(PoolResource(pool="tank2"))
        for call in runner.calls_for("import"):
            assert "tank2" not in call
            assert "-f" not in call
