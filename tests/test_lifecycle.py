"""Tests for LifecycleController start/stop."""

from __future__ import annotations

from conftest import FakeRunner, attach_in_kstat
from zfs_pool_agent.lifecycle import LifecycleController
from zfs_pool_agent.models import ActionResult, PoolResource
from zfs_pool_agent.probe import PoolStateProbe
from zfs_pool_agent.zpool_core import ZpoolTool


def _controller(fake_zpool, kstat_dir, runner):
    tool = ZpoolTool(fake_zpool, runner)
    return LifecycleController(tool, PoolStateProbe(tool, str(kstat_dir)))


class TestStart:

    def test_imports_unattached_pool(self, fake_zpool, kstat_dir, tank):
        runner = FakeRunner()
        result = _controller(fake_zpool, kstat_dir, runner).start(tank)
        assert result == ActionResult.SUCCESS
        assert runner.calls_for("import") == [[fake_zpool, "import", "-f", "-o", "cachefile=none", "tank"]]

    def test_passes_import_args_and_honours_force_flag(self, fake_zpool, kstat_dir):
        runner = FakeRunner()
        resource = PoolResource(pool="tank", import_args="-d /dev/disk/by-id -N", import_force=False)
        _controller(fake_zpool, kstat_dir, runner).start(resource)
        assert runner.calls_for("import") == [
            [fake_zpool, "import", "-d", "/dev/disk/by-id", "-N", "-o", "cachefile=none", "tank"]
        ]

    def test_already_attached_is_noop(self, fake_zpool, kstat_dir, tank):
        attach_in_kstat(kstat_dir, "tank", "ONLINE")
        runner = FakeRunner()
        assert _controller(fake_zpool, kstat_dir, runner).start(tank) == ActionResult.SUCCESS
        assert runner.calls == []

    def test_second_start_makes_no_external_call(self, fake_zpool, kstat_dir, tank):
        def do_import(parts):
            attach_in_kstat(kstat_dir, parts[-1], "ONLINE")  # the kernel now exposes the pool
            return 0, "", ""

        runner = FakeRunner({"import": do_import})
        controller = _controller(fake_zpool, kstat_dir, runner)
        assert controller.start(tank) == ActionResult.SUCCESS
        assert controller.start(tank) == ActionResult.SUCCESS
        assert len(runner.calls_for("import")) == 1

    def test_import_failure_is_generic_error(self, fake_zpool, kstat_dir, tank):
        runner = FakeRunner({"import": (1, "", "cannot import 'tank': pool may be in use from other system\n")})
        assert _controller(fake_zpool, kstat_dir, runner).start(tank) == ActionResult.GENERIC_ERROR


class TestStop:

    def test_exports_attached_pool_forced(self, fake_zpool, kstat_dir, tank):
        attach_in_kstat(kstat_dir, "tank", "ONLINE")
        runner = FakeRunner()
        assert _controller(fake_zpool, kstat_dir, runner).stop(tank) == ActionResult.SUCCESS
        assert runner.calls_for("export") == [[fake_zpool, "export", "-f", "tank"]]

    def test_unattached_is_noop(self, fake_zpool, kstat_dir, tank):
        runner = FakeRunner()
        assert _controller(fake_zpool, kstat_dir, runner).stop(tank) == ActionResult.SUCCESS
        assert runner.calls == []

    def test_busy_export_is_never_success(self, fake_zpool, kstat_dir, tank, capsys):
        attach_in_kstat(kstat_dir, "tank", "ONLINE")
        runner = FakeRunner({"export": (1, "", "cannot export 'tank': pool is busy\n")})
        assert _controller(fake_zpool, kstat_dir, runner).stop(tank) == ActionResult.GENERIC_ERROR
        assert "still in use" in capsys.readouterr().err

    def test_failed_export_of_faulted_pool_is_error(self, fake_zpool, kstat_dir, tank):
        attach_in_kstat(kstat_dir, "tank", "FAULTED")
        runner = FakeRunner({"export": (1, "", "cannot export 'tank': I/O error\n")})
        assert _controller(fake_zpool, kstat_dir, runner).stop(tank) == ActionResult.GENERIC_ERROR
