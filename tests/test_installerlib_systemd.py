import os
import os.path
import subprocess
import tempfile
import unittest
from unittest.mock import patch

from installerlib.plumbing import systemd
from installerlib.plumbing.common import State


def _proc(stdout: bytes = b"", returncode: int = 0) -> "subprocess.CompletedProcess[bytes]":
    return subprocess.CompletedProcess([], returncode, stdout)


class SystemdTestCase(unittest.TestCase):
    """
    Run on a pretend Linux host, with `systemctl` queries answered by `self.states`.
    """

    def setUp(self):
        self.states = {"is-active": b"inactive\n", "is-enabled": b"disabled\n"}
        patch_system = patch("platform.system", return_value="Linux")
        patch_system.start()
        self.addCleanup(patch_system.stop)
        patch_command = patch("installerlib.plumbing.systemd.command", side_effect=self._command)
        self.command = patch_command.start()
        self.addCleanup(patch_command.stop)

    def _command(self, args, output=False, check=True):
        if args[1] in self.states:
            return _proc(self.states[args[1]], 0 if self.states[args[1]].startswith(b"a") else 3)
        return _proc()

    def assertChanged(self, *args):
        self.command.assert_called_with([systemd.SYSTEMCTL, *args])


class TestStartStop(SystemdTestCase):

    def test_start(self):
        result = systemd.start_unit("test.service")
        self.assertEqual(result.state, State.success)
        self.assertChanged("start", "test.service", "--no-block")

    def test_start_active(self):
        self.states["is-active"] = b"active\n"
        self.assertEqual(systemd.start_unit("test.service").state, State.unchanged)
        self.assertEqual(self.command.call_count, 1)

    def test_stop(self):
        self.states["is-active"] = b"active\n"
        self.assertEqual(systemd.stop_unit("test.service").state, State.success)
        self.assertChanged("stop", "test.service", "--no-block")

    def test_stop_inactive(self):
        self.assertEqual(systemd.stop_unit("test.service").state, State.unchanged)

    def test_stop_unknown(self):
        self.states["is-active"] = b"unknown\n"
        self.assertEqual(systemd.stop_unit("test.service").state, State.unchanged)


class TestEnableDisable(SystemdTestCase):

    def test_enable(self):
        self.assertEqual(systemd.enable_unit("test.service").state, State.success)
        self.assertChanged("enable", "test.service")

    def test_enable_enabled(self):
        self.states["is-enabled"] = b"enabled\n"
        self.assertEqual(systemd.enable_unit("test.service").state, State.unchanged)

    def test_disable(self):
        self.states["is-enabled"] = b"enabled\n"
        self.assertEqual(systemd.disable_unit("test.service").state, State.success)
        self.assertChanged("disable", "test.service")

    def test_disable_disabled(self):
        self.assertEqual(systemd.disable_unit("test.service").state, State.unchanged)

    def test_disable_other_enabled_states(self):
        for state in (b"enabled-runtime\n", b"linked\n", b"alias\n", b"indirect\n"):
            with self.subTest(state=state):
                self.states["is-enabled"] = state
                self.assertEqual(systemd.disable_unit("test.service").state, State.success)
                self.assertChanged("disable", "test.service")

    def test_disable_static_masked(self):
        for state in (b"static\n", b"masked\n"):
            with self.subTest(state=state):
                self.command.reset_mock()
                self.states["is-enabled"] = state
                self.assertEqual(systemd.disable_unit("test.service").state, State.unchanged)
                self.assertEqual(self.command.call_count, 1)

    def test_disable_missing(self):
        self.states["is-enabled"] = b""
        self.assertEqual(systemd.disable_unit("test.service").state, State.unchanged)
        self.assertEqual(self.command.call_count, 1)


class TestReload(SystemdTestCase):

    def test_reload(self):
        self.assertEqual(systemd.reload().state, State.success)
        self.assertChanged("daemon-reload")

    def test_failure(self):
        self.command.side_effect = subprocess.CalledProcessError(1, [systemd.SYSTEMCTL])
        with self.assertRaises(subprocess.CalledProcessError):
            systemd.reload()

    def test_not_linux(self):
        with patch("platform.system", return_value="Darwin"):
            with self.assertRaises(RuntimeError):
                systemd.reload()
        self.command.assert_not_called()


class TestUnitFiles(SystemdTestCase):

    def setUp(self):
        super().setUp()
        self.tempdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tempdir.cleanup)
        self.source = os.path.join(self.tempdir.name, "package")
        self.dest = os.path.join(self.tempdir.name, "system")
        os.mkdir(self.source)
        os.mkdir(self.dest)
        self.write(os.path.join(self.source, "test.service"), "[Service]\n")

    def write(self, path, content):
        with open(path, "w") as unit:
            unit.write(content)

    def load(self):
        return systemd.load_unit("test.service", self.source, self.dest)

    def test_load(self):
        self.assertEqual(self.load().state, State.created)
        with open(os.path.join(self.dest, "test.service")) as unit:
            self.assertEqual(unit.read(), "[Service]\n")

    def test_load_identical(self):
        self.load()
        self.assertEqual(self.load().state, State.unchanged)

    def test_load_updated(self):
        self.load()
        self.write(os.path.join(self.source, "test.service"), "[Service]\nType=simple\n")
        self.assertEqual(self.load().state, State.success)

    def test_load_missing_source(self):
        with self.assertRaises(FileNotFoundError):
            systemd.load_unit("other.service", self.source, self.dest)

    def test_remove(self):
        self.load()
        self.assertEqual(systemd.remove_unit("test.service", self.dest).state, State.success)
        self.assertFalse(os.path.exists(os.path.join(self.dest, "test.service")))

    def test_remove_missing(self):
        self.assertEqual(systemd.remove_unit("test.service", self.dest).state, State.unchanged)


if __name__ == "__main__":
    unittest.main()
