import grp
import os
import os.path
import subprocess
import tempfile
import unittest
from unittest.mock import patch

from installerlib.plumbing import unix
from installerlib.plumbing.common import State


class TestGroups(unittest.TestCase):

    def setUp(self):
        self.group = grp.struct_group(("dd-agent", "x", 4242, ["someone"]))

    @patch("installerlib.plumbing.unix.command")
    def test_get_groups(self, command):
        command.return_value = subprocess.CompletedProcess([], 0, b"dd-installer dd-agent\n")
        self.assertEqual(unix.get_groups("dd-installer"), "dd-installer dd-agent\n")
        command.assert_called_once_with(["/usr/bin/id", "-Gn", "dd-installer"], output=True)

    @patch("platform.system", return_value="Linux")
    @patch("installerlib.plumbing.unix.command")
    def test_add(self, command, system):
        result = unix.add_to_group("dd-installer", self.group)
        self.assertEqual(result.state, State.success)
        command.assert_called_once_with(["/usr/sbin/usermod", "-aG", "dd-agent", "dd-installer"])
        self.assertIn("dd-installer", self.group.gr_mem)

    @patch("platform.system", return_value="Linux")
    @patch("installerlib.plumbing.unix.command")
    def test_add_member(self, command, system):
        result = unix.add_to_group("someone", self.group)
        self.assertEqual(result.state, State.unchanged)
        command.assert_not_called()


class TestSymlink(unittest.TestCase):

    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tempdir.cleanup)
        self.link = os.path.join(self.tempdir.name, "link")
        self.target = os.path.join(self.tempdir.name, "target")

    def test_create(self):
        result = unix.symlink(self.link, self.target)
        self.assertEqual(result.state, State.created)
        self.assertEqual(os.readlink(self.link), self.target)

    def test_create_existing(self):
        unix.symlink(self.link, self.target)
        self.assertEqual(unix.symlink(self.link, self.target).state, State.unchanged)

    def test_replace(self):
        os.symlink("/elsewhere", self.link)
        result = unix.symlink(self.link, self.target)
        self.assertEqual(result.state, State.success)
        self.assertEqual(os.readlink(self.link), self.target)

    def test_remove(self):
        unix.symlink(self.link, self.target)
        result = unix.symlink(self.link, self.target, False)
        self.assertEqual(result.state, State.success)
        self.assertFalse(os.path.lexists(self.link))

    def test_remove_missing(self):
        self.assertEqual(unix.symlink(self.link, self.target, False).state, State.unchanged)

    def test_replace_regular_file(self):
        with open(self.link, "w"):
            pass
        result = unix.symlink(self.link, self.target)
        self.assertEqual(result.state, State.success)
        self.assertEqual(os.readlink(self.link), self.target)

    def test_remove_regular_file(self):
        with open(self.link, "w"):
            pass
        result = unix.symlink(self.link, self.target, False)
        self.assertEqual(result.state, State.success)
        self.assertFalse(os.path.lexists(self.link))

    def test_remove_dangling(self):
        os.symlink("/nonexistent", self.link)
        self.assertEqual(unix.symlink(self.link, self.target, False).state, State.success)
        self.assertFalse(os.path.lexists(self.link))


if __name__ == "__main__":
    unittest.main()
