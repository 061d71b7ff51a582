"""
Host capabilities used by installer tasks.

Tasks never touch the host directly: they are given a `Host`, whose actions follow the same rules
as plumbing (idempotent, return a `Result`, raise on failure).  `HelperHost` is the real
implementation, delegating privileged actions to the helper executable.
"""

from .plumbing import helper, installinfo, paths, unix
from .plumbing.common import Result, Unset
from .plumbing.helper import HelperAction, HelperCommand


class Host:
    """
    Interface of the actions available to installer tasks.
    """

    def load_unit(self, unit: str) -> Result[Unset]:
        raise NotImplementedError

    def enable_unit(self, unit: str) -> Result[Unset]:
        raise NotImplementedError

    def start_unit(self, unit: str) -> Result[Unset]:
        raise NotImplementedError

    def stop_unit(self, unit: str) -> Result[Unset]:
        raise NotImplementedError

    def disable_unit(self, unit: str) -> Result[Unset]:
        raise NotImplementedError

    def remove_unit(self, unit: str) -> Result[Unset]:
        raise NotImplementedError

    def reload(self) -> Result[Unset]:
        """
        Reload the service manager's configuration, picking up any loaded or removed units.
        """
        raise NotImplementedError

    def create_agent_symlink(self) -> Result[Unset]:
        raise NotImplementedError

    def remove_agent_symlink(self) -> Result[Unset]:
        raise NotImplementedError

    def execute_helper_command(self, cmd: HelperCommand) -> Result[Unset]:
        raise NotImplementedError

    def write_install_info(self, package_type: str, update_method: str) -> Result[Unset]:
        raise NotImplementedError

    def remove_install_info(self) -> Result[Unset]:
        """
        Clear the install-info marker.  Implementations must not raise.
        """
        raise NotImplementedError

    def get_groups(self, username: str) -> str:
        """
        Return the group memberships of a user as text, as printed by `id -Gn`.
        """
        raise NotImplementedError


class HelperHost(Host):
    """
    The local host, with privileged actions performed by the helper executable.
    """

    def __init__(self, helper_path: str = paths.HELPER, info_path: str = paths.INSTALL_INFO,
                 sig_path: str = paths.INSTALL_SIGNATURE):
        self.helper_path = helper_path
        self.info_path = info_path
        self.sig_path = sig_path

    def __repr__(self):
        return "<{}: {}>".format(self.__class__.__name__, self.helper_path)

    def execute_helper_command(self, cmd: HelperCommand) -> Result[Unset]:
        return helper.execute_helper_command(cmd, self.helper_path)

    def _unit(self, action: HelperAction, unit: str) -> Result[Unset]:
        return self.execute_helper_command(HelperCommand(action, unit))

    def load_unit(self, unit: str) -> Result[Unset]:
        return self._unit(HelperAction.load_unit, unit)

    def enable_unit(self, unit: str) -> Result[Unset]:
        return self._unit(HelperAction.enable_unit, unit)

    def start_unit(self, unit: str) -> Result[Unset]:
        return self._unit(HelperAction.start_unit, unit)

    def stop_unit(self, unit: str) -> Result[Unset]:
        return self._unit(HelperAction.stop_unit, unit)

    def disable_unit(self, unit: str) -> Result[Unset]:
        return self._unit(HelperAction.disable_unit, unit)

    def remove_unit(self, unit: str) -> Result[Unset]:
        return self._unit(HelperAction.remove_unit, unit)

    def reload(self) -> Result[Unset]:
        return self.execute_helper_command(HelperCommand(HelperAction.reload))

    def create_agent_symlink(self) -> Result[Unset]:
        return self.execute_helper_command(HelperCommand(HelperAction.create_agent_symlink))

    def remove_agent_symlink(self) -> Result[Unset]:
        return self.execute_helper_command(HelperCommand(HelperAction.rm_agent_symlink))

    def write_install_info(self, package_type: str, update_method: str) -> Result[Unset]:
        return installinfo.write_install_info(package_type, update_method,
                                              self.info_path, self.sig_path)

    def remove_install_info(self) -> Result[Unset]:
        return installinfo.rm_install_info(self.info_path, self.sig_path)

    def get_groups(self, username: str) -> str:
        return unix.get_groups(username)
