"""
Privileged helper protocol.

The installer runs unprivileged, and asks a separate helper executable to perform actions that
need elevated rights.  Each request is a JSON object passed as the helper's only argument:

    {"command": "systemd-start", "unit": "datadog-agent.service"}

On success, the helper prints the resulting state, e.g. ``{"state": "success"}``, and exits zero.
"""

from enum import Enum
import json
import logging
import os.path
from typing import Callable, Dict, NamedTuple, Optional

from .common import command, Result, State, Unset
from . import paths, systemd, unix


LOG = logging.getLogger(__name__)


class HelperAction(Enum):
    """
    Actions understood by the helper.
    """

    load_unit = "load-unit"
    remove_unit = "remove-unit"
    enable_unit = "systemd-enable"
    disable_unit = "systemd-disable"
    start_unit = "systemd-start"
    stop_unit = "systemd-stop"
    reload = "systemd-reload"
    create_agent_symlink = "create-agent-symlink"
    rm_agent_symlink = "rm-agent-symlink"
    add_installer_to_agent_group = "add-installer-to-agent-group"

    @property
    def takes_unit(self) -> bool:
        return self in _UNIT_ACTIONS


_UNIT_ACTIONS = {HelperAction.load_unit, HelperAction.remove_unit, HelperAction.enable_unit,
                 HelperAction.disable_unit, HelperAction.start_unit, HelperAction.stop_unit}


class HelperCommand(NamedTuple):
    """
    Single request to the helper, optionally targeting one unit.
    """

    action: HelperAction
    unit: Optional[str] = None

    def validate(self) -> None:
        """
        Raise `ValueError` if this request is malformed.
        """
        if not self.action.takes_unit:
            if self.unit is not None:
                raise ValueError("{} doesn't take a unit".format(self.action.value))
            return
        if not self.unit:
            raise ValueError("{} requires a unit".format(self.action.value))
        if not isinstance(self.unit, str):
            raise ValueError("Bad unit name {!r}".format(self.unit))
        # Unit names are joined onto directory paths by the helper.
        if os.path.basename(self.unit) != self.unit or not self.unit.endswith(".service"):
            raise ValueError("Bad unit name {!r}".format(self.unit))

    def to_json(self) -> str:
        self.validate()
        data = {"command": self.action.value}
        if self.unit is not None:
            data["unit"] = self.unit
        return json.dumps(data)

    @classmethod
    def from_json(cls, raw: str) -> "HelperCommand":
        data = json.loads(raw)
        if not isinstance(data, dict) or set(data) - {"command", "unit"}:
            raise ValueError("Bad helper request: {!r}".format(raw))
        try:
            action = HelperAction(data.get("command"))
        except ValueError:
            raise ValueError("Unknown helper command: {!r}".format(data.get("command")))
        cmd = cls(action, data.get("unit"))
        cmd.validate()
        return cmd


def execute_helper_command(cmd: HelperCommand, helper: str = paths.HELPER) -> Result[Unset]:
    """
    Run a request through the helper executable, and report the state it returned.
    """
    proc = command([helper, cmd.to_json()], output=True)
    # Commands run by the helper may write to the same stdout, the reply always comes last.
    reply = json.loads(proc.stdout.decode("utf-8").strip().splitlines()[-1])
    return Result(State[reply["state"]])


def _add_installer_to_agent_group() -> Result[Unset]:
    return unix.add_to_group(paths.INSTALLER_USER, unix.get_group(paths.AGENT_GROUP))


def _create_agent_symlink() -> Result[Unset]:
    return unix.symlink(paths.AGENT_SYMLINK, paths.AGENT_BINARY)


def _rm_agent_symlink() -> Result[Unset]:
    return unix.symlink(paths.AGENT_SYMLINK, paths.AGENT_BINARY, False)


_UNIT_HANDLERS: Dict[HelperAction, Callable[[str], Result[Unset]]] = {
    HelperAction.load_unit: systemd.load_unit,
    HelperAction.remove_unit: systemd.remove_unit,
    HelperAction.enable_unit: systemd.enable_unit,
    HelperAction.disable_unit: systemd.disable_unit,
    HelperAction.start_unit: systemd.start_unit,
    HelperAction.stop_unit: systemd.stop_unit,
}

_HANDLERS: Dict[HelperAction, Callable[[], Result[Unset]]] = {
    HelperAction.reload: systemd.reload,
    HelperAction.create_agent_symlink: _create_agent_symlink,
    HelperAction.rm_agent_symlink: _rm_agent_symlink,
    HelperAction.add_installer_to_agent_group: _add_installer_to_agent_group,
}


def run(cmd: HelperCommand) -> Result[Unset]:
    """
    Perform a helper request on this host.  Only the helper itself should call this.
    """
    cmd.validate()
    LOG.debug("Helper request: %r", cmd)
    if cmd.action.takes_unit:
        return _UNIT_HANDLERS[cmd.action](cmd.unit)
    else:
        return _HANDLERS[cmd.action]()
