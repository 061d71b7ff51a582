"""
Systemd unit management.

Units are identified by their file name, e.g. ``datadog-agent.service``.  Unit files are copied
from the installed agent package rather than generated, so their contents are opaque here.
"""

import filecmp
import logging
import os
import shutil

from .common import command, require_system, Result, State, Unset
from . import paths


LOG = logging.getLogger(__name__)

SYSTEMCTL = "/bin/systemctl"

# `is-enabled` states with nothing left for `disable` to undo; empty for an unknown unit.
_NOT_ENABLED = ("", "disabled", "static", "masked")


def _systemctl(*args: str) -> None:
    command([SYSTEMCTL, *args])


def get_active_state(unit: str) -> str:
    """
    Query the activation state of a unit, e.g. ``active``, ``inactive`` or ``failed``.
    """
    # `is-active` exits non-zero for anything but an active unit, so just read its output.
    proc = command([SYSTEMCTL, "is-active", unit], output=True, check=False)
    return proc.stdout.decode("utf-8").strip()


def get_enabled_state(unit: str) -> str:
    """
    Query the enablement state of a unit, e.g. ``enabled`` or ``disabled``.

    Returns an empty string for a unit systemd doesn't know about.
    """
    proc = command([SYSTEMCTL, "is-enabled", unit], output=True, check=False)
    return proc.stdout.decode("utf-8").strip()


def is_active(unit: str) -> bool:
    return get_active_state(unit) in ("active", "activating", "reloading")


@require_system("Linux")
def load_unit(unit: str, source_dir: str = paths.UNIT_SOURCE_DIR,
              unit_dir: str = paths.SYSTEMD_DIR) -> Result[Unset]:
    """
    Install a unit file from the agent package into the systemd unit directory.
    """
    src = os.path.join(source_dir, unit)
    dest = os.path.join(unit_dir, unit)
    if os.path.exists(dest):
        if filecmp.cmp(src, dest, shallow=False):
            return Result(State.unchanged)
        state = State.success
    else:
        state = State.created
    LOG.debug("Copying unit: %r -> %r", src, dest)
    shutil.copyfile(src, dest)
    os.chmod(dest, 0o644)
    return Result(state)


@require_system("Linux")
def remove_unit(unit: str, unit_dir: str = paths.SYSTEMD_DIR) -> Result[Unset]:
    """
    Delete an installed unit file, if present.
    """
    try:
        os.remove(os.path.join(unit_dir, unit))
    except FileNotFoundError:
        return Result(State.unchanged)
    return Result(State.success)


@require_system("Linux")
def reload() -> Result[Unset]:
    """
    Make systemd reread all unit files.
    """
    _systemctl("daemon-reload")
    return Result(State.success)


@require_system("Linux")
def enable_unit(unit: str) -> Result[Unset]:
    if get_enabled_state(unit) == "enabled":
        return Result(State.unchanged)
    _systemctl("enable", unit)
    return Result(State.success)


@require_system("Linux")
def disable_unit(unit: str) -> Result[Unset]:
    """
    Disable a unit.  Units that are not installed are already considered disabled.
    """
    if get_enabled_state(unit) in _NOT_ENABLED:
        return Result(State.unchanged)
    _systemctl("disable", unit)
    return Result(State.success)


@require_system("Linux")
def start_unit(unit: str) -> Result[Unset]:
    """
    Queue a unit start without waiting for the service to come up.
    """
    if is_active(unit):
        return Result(State.unchanged)
    _systemctl("start", unit, "--no-block")
    return Result(State.success)


@require_system("Linux")
def stop_unit(unit: str) -> Result[Unset]:
    """
    Queue a unit stop without waiting for the service to exit.
    """
    if not is_active(unit):
        return Result(State.unchanged)
    _systemctl("stop", unit, "--no-block")
    return Result(State.success)
