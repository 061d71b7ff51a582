"""
Installation and removal of the agent's service units.

Every task here acts on a whole `UnitSet`, strictly in order, and stops at the first failure.
"""

import logging
from typing import Iterator, Optional

from ..host import Host
from ..plumbing import paths
from ..plumbing.common import (Collect, Context, InstallerError, Result, State, UnitError,
                               Unset)
from ..plumbing.helper import HelperAction, HelperCommand
from ..units import Channel, DEFAULT_UNITS, Subcomponent, Unit, UnitSet


LOG = logging.getLogger(__name__)

PACKAGE_TYPE = "installer_package"
UPDATE_METHOD = "manual_update"


class SetupError(InstallerError):
    """
    Failure to set up the agent, raised once any partial installation has been reverted.

    `error` holds the original failure.  If reverting failed too, `rollback_error` holds that
    failure, and the host may be left partially installed.
    """

    def __init__(self, error: Exception, rollback_error: Optional[Exception] = None):
        msg = "Failed to setup agent: {}".format(error)
        if rollback_error:
            msg = "{} (revert also failed: {})".format(msg, rollback_error)
        super().__init__(msg)
        self.error = error
        self.rollback_error = rollback_error


def _unit_action(host: Host, ctx: Context, action: str, unit: Unit) -> Result[Unset]:
    ctx.check()
    fn = getattr(host, "{}_unit".format(action))
    try:
        return fn(unit.name)
    except Exception as ex:
        raise UnitError(unit.name, action, ex) from ex


def ensure_installer_in_agent_group(host: Host, ctx: Optional[Context] = None) -> Result[Unset]:
    """
    Add the installer user to the agent group, which it needs before any unit can be loaded.
    """
    if ctx is None:
        ctx = Context()
    ctx.check()
    groups = host.get_groups(paths.INSTALLER_USER)
    if paths.AGENT_GROUP in groups:
        return Result(State.unchanged)
    ctx.check()
    return host.execute_helper_command(HelperCommand(HelperAction.add_installer_to_agent_group))


def _setup_steps(host: Host, units: UnitSet, ctx: Context) -> Iterator[Result[Unset]]:
    yield ensure_installer_in_agent_group(host, ctx)
    # Systemd should see every unit before being asked to resolve any of them.
    for unit in units.stable:
        yield _unit_action(host, ctx, "load", unit)
    for unit in units.experimental:
        yield _unit_action(host, ctx, "load", unit)
    ctx.check()
    yield host.reload()
    for unit in units.stable:
        yield _unit_action(host, ctx, "enable", unit)
    for unit in units.stable:
        yield _unit_action(host, ctx, "start", unit)
    ctx.check()
    yield host.create_agent_symlink()
    # The marker signals a completed installation, so it must follow the running units.
    ctx.check()
    yield host.write_install_info(PACKAGE_TYPE, UPDATE_METHOD)


@Result.collect
def setup_agent(host: Host, units: UnitSet = DEFAULT_UNITS,
                ctx: Optional[Context] = None) -> Collect[None]:
    """
    Install and start the stable agent units, and load (but don't start) the experimental ones.

    On failure, the whole unit set is removed again with `remove_agent`, and a `SetupError` is
    raised for the original failure.
    """
    if ctx is None:
        ctx = Context()
    try:
        yield from _setup_steps(host, units, ctx)
    except Exception as ex:
        LOG.error("Failed to setup agent: %s, reverting", ex)
        rollback_error = None
        try:
            # Revert even if the caller has given up on the setup.
            remove_agent(host, units, Context())
        except Exception as rollback_ex:
            LOG.warning("Failed to revert agent setup: %s", rollback_ex)
            rollback_error = rollback_ex
        raise SetupError(ex, rollback_error) from ex


@Result.collect
def remove_agent(host: Host, units: UnitSet = DEFAULT_UNITS,
                 ctx: Optional[Context] = None) -> Collect[None]:
    """
    Stop and remove all agent units, the agent symlink and the install-info marker.

    This is also used to revert a failed setup, so copes with any partially installed state.
    """
    if ctx is None:
        ctx = Context()
    # Stop experiments first, as they can restart the stable agent.
    for unit in units.experimental:
        yield _unit_action(host, ctx, "stop", unit)
    for unit in units.stable:
        yield _unit_action(host, ctx, "stop", unit)
    for unit in units.experimental + units.stable:
        yield _unit_action(host, ctx, "disable", unit)
        yield _unit_action(host, ctx, "remove", unit)
    ctx.check()
    try:
        yield host.remove_agent_symlink()
    except Exception as ex:
        raise InstallerError("Failed to remove agent symlink: {}".format(ex)) from ex
    ctx.check()
    yield host.remove_install_info()


@Result.collect
def start_agent_experiment(host: Host, units: UnitSet = DEFAULT_UNITS,
                           ctx: Optional[Context] = None) -> Collect[None]:
    """
    Start the experimental main agent.
    """
    if ctx is None:
        ctx = Context()
    yield _unit_action(host, ctx, "start", units.get(Subcomponent.main, Channel.experimental))


@Result.collect
def stop_agent_experiment(host: Host, units: UnitSet = DEFAULT_UNITS,
                          ctx: Optional[Context] = None) -> Collect[None]:
    """
    Stop the experimental main agent, and bring the stable main agent back up.
    """
    if ctx is None:
        ctx = Context()
    yield _unit_action(host, ctx, "stop", units.get(Subcomponent.main, Channel.experimental))
    yield _unit_action(host, ctx, "start", units.get(Subcomponent.main))
