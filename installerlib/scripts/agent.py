"""
Scripts to install and remove the agent.
"""

import logging

from .utils import confirm, DocOptArgs, entrypoint, error
from ..host import Host
from ..plumbing import installinfo
from ..plumbing.common import Context
from ..tasks import agent
from ..units import UnitSet


LOG = logging.getLogger(__name__)


@entrypoint
def setup(host: Host, units: UnitSet, ctx: Context):
    """
    Install the agent units, and start the stable agent.

    Usage: {script}

    If any step fails, everything installed so far is removed again.
    """
    result = agent.setup_agent(host, units, ctx)
    LOG.debug("%s", result)
    return result


@entrypoint
def remove(opts: DocOptArgs, host: Host, units: UnitSet, ctx: Context):
    """
    Stop the agent, and remove all of its units.

    Usage: {script} [--yes]
    """
    if not opts["--yes"]:
        confirm("Remove the agent?")
    result = agent.remove_agent(host, units, ctx)
    LOG.debug("%s", result)
    return result


@entrypoint
def start_experiment(host: Host, units: UnitSet, ctx: Context):
    """
    Start the experimental agent.

    Usage: {script}
    """
    return agent.start_agent_experiment(host, units, ctx)


@entrypoint
def stop_experiment(host: Host, units: UnitSet, ctx: Context):
    """
    Stop the experimental agent, and restart the stable agent.

    Usage: {script}
    """
    return agent.stop_agent_experiment(host, units, ctx)


@entrypoint
def info():
    """
    Show how the agent was installed.

    Usage: {script}
    """
    method = installinfo.get_install_info()
    if not method:
        error("No install info found", exit=1)
    for key, value in sorted(method.items()):
        print("{}: {}".format(key, value))
    return method
