"""
Privileged side of the helper protocol.
"""

import json

from .utils import DocOptArgs, entrypoint, error
from ..plumbing import helper


@entrypoint
def run(opts: DocOptArgs):
    """
    Perform a single privileged action requested by the installer.

    Usage: {script} REQUEST

    REQUEST is a JSON object, e.g. '{{"command": "systemd-reload"}}'.
    """
    try:
        cmd = helper.HelperCommand.from_json(opts["REQUEST"])
    except ValueError as ex:
        error(str(ex), exit=2)
    result = helper.run(cmd)
    print(json.dumps({"state": result.state.name}))
    return result
