"""
Install-info marker, recording how the agent was installed for other observers (including the
agent itself, which will write its own record if none exists).
"""

import json
import logging
import os
import time
from typing import Any, Dict, Optional
import uuid

import yaml

from .common import Result, State, Unset
from . import paths


LOG = logging.getLogger(__name__)

TOOL = "installer"


def get_install_info(info_path: str = paths.INSTALL_INFO) -> Optional[Dict[str, Any]]:
    """
    Read back the install method record, if one exists.  Empty or malformed files have none.
    """
    try:
        with open(info_path) as info:
            data = yaml.safe_load(info)
    except FileNotFoundError:
        return None
    if not isinstance(data, dict):
        return None
    return data.get("install_method")


def write_install_info(package_type: str, update_method: str,
                       info_path: str = paths.INSTALL_INFO,
                       sig_path: str = paths.INSTALL_SIGNATURE) -> Result[Unset]:
    """
    Record the install method and a fresh installation signature.

    An existing record is left alone, whoever wrote it.
    """
    if os.path.exists(info_path):
        LOG.info("Install info file %r already exists, skipping", info_path)
        return Result(State.unchanged)
    method = {"tool": TOOL,
              "tool_version": package_type,
              "installer_version": update_method}
    with open(info_path, "w") as info:
        yaml.safe_dump({"install_method": method}, info, default_flow_style=False)
    signature = {"install_id": str(uuid.uuid4()),
                 "install_type": update_method,
                 "install_time": int(time.time())}
    with open(sig_path, "w") as sig:
        json.dump(signature, sig)
    return Result(State.created)


def rm_install_info(info_path: str = paths.INSTALL_INFO,
                    sig_path: str = paths.INSTALL_SIGNATURE) -> Result[Unset]:
    """
    Remove the install-info marker.  This never fails: errors are only logged.
    """
    state = State.unchanged
    for path in (info_path, sig_path):
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as ex:
            LOG.warning("Failed to remove %r: %s", path, ex)
        else:
            state = State.success
    return Result(state)
