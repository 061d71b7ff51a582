"""
Unix group membership and filesystem links.

Most methods identify users and groups by name, and look up the `grp` module structs as needed.
"""

import grp
import logging
import os

from .common import command, require_system, Result, State, Unset


LOG = logging.getLogger(__name__)

Group = grp.struct_group


def get_group(name: str) -> Group:
    """
    Look up an existing group by name.
    """
    return grp.getgrnam(name)


def get_groups(username: str) -> str:
    """
    List the names of all groups a user belongs to, space-separated, as reported by `id -Gn`.
    """
    return command(["/usr/bin/id", "-Gn", username], output=True).stdout.decode("utf-8")


@require_system("Linux")
def add_to_group(username: str, group: Group) -> Result[Unset]:
    """
    Add a user to a secondary group.
    """
    if username in group.gr_mem:
        return Result(State.unchanged)
    command(["/usr/sbin/usermod", "-aG", group.gr_name, username])
    group.gr_mem.append(username)
    return Result(State.success)


def symlink(link: str, target: str, exists: bool = True) -> Result[Unset]:
    """
    Create or replace a symlink at a given path, or remove it if `exists` is false.
    """
    present = os.path.lexists(link)
    current = os.readlink(link) if os.path.islink(link) else None
    if not exists:
        if not present:
            return Result(State.unchanged)
        os.unlink(link)
        return Result(State.success)
    if current == target:
        return Result(State.unchanged)
    if present:
        # Also covers a regular file left in place of the link.
        LOG.debug("Replacing %r (link to %r)", link, current)
        os.unlink(link)
    os.symlink(target, link)
    return Result(State.success if present else State.created)
