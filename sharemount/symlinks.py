#!/usr/bin/env python3
"""
User-facing symbolic links to GVFS mount points

The GVFS entry names are unreadable, so every declared share gets a link of
its own. Links are only ever created, rewritten or removed when they are
symbolic links we can account for; anything else at the link path aborts.
"""

import os
import enum
import logging

from .errors import LinkConflictError

logger = logging.getLogger(__name__)


class LinkState(enum.Enum):
    ABSENT = "absent"
    CORRECT = "symlink-correct"
    STALE = "symlink-stale"
    OCCUPIED = "occupied-by-other"


def read_link_target(link_path: str) -> str:
    """
    Read a symlink target without resolving it.

    'readlink -f' style resolution would touch the remote server, which often
    fails with an I/O error right after mounting, so only the raw target is read.
    """
    try:
        target = os.readlink(link_path)
    except OSError as e:
        raise LinkConflictError(f"Cannot read the target for symbolic link \"{link_path}\": {e}") from e

    if not target:
        raise LinkConflictError(f"Cannot read the target for symbolic link \"{link_path}\", the target is empty.")
    return target


def link_state(link_path: str, expected_target: str) -> LinkState:
    if os.path.islink(link_path):
        if read_link_target(link_path) == expected_target:
            return LinkState.CORRECT
        return LinkState.STALE
    if os.path.lexists(link_path):
        return LinkState.OCCUPIED
    return LinkState.ABSENT


def ensure_link(number: int, link_path: str, expected_target: str, share_path: str) -> LinkState:
    """
    Make link_path a symbolic link to expected_target.

    Args:
        number: Position of the mount in the declared list, for progress output
        link_path: Declared link path
        expected_target: GVFS entry path the link must point to
        share_path: //server/share, for progress output

    Returns:
        The LinkState found before any change was made
    """
    state = link_state(link_path, expected_target)

    if state is LinkState.CORRECT:
        print(f"{number}: \"{link_path}\" -> \"{share_path}\" (symlink already existed)")

    elif state is LinkState.STALE:
        print(f"{number}: \"{link_path}\" -> \"{share_path}\" (rewriting symlink)")
        logger.debug(f"Replacing link {link_path}, it pointed to {read_link_target(link_path)}")
        os.remove(link_path)
        os.symlink(expected_target, link_path)

    elif state is LinkState.OCCUPIED:
        raise LinkConflictError(
            f"Error creating symbolic link for share \"{share_path}\": "
            f"File \"{link_path}\" exists but is not a symbolic link. I am not sure whether I should delete it.")

    else:
        print(f"{number}: \"{link_path}\" -> \"{share_path}\" (creating symlink)")
        os.symlink(expected_target, link_path)

    return state


def remove_link(number: int, link_path: str, expected_target: str, share_path: str) -> LinkState:
    """
    Delete the link for a share that is about to be unmounted.

    The link is only removed when it points exactly at the expected GVFS entry.
    """
    state = link_state(link_path, expected_target)

    if state is LinkState.CORRECT:
        print(f"{number}: Deleting symbolic link \"{link_path}\" -> \"{share_path}\"...")
        os.remove(link_path)

    elif state is LinkState.STALE:
        raise LinkConflictError(
            f"Error deleting symbolic link for share \"{share_path}\": "
            f"Symlink \"{link_path}\" is pointing to an unexpected location. I am not sure whether I should delete it.")

    elif state is LinkState.OCCUPIED:
        raise LinkConflictError(
            f"Error deleting symbolic link for share \"{share_path}\": "
            f"File \"{link_path}\" exists but is not a symbolic link.")

    return state
