#!/usr/bin/env python3
"""
Read-only status report of the declared mounts
"""

import logging
from typing import Any, Dict, List

from .discovery import read_gvfs_mounts
from .errors import ShareMountError
from .matcher import find_mount
from .symlinks import link_state

logger = logging.getLogger(__name__)


def describe_mounts(identity, settings, mounts) -> List[Dict[str, Any]]:
    """
    Report mount and link state for every declared mount without changing anything.

    Discovery errors propagate. Errors that only concern a single entry
    (identity conflict, unreadable link) are reported in its 'error' field.

    Args:
        identity: Configured Identity
        settings: Settings with the GVFS mount directory
        mounts: Declared mounts

    Returns:
        List of dictionaries, one per declared mount
    """
    snapshot = read_gvfs_mounts(settings.mount_dir)
    report = []

    for number, mount in enumerate(mounts, start=1):
        entry = {
            'id': number,
            'server': mount.server,
            'share': mount.share,
            'share_path': mount.share_path,
            'link_path': mount.link_path,
            'mounted': False,
            'entry': None,
            'link_state': None,
            'error': None,
        }

        try:
            found = find_mount(snapshot, identity, mount.server, mount.share)
            if found is not None:
                entry['mounted'] = True
                entry['entry'] = snapshot[found].raw_entry_name
                entry['link_state'] = link_state(mount.link_path, snapshot.entry_path(found)).value
        except ShareMountError as e:
            logger.debug(f"Status of {mount.share_path}: {e}")
            entry['error'] = str(e)

        report.append(entry)

    return report


def describe_snapshot(settings) -> List[Dict[str, str]]:
    snapshot = read_gvfs_mounts(settings.mount_dir)
    return [
        {
            'entry': mount.raw_entry_name,
            'domain': mount.domain,
            'server': mount.server,
            'share': mount.share,
            'user': mount.user,
        }
        for mount in snapshot
    ]
