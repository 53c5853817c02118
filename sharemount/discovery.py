#!/usr/bin/env python3
"""
GVFS mount point discovery

GVFS creates one directory entry per active connection under its mount
directory. For Windows shares the entry name looks like this:

    smb-share:domain=MYDOMAIN,server=server1,share=data,user=jdoe

There is no documentation for this naming scheme, so any component we do not
recognise aborts discovery instead of being guessed at.
"""

import os
import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

from .errors import PrerequisiteError, SchemaDriftError
from .escaping import unescape

logger = logging.getLogger(__name__)

SMB_SHARE_PREFIX = "smb-share:"

KNOWN_KEYS = ('domain', 'server', 'share', 'user')


@dataclass(frozen=True)
class DiscoveredMount:
    raw_entry_name: str
    domain: str = ''
    server: str = ''
    share: str = ''
    user: str = ''

    @property
    def share_path(self) -> str:
        return f"//{self.server}/{self.share}"


@dataclass(frozen=True)
class DiscoverySnapshot:
    """Point-in-time view of the GVFS mount directory. Never updated in place."""
    mount_dir: str
    mounts: Tuple[DiscoveredMount, ...] = ()

    def __len__(self) -> int:
        return len(self.mounts)

    def __iter__(self) -> Iterator[DiscoveredMount]:
        return iter(self.mounts)

    def __getitem__(self, index: int) -> DiscoveredMount:
        return self.mounts[index]

    def entry_path(self, index: int) -> str:
        """Absolute path of the GVFS directory entry at the given index"""
        return os.path.join(self.mount_dir, self.mounts[index].raw_entry_name)


def parse_entry_name(entry_name: str) -> DiscoveredMount:
    """
    Parse a single 'smb-share:' directory entry name.

    Args:
        entry_name: Directory entry name including the prefix

    Returns:
        DiscoveredMount with the unescaped components
    """
    components = entry_name[len(SMB_SHARE_PREFIX):]
    fields = {}

    for component in components.split(','):
        name, separator, value = component.partition('=')
        if not separator:
            raise SchemaDriftError(
                f"Error parsing GVFS directory entry \"{entry_name}\": "
                f"component \"{component}\" is not a name=value pair. "
                "The GVFS naming scheme has probably changed.")
        if name not in KNOWN_KEYS:
            raise SchemaDriftError(
                f"Error parsing GVFS directory entry \"{entry_name}\": "
                f"unknown component name \"{name}\". "
                "The GVFS naming scheme has probably changed.")
        if name in fields:
            raise SchemaDriftError(
                f"Error parsing GVFS directory entry \"{entry_name}\": "
                f"component name \"{name}\" appears more than once. "
                "The GVFS naming scheme has probably changed.")
        fields[name] = unescape(value)

    return DiscoveredMount(raw_entry_name=entry_name, **fields)


def read_gvfs_mounts(mount_dir: str) -> DiscoverySnapshot:
    """
    Build a fresh snapshot of the SMB shares currently mounted by GVFS.

    A missing mount directory is not an error: GVFS creates it lazily, so it
    just means nothing is mounted yet.

    Args:
        mount_dir: GVFS mount directory, usually /run/user/<uid>/gvfs

    Returns:
        DiscoverySnapshot sorted by entry name
    """
    if not os.path.exists(mount_dir):
        logger.debug(f"GVFS mount directory {mount_dir} does not exist, nothing is mounted")
        return DiscoverySnapshot(mount_dir=mount_dir)

    try:
        entry_names = sorted(os.listdir(mount_dir))
    except OSError as e:
        raise PrerequisiteError(f"Cannot read GVFS mount directory \"{mount_dir}\": {e}") from e

    mounts = []
    for entry_name in entry_names:
        if not entry_name.startswith(SMB_SHARE_PREFIX):
            logger.debug(f"Ignoring GVFS entry {entry_name}")
            continue
        mount = parse_entry_name(entry_name)
        logger.debug(f"Found GVFS mount {mount.share_path} "
                     f"(domain={mount.domain}, user={mount.user})")
        mounts.append(mount)

    return DiscoverySnapshot(mount_dir=mount_dir, mounts=tuple(mounts))
