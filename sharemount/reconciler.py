#!/usr/bin/env python3
"""
Mount and unmount passes over the declared shares

Shares are processed one at a time in declaration order. GVFS is known to
misbehave when several mount operations run at once, so nothing here is
parallel. Every pass starts with a fresh discovery snapshot and takes a new
one after mounting; a snapshot is never reused once the mount state may have
changed.
"""

import logging
from typing import List

from .discovery import DiscoverySnapshot, read_gvfs_mounts
from .errors import MissingMountError
from .gvfsmount import CredentialCache, GvfsMounter, build_uri
from .matcher import find_mount
from .symlinks import ensure_link, remove_link

logger = logging.getLogger(__name__)


class Reconciler:
    """Converges GVFS mounts and their symlinks with the declared mounts"""

    def __init__(self, identity, settings, mounter: GvfsMounter, credentials: CredentialCache):
        self.identity = identity
        self.settings = settings
        self.mounter = mounter
        self.credentials = credentials

    def discover(self) -> DiscoverySnapshot:
        return read_gvfs_mounts(self.settings.mount_dir)

    def _uri(self, mount) -> str:
        return build_uri(self.identity.domain, self.identity.user, mount.server, mount.share)

    def mount_entry(self, number: int, mount, snapshot: DiscoverySnapshot) -> bool:
        """
        Mount a declared share unless the snapshot shows it is already mounted.

        Returns:
            True if the mount tool was invoked
        """
        if find_mount(snapshot, self.identity, mount.server, mount.share) is not None:
            print(f"{number}: Already mounted: {mount.share_path}")
            return False

        print(f"{number}: Mounting: {mount.share_path}")
        password = self.credentials.get()
        self.mounter.mount(self._uri(mount), password)
        logger.debug(f"Mount tool finished for {mount.share_path}")
        return True

    def link_entry(self, number: int, mount, snapshot: DiscoverySnapshot):
        found = find_mount(snapshot, self.identity, mount.server, mount.share)
        if found is None:
            raise MissingMountError(
                f"The directory entry for share \"{mount.share_path}\" was not found in GVFS mount directory "
                f"\"{snapshot.mount_dir}\". Check that gvfs-backends and gvfs-fuse are installed.")
        return ensure_link(number, mount.link_path, snapshot.entry_path(found), mount.share_path)

    def unmount_entry(self, number: int, mount, snapshot: DiscoverySnapshot) -> bool:
        """
        Remove the link of a mounted share and unmount it.

        A share that is not mounted is left alone, including any dangling link
        it may have left behind: without a GVFS entry there is nothing to check
        the link target against.

        Returns:
            True if the unmount tool was invoked
        """
        found = find_mount(snapshot, self.identity, mount.server, mount.share)
        if found is None:
            print(f"{number}: \"{mount.share_path}\" was not mounted.")
            return False

        remove_link(number, mount.link_path, snapshot.entry_path(found), mount.share_path)

        print(f"{number}: Unmounting \"{mount.share_path}\"...")
        self.mounter.unmount(self._uri(mount))
        return True

    def mount_all(self, mounts: List) -> None:
        print("Mounting...")
        snapshot = self.discover()
        for number, mount in enumerate(mounts, start=1):
            self.mount_entry(number, mount, snapshot)

        print("Creating symbolic links...")
        snapshot = self.discover()
        for number, mount in enumerate(mounts, start=1):
            self.link_entry(number, mount, snapshot)

        print("Finished mounting and creating symbolic links.")

    def unmount_all(self, mounts: List) -> None:
        print("Unmounting...")
        snapshot = self.discover()
        for number, mount in enumerate(mounts, start=1):
            self.unmount_entry(number, mount, snapshot)

        print("Finished unmounting.")
