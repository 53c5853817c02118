#!/usr/bin/env python3
"""
mount-windows-shares

With no arguments, mounts all declared Windows shares through GVFS and
creates a symbolic link for each of them. With the single argument "unmount"
(or "umount"), removes the links and unmounts the shares.

Already mounted shares are skipped, so if something fails (for example
"device is busy"), simply running the command again eventually works.
The Windows password is asked for once per run and never stored.
"""

import os
import sys
import logging

from .configdb import ConfigDB
from .errors import ShareMountError
from .gvfsmount import CredentialCache, GvfsMounter, check_not_root
from .logsetup import setup_logging
from .mountconfig import read_identity, read_mount_config, read_settings
from .reconciler import Reconciler

logger = logging.getLogger(__name__)

UNMOUNT_ARGUMENTS = ("unmount", "umount")


def parse_arguments(argv, prog):
    """
    Decide between the mount and the unmount pass.

    Returns:
        True for the mount pass, False for the unmount pass
    """
    if not argv:
        return True
    if len(argv) == 1 and argv[0] in UNMOUNT_ARGUMENTS:
        return False

    if len(argv) == 1:
        message = f"Wrong argument \"{argv[0]}\", only optional argument \"unmount\" (or \"umount\") is valid."
    else:
        message = "Invalid arguments, only one optional argument \"unmount\" (or \"umount\") is valid."
    raise ValueError(f"usage: {prog} [unmount|umount]\n{message}")


def run(should_mount, db=None, prompt=None):
    """
    Load the configuration, check prerequisites and run one pass.

    Args:
        should_mount: True for the mount pass, False for the unmount pass
        db: ConfigDB to read from (default: the user's configuration database)
        prompt: Password prompt callable (default: getpass)
    """
    db = db or ConfigDB()
    identity = read_identity(db)
    mounts = read_mount_config(db)
    settings = read_settings(db)

    if settings.verbose:
        setup_logging(verbose=True)

    check_not_root()
    mounter = GvfsMounter(settings.tool, settings.timeout)
    mounter.check_available()

    credentials = CredentialCache(prompt=prompt, hint=mounter.password_hint())
    reconciler = Reconciler(identity, settings, mounter, credentials)

    if should_mount:
        reconciler.mount_all(mounts)
    else:
        reconciler.unmount_all(mounts)


def main(argv=None):
    """Main function to run when script is executed directly."""
    prog = os.path.basename(sys.argv[0]) or "mount-windows-shares"
    if argv is None:
        argv = sys.argv[1:]

    setup_logging()

    try:
        should_mount = parse_arguments(argv, prog)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        run(should_mount)
    except KeyboardInterrupt:
        logger.error(f"\n{prog}: interrupted")
        return 130
    except (ShareMountError, OSError) as e:
        logger.error(f"\nError in {prog}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
