#!/usr/bin/env python3
"""
Declared mounts, Windows identity and settings

All of them are stored in the ConfigDB. Mounts use numbered keys in
declaration order:

    sharemount.1.server = Server1
    sharemount.1.share = ShareName1
    sharemount.1.link = ~/NetworkShares/ShareName1
    sharemount.1.options = rw
"""

import os
import sys
import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional

from .configdb import ConfigDB
from .errors import ConfigurationError, ShareMountError
from .gvfsmount import DEFAULT_MOUNT_TOOL, MOUNT_TOOLS
from .logsetup import setup_logging
from .matcher import ascii_equal_no_case
from .status import describe_mounts

logger = logging.getLogger(__name__)

MOUNT_PREFIX = "sharemount"
MOUNT_FIELDS = ('server', 'share', 'link', 'options')

IDENTITY_DOMAIN_KEY = "identity.domain"
IDENTITY_USER_KEY = "identity.user"

MOUNT_DIR_KEY = "gvfs.mountdir"
TOOL_KEY = "gvfs.tool"
TIMEOUT_KEY = "gvfs.timeout"
VERBOSE_KEY = "log.verbose"

SETTINGS_KEYS = (MOUNT_DIR_KEY, TOOL_KEY, TIMEOUT_KEY, VERBOSE_KEY)

# gvfs-mount offers no way to pass mount options
SUPPORTED_OPTIONS = ("rw",)

DEFAULT_LINK_DIR = "~/NetworkShares"


def default_mount_dir() -> str:
    return f"/run/user/{os.getuid()}/gvfs"


@dataclass(frozen=True)
class DeclaredMount:
    server: str
    share: str
    link_path: str
    options: str = "rw"

    def __post_init__(self):
        if not self.server:
            raise ConfigurationError("A declared mount has an empty server name.")
        if not self.share:
            raise ConfigurationError(f"Declared mount for server \"{self.server}\" has an empty share name.")
        if not self.link_path:
            raise ConfigurationError(f"Declared mount \"{self.share_path}\" has an empty link path.")

        # A trailing slash would break the comparison with mounted shares
        if self.share.endswith('/'):
            raise ConfigurationError(
                f"Windows share paths must not end with a slash (/) character. The path was: {self.share}")
        if self.link_path.endswith('/'):
            raise ConfigurationError(
                f"Link paths must not end with a slash (/) character. The path was: {self.link_path}")

        if self.options not in SUPPORTED_OPTIONS:
            raise ConfigurationError(
                f"Invalid options of \"{self.options}\" specified for Windows share \"{self.share_path}\". "
                "There is no way to pass mount options to GVFS, therefore only option \"rw\" is allowed.")

    @property
    def share_path(self) -> str:
        return f"//{self.server}/{self.share}"


@dataclass(frozen=True)
class Identity:
    domain: str
    user: str

    def __post_init__(self):
        if not self.domain or not self.user:
            raise ConfigurationError(
                "The Windows domain and user name are not configured. "
                "Use 'sharemount-config --set-identity --domain DOMAIN --user USER'.")


@dataclass(frozen=True)
class Settings:
    mount_dir: str
    tool: str = DEFAULT_MOUNT_TOOL
    timeout: Optional[float] = None
    verbose: bool = False


def read_mount_config(db: ConfigDB) -> List[DeclaredMount]:
    """
    Read the declared mounts in declaration order.

    Args:
        db: Configuration database

    Returns:
        List of validated DeclaredMount objects
    """
    mounts = []
    index = 1

    while True:
        prefix = f"{MOUNT_PREFIX}.{index}"
        server = db.get(f"{prefix}.server")
        if server is None:
            break

        link = db.get(f"{prefix}.link", "")
        mounts.append(DeclaredMount(
            server=server,
            share=db.get(f"{prefix}.share", ""),
            link_path=os.path.expanduser(link) if link else "",
            options=db.get(f"{prefix}.options", "rw"),
        ))
        index += 1

    logger.debug(f"Read {len(mounts)} mount configurations from configdb")
    return mounts


def _write_mount(db: ConfigDB, index: int, values: dict) -> None:
    prefix = f"{MOUNT_PREFIX}.{index}"
    for field in MOUNT_FIELDS:
        db.set(f"{prefix}.{field}", values[field])


def _raw_mounts(db: ConfigDB) -> List[dict]:
    """Stored mount rows without validation or ~ expansion"""
    rows = []
    index = 1
    while db.get(f"{MOUNT_PREFIX}.{index}.server") is not None:
        prefix = f"{MOUNT_PREFIX}.{index}"
        rows.append({field: db.get(f"{prefix}.{field}", "") for field in MOUNT_FIELDS})
        index += 1
    return rows


def add_mount_config(db: ConfigDB, server: str, share: str, link: Optional[str] = None,
                     options: str = "rw") -> DeclaredMount:
    """
    Append a mount to the declared list.

    Args:
        db: Configuration database
        server: Server name
        share: Share name
        link: Link path (default: ~/NetworkShares/<share>)
        options: Mount options, only "rw" is accepted

    Returns:
        The new DeclaredMount
    """
    if not link:
        link = f"{DEFAULT_LINK_DIR}/{share}"

    # Validate before touching the database
    mount = DeclaredMount(server=server, share=share, link_path=os.path.expanduser(link), options=options)

    rows = _raw_mounts(db)
    for row in rows:
        if ascii_equal_no_case(row['server'], server) and ascii_equal_no_case(row['share'], share):
            raise ConfigurationError(f"Mount configuration for {mount.share_path} already exists")

    _write_mount(db, len(rows) + 1, {'server': server, 'share': share, 'link': link, 'options': options})
    logger.debug(f"Added mount configuration {len(rows) + 1} for {mount.share_path}")
    return mount


def remove_mount_config(db: ConfigDB, server: str, share: str) -> None:
    """Remove a declared mount and renumber the remaining ones"""
    rows = _raw_mounts(db)
    remaining = [row for row in rows
                 if not (ascii_equal_no_case(row['server'], server) and ascii_equal_no_case(row['share'], share))]

    if len(remaining) == len(rows):
        raise ConfigurationError(f"Mount configuration for //{server}/{share} not found")

    for index, row in enumerate(remaining, start=1):
        _write_mount(db, index, row)

    for index in range(len(remaining) + 1, len(rows) + 1):
        for field in MOUNT_FIELDS:
            db.delete(f"{MOUNT_PREFIX}.{index}.{field}")

    logger.debug(f"Removed mount configuration for //{server}/{share}")


def read_identity(db: ConfigDB) -> Identity:
    return Identity(domain=db.get(IDENTITY_DOMAIN_KEY, ""), user=db.get(IDENTITY_USER_KEY, ""))


def set_identity(db: ConfigDB, domain: str, user: str) -> Identity:
    identity = Identity(domain=domain, user=user)
    db.set(IDENTITY_DOMAIN_KEY, domain)
    db.set(IDENTITY_USER_KEY, user)
    return identity


def read_settings(db: ConfigDB) -> Settings:
    tool = db.get(TOOL_KEY) or DEFAULT_MOUNT_TOOL
    if tool not in MOUNT_TOOLS:
        raise ConfigurationError(
            f"Invalid value \"{tool}\" for {TOOL_KEY}, valid tools are: {', '.join(sorted(MOUNT_TOOLS))}")

    timeout = db.get(TIMEOUT_KEY)
    if timeout:
        try:
            timeout = float(timeout)
        except ValueError:
            raise ConfigurationError(f"Invalid value \"{timeout}\" for {TIMEOUT_KEY}, expected seconds")
        if timeout <= 0:
            raise ConfigurationError(f"{TIMEOUT_KEY} must be positive")
    else:
        timeout = None

    return Settings(
        mount_dir=db.get(MOUNT_DIR_KEY) or default_mount_dir(),
        tool=tool,
        timeout=timeout,
        verbose=(db.get(VERBOSE_KEY, "") or "").lower() in ("1", "true", "yes", "on"),
    )


def set_setting(db: ConfigDB, key: str, value: str) -> None:
    if key not in SETTINGS_KEYS:
        raise ConfigurationError(f"Unknown setting \"{key}\", valid settings are: {', '.join(SETTINGS_KEYS)}")
    previous = db.get(key)
    db.set(key, value)
    # Parse everything once so an invalid value is rejected right away
    try:
        read_settings(db)
    except ConfigurationError:
        if previous is None:
            db.delete(key)
        else:
            db.set(key, previous)
        raise


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Manage the Windows shares mounted by mount-windows-shares')

    command_group = parser.add_mutually_exclusive_group(required=True)
    command_group.add_argument('--add-mount', action='store_true',
                               help='Add a share (requires --server and --share)')
    command_group.add_argument('--remove-mount', action='store_true',
                               help='Remove a share (requires --server and --share)')
    command_group.add_argument('--list-mounts', action='store_true',
                               help='List all declared shares with their mount and link status')
    command_group.add_argument('--set-identity', action='store_true',
                               help='Set the Windows account (requires --domain and --user)')
    command_group.add_argument('--set', nargs=2, metavar=('KEY', 'VALUE'),
                               help=f"Change a setting ({', '.join(SETTINGS_KEYS)})")

    parser.add_argument('--server', help='Windows server name')
    parser.add_argument('--share', help='Windows share name')
    parser.add_argument('--link', help=f'Symbolic link path (default: {DEFAULT_LINK_DIR}/<share>)')
    parser.add_argument('--options', default='rw', help='Mount options, only "rw" is supported')
    parser.add_argument('--domain', help='Windows domain')
    parser.add_argument('--user', help='Windows user name')

    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument('-v', '--verbose', action='store_true',
                                 help='Enable verbose output')
    verbosity_group.add_argument('-q', '--quiet', action='store_true',
                                 help='Suppress all output except warnings and errors')

    return parser.parse_args(argv)


def print_status(report: List[dict]) -> None:
    if not report:
        logger.warning("No mount configurations found in configdb")
        return

    for entry in report:
        status_text = "MOUNTED" if entry['mounted'] else "UNMOUNTED"
        line = f"[{entry['id']}] [{status_text}] {entry['share_path']} -> {entry['link_path']} (link: {entry['link_state']})"
        if entry.get('error'):
            line += f" ERROR: {entry['error']}"
        print(line)


def main(argv=None):
    """Main function to run when script is executed directly."""
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.quiet)

    try:
        db = ConfigDB()

        if args.add_mount:
            if not args.server or not args.share:
                logger.error("--add-mount requires --server and --share")
                return 1
            mount = add_mount_config(db, args.server, args.share, args.link, args.options)
            logger.info(f"Added {mount.share_path} -> {mount.link_path}")

        elif args.remove_mount:
            if not args.server or not args.share:
                logger.error("--remove-mount requires --server and --share")
                return 1
            remove_mount_config(db, args.server, args.share)
            logger.info(f"Removed //{args.server}/{args.share}")

        elif args.set_identity:
            if not args.domain or not args.user:
                logger.error("--set-identity requires --domain and --user")
                return 1
            identity = set_identity(db, args.domain, args.user)
            logger.info(f"Windows identity set to {identity.domain}\\{identity.user}")

        elif args.set:
            key, value = args.set
            set_setting(db, key, value)
            logger.info(f"Set {key} to '{value}'")

        elif args.list_mounts:
            print_status(describe_mounts(read_identity(db), read_settings(db), read_mount_config(db)))

    except ShareMountError as e:
        logger.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
