#!/usr/bin/env python3
"""
Match declared shares against a discovery snapshot
"""

import logging
import string
from typing import Optional

from .discovery import DiscoverySnapshot
from .errors import IdentityConflictError

logger = logging.getLogger(__name__)

# Only A-Z are folded, no locale or Unicode case rules
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_equal_no_case(first: str, second: str) -> bool:
    return first.translate(_ASCII_LOWER) == second.translate(_ASCII_LOWER)


def find_mount(snapshot: DiscoverySnapshot, identity, server: str, share: str) -> Optional[int]:
    """
    Find the GVFS mount for a server/share under the configured identity.

    Args:
        snapshot: Current discovery snapshot
        identity: Configured Identity (domain and user)
        server: Server name as declared
        share: Share name as declared

    Returns:
        Index into the snapshot, or None if the share is not mounted
    """
    for index, mount in enumerate(snapshot):
        if not ascii_equal_no_case(mount.domain, identity.domain):
            continue
        if not ascii_equal_no_case(mount.server, server):
            continue
        if not ascii_equal_no_case(mount.share, share):
            continue

        if not ascii_equal_no_case(mount.user, identity.user):
            raise IdentityConflictError(
                f"Windows share \"//{server}/{share}\" is mounted with user name \"{mount.user}\", "
                f"instead of the expected user name of \"{identity.user}\".")

        logger.debug(f"//{server}/{share} matches GVFS entry {mount.raw_entry_name}")
        return index

    return None
