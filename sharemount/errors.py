#!/usr/bin/env python3
"""
Exceptions raised by sharemount

Every condition listed here is fatal for the current mount or unmount pass.
The command line entry points catch ShareMountError, report it on stderr
and exit with a non-zero status.
"""


class ShareMountError(Exception):
    """Base class for all fatal sharemount errors"""


class ConfigurationError(ShareMountError):
    """A declared mount, the identity or a setting is malformed"""


class PrerequisiteError(ShareMountError):
    """The mount subsystem or the mount tool is not usable"""


class MissingMountError(PrerequisiteError):
    """The mount tool returned success but GVFS has no entry for the share"""


class SchemaDriftError(ShareMountError):
    """A GVFS directory entry contains a component we do not know about"""


class EscapeError(ShareMountError):
    """A value cannot be escaped or unescaped"""


class IdentityConflictError(ShareMountError):
    """A share is mounted under a different user than the configured one"""


class LinkConflictError(ShareMountError):
    """The link path holds something we are not allowed to touch"""


class MountToolError(ShareMountError):
    """The external mount tool failed or timed out"""

    def __init__(self, message, returncode=None, stderr=None):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
