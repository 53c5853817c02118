#!/usr/bin/env python3
"""
Mount and unmount Windows shares through GVFS

The actual work is done by an external tool, either 'gio mount' or the older
'gvfs-mount'. Both only accept the password on stdin, so it is passed through
a pipe and never appears on a command line.
"""

import os
import shutil
import logging
import getpass
import subprocess
from typing import Callable, List, Optional

from .errors import MountToolError, PrerequisiteError
from .escaping import SHARE_PATH_SAFE_CHARS, escape

logger = logging.getLogger(__name__)

# Mount and unmount argument prefixes for each supported tool
MOUNT_TOOLS = {
    'gio': (['gio', 'mount'], ['gio', 'mount', '-u']),
    'gvfs-mount': (['gvfs-mount'], ['gvfs-mount', '--unmount']),
}

DEFAULT_MOUNT_TOOL = 'gio'

PASSWORD_PROMPT = "Windows password: "


def build_uri(domain: str, user: str, server: str, share: str) -> str:
    """Build the smb:// connection URI for the given account and share"""
    return f"smb://{escape(domain)};{escape(user)}@{escape(server)}/{escape(share, safe=SHARE_PATH_SAFE_CHARS)}"


class CredentialCache:
    """
    Asks for the Windows password once per run and keeps it in memory.

    The mount tool does not cache the password itself, so without this the
    user would have to type it again for every share.
    """

    def __init__(self, prompt: Optional[Callable[[str], str]] = None, hint: Optional[str] = None):
        self._prompt = prompt or getpass.getpass
        self._hint = hint
        self._password = None

    @property
    def prompted(self) -> bool:
        return self._password is not None

    def get(self) -> str:
        if self._password is None:
            self._password = self._prompt(PASSWORD_PROMPT)
            if self._hint:
                print(self._hint)
        return self._password

    def __repr__(self):
        return f"CredentialCache(prompted={self.prompted})"


class GvfsMounter:
    """Runs the external GVFS mount tool, one invocation at a time"""

    def __init__(self, tool: str = DEFAULT_MOUNT_TOOL, timeout: Optional[float] = None):
        if tool not in MOUNT_TOOLS:
            raise PrerequisiteError(
                f"Unsupported mount tool \"{tool}\", valid tools are: {', '.join(sorted(MOUNT_TOOLS))}")
        self.tool = tool
        self.timeout = timeout
        self._mount_cmd, self._unmount_cmd = MOUNT_TOOLS[tool]

    @property
    def executable(self) -> str:
        return self._mount_cmd[0]

    def check_available(self) -> None:
        if not shutil.which(self.executable):
            raise PrerequisiteError(
                f"Tool \"{self.executable}\" is not installed on this system. "
                "GVFS support is required (Debian packages: gvfs-backends gvfs-fuse).")

    def password_hint(self) -> str:
        return (f"If mounting takes too long, you might have typed the wrong password "
                f"(a buggy \"{self.executable}\" will hang forever)...")

    def mount(self, uri: str, password: str) -> None:
        """
        Mount a share.

        Args:
            uri: smb:// connection URI from build_uri()
            password: Windows password, sent to the tool on stdin
        """
        self._run(self._mount_cmd + ['--', uri], input_text=password + '\n')

    def unmount(self, uri: str) -> None:
        self._run(self._unmount_cmd + ['--', uri])

    def _run(self, cmd: List[str], input_text: Optional[str] = None) -> None:
        logger.debug(f"Running command: {' '.join(cmd)}")

        try:
            # subprocess.run kills the child if we get interrupted or time out
            result = subprocess.run(
                cmd,
                input=input_text,
                stdin=None if input_text is not None else subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise MountToolError(
                f"\"{self.executable}\" did not finish within {self.timeout} seconds and was terminated") from e
        except OSError as e:
            raise MountToolError(f"Failed to execute \"{self.executable}\": {e}") from e

        if result.returncode != 0:
            stderr_output = (result.stderr or '').strip()
            if stderr_output:
                logger.debug(f"{self.executable} stderr: {stderr_output}")
            raise MountToolError(
                f"\"{self.executable}\" failed with exit code {result.returncode}"
                + (f": {stderr_output}" if stderr_output else ""),
                returncode=result.returncode,
                stderr=stderr_output,
            )


def check_not_root() -> None:
    """GVFS mounts belong to the calling user, running as root makes no sense"""
    if os.geteuid() == 0:
        raise PrerequisiteError("The user ID is zero, are you running this as root? You probably should not.")
