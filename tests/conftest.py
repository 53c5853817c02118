"""
Pytest configuration and shared fixtures.
"""

import os
import re

import pytest

from sharemount.errors import MountToolError
from sharemount.escaping import escape, unescape
from sharemount.mountconfig import DeclaredMount, Identity, Settings

URI_PATTERN = re.compile(r'^smb://([^;]*);([^@]*)@([^/]*)/(.*)$')


def entry_name(domain, server, share, user):
    """GVFS directory entry name for an SMB share"""
    return (f"smb-share:domain={escape(domain)},server={escape(server)},"
            f"share={escape(share)},user={escape(user)}")


class FakeMounter:
    """
    Stands in for GvfsMounter and behaves like GVFS: a successful mount
    creates the directory entry, an unmount removes it.
    """

    def __init__(self, mount_dir, create_entries=True, fail_on=None):
        self.mount_dir = mount_dir
        self.create_entries = create_entries
        self.fail_on = fail_on
        self.calls = []

    def check_available(self):
        pass

    def password_hint(self):
        return "If mounting takes too long, you might have typed the wrong password..."

    def _entry_path(self, uri):
        domain, user, server, share = (unescape(part) for part in URI_PATTERN.match(uri).groups())
        # GVFS reports server names in lower case
        return os.path.join(self.mount_dir, entry_name(domain, server.lower(), share, user))

    def mount(self, uri, password):
        self.calls.append(('mount', uri, password))
        if self.fail_on and self.fail_on in uri:
            raise MountToolError(f"mount failed for {uri}", returncode=2)
        if self.create_entries:
            os.makedirs(self._entry_path(uri), exist_ok=True)

    def unmount(self, uri):
        self.calls.append(('unmount', uri))
        os.rmdir(self._entry_path(uri))


class PromptCounter:
    def __init__(self, password="secret"):
        self.password = password
        self.count = 0

    def __call__(self, prompt):
        self.count += 1
        return self.password


@pytest.fixture
def gvfs_dir(tmp_path):
    """GVFS mount directory; not created until something is mounted"""
    return str(tmp_path / "gvfs")


@pytest.fixture
def link_dir(tmp_path):
    path = tmp_path / "links"
    path.mkdir()
    return str(path)


@pytest.fixture
def identity():
    return Identity(domain="MyDomain", user="jdoe")


@pytest.fixture
def settings(gvfs_dir):
    return Settings(mount_dir=gvfs_dir)


@pytest.fixture
def fake_mounter(gvfs_dir):
    return FakeMounter(gvfs_dir)


@pytest.fixture
def prompt():
    return PromptCounter()


@pytest.fixture
def declared(link_dir):
    return [
        DeclaredMount("Server1", "Share1", os.path.join(link_dir, "l1")),
        DeclaredMount("Server2", "Share2", os.path.join(link_dir, "l2")),
    ]


def make_entry(mount_dir, domain, server, share, user):
    """Create a GVFS entry as if the share had been mounted out of band"""
    path = os.path.join(mount_dir, entry_name(domain, server, share, user))
    os.makedirs(path, exist_ok=True)
    return path
