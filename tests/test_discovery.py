"""
Tests for GVFS mount point discovery.
"""

import os

import pytest

from sharemount.discovery import DiscoveredMount, parse_entry_name, read_gvfs_mounts
from sharemount.errors import PrerequisiteError, SchemaDriftError

from conftest import make_entry


def test_missing_directory_yields_empty_snapshot(gvfs_dir):
    snapshot = read_gvfs_mounts(gvfs_dir)
    assert len(snapshot) == 0
    assert snapshot.mount_dir == gvfs_dir


def test_empty_directory_yields_empty_snapshot(gvfs_dir):
    os.makedirs(gvfs_dir)
    assert len(read_gvfs_mounts(gvfs_dir)) == 0


def test_parses_smb_share_entries(gvfs_dir):
    make_entry(gvfs_dir, "MyDomain", "server1", "my share", "jdoe")
    make_entry(gvfs_dir, "MyDomain", "server2", "data,2", "jdoe")

    snapshot = read_gvfs_mounts(gvfs_dir)

    assert len(snapshot) == 2
    assert snapshot[0] == DiscoveredMount(
        raw_entry_name="smb-share:domain=MyDomain,server=server1,share=my%20share,user=jdoe",
        domain="MyDomain", server="server1", share="my share", user="jdoe")
    assert snapshot[1].share == "data,2"


def test_entry_path(gvfs_dir):
    path = make_entry(gvfs_dir, "MyDomain", "server1", "share1", "jdoe")
    snapshot = read_gvfs_mounts(gvfs_dir)
    assert snapshot.entry_path(0) == path


def test_other_entries_are_ignored(gvfs_dir):
    os.makedirs(os.path.join(gvfs_dir, "ftp:host=example.com"))
    os.makedirs(os.path.join(gvfs_dir, "sftp:host=box,user=jdoe"))
    make_entry(gvfs_dir, "MyDomain", "server1", "share1", "jdoe")

    snapshot = read_gvfs_mounts(gvfs_dir)

    assert [mount.server for mount in snapshot] == ["server1"]


def test_missing_keys_default_to_empty():
    mount = parse_entry_name("smb-share:server=server1,share=share1")
    assert mount.domain == ""
    assert mount.user == ""
    assert mount.share_path == "//server1/share1"


def test_unknown_key_aborts_discovery(gvfs_dir):
    make_entry(gvfs_dir, "MyDomain", "server1", "share1", "jdoe")
    os.makedirs(os.path.join(gvfs_dir, "smb-share:domain=D,port=445,server=s,share=x,user=u"))

    with pytest.raises(SchemaDriftError, match="port"):
        read_gvfs_mounts(gvfs_dir)


def test_component_without_value_aborts_discovery():
    with pytest.raises(SchemaDriftError):
        parse_entry_name("smb-share:server=s,share")


def test_repeated_key_aborts_discovery():
    with pytest.raises(SchemaDriftError, match="more than once"):
        parse_entry_name("smb-share:server=a,server=b,share=x")


def test_mount_dir_that_is_a_file(tmp_path):
    path = tmp_path / "gvfs"
    path.write_text("not a directory")

    with pytest.raises(PrerequisiteError):
        read_gvfs_mounts(str(path))


def test_dangling_mount_dir_link_yields_empty_snapshot(tmp_path):
    path = str(tmp_path / "gvfs")
    os.symlink(str(tmp_path / "missing"), path)

    snapshot = read_gvfs_mounts(path)

    assert len(snapshot) == 0


def test_snapshot_is_rebuilt_not_updated(gvfs_dir):
    first = read_gvfs_mounts(gvfs_dir)
    make_entry(gvfs_dir, "MyDomain", "server1", "share1", "jdoe")
    second = read_gvfs_mounts(gvfs_dir)

    assert len(first) == 0
    assert len(second) == 1
