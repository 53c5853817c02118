"""
Tests for matching declared shares against discovered mounts.
"""

import pytest

from sharemount.discovery import DiscoveredMount, DiscoverySnapshot
from sharemount.errors import IdentityConflictError
from sharemount.matcher import ascii_equal_no_case, find_mount


def snapshot_of(*mounts):
    return DiscoverySnapshot(mount_dir="/run/user/1000/gvfs", mounts=tuple(mounts))


def discovered(domain="MyDomain", server="server1", share="share1", user="jdoe"):
    return DiscoveredMount(raw_entry_name=f"smb-share:domain={domain},server={server},share={share},user={user}",
                           domain=domain, server=server, share=share, user=user)


class TestAsciiEqualNoCase:

    def test_ascii_letters_fold(self):
        assert ascii_equal_no_case("SERVER1", "server1")
        assert ascii_equal_no_case("MyDomain", "MYDOMAIN")

    def test_different_strings(self):
        assert not ascii_equal_no_case("server1", "server2")

    def test_no_unicode_folding(self):
        assert not ascii_equal_no_case("É", "é")
        assert not ascii_equal_no_case("ß", "SS")


class TestFindMount:

    def test_case_insensitive_match(self, identity):
        snapshot = snapshot_of(discovered(server="SERVER1", share="SHARE1", domain="MYDOMAIN", user="JDOE"))
        assert find_mount(snapshot, identity, "server1", "Share1") == 0

    def test_returns_index_of_match(self, identity):
        snapshot = snapshot_of(discovered(share="other"), discovered(share="share1"))
        assert find_mount(snapshot, identity, "server1", "share1") == 1

    def test_not_found(self, identity):
        snapshot = snapshot_of(discovered(server="server2"))
        assert find_mount(snapshot, identity, "server1", "share1") is None

    def test_empty_snapshot(self, identity):
        assert find_mount(snapshot_of(), identity, "server1", "share1") is None

    def test_other_domain_is_not_a_match(self, identity):
        snapshot = snapshot_of(discovered(domain="OtherDomain", user="someone"))
        assert find_mount(snapshot, identity, "server1", "share1") is None

    def test_other_user_is_an_identity_conflict(self, identity):
        snapshot = snapshot_of(discovered(user="mallory"))
        with pytest.raises(IdentityConflictError, match="mallory"):
            find_mount(snapshot, identity, "server1", "share1")
