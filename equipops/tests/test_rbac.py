import pytest

from equipops.core.rbac import (
    ADMIN_ROLES,
    MEMBER_ROLES,
    CurrentOrganization,
    OrganizationRole,
    SessionSnapshot,
    build_permission_context,
    coerce_roles,
    normalize_role,
    snapshot_from_headers,
)
from equipops.services.permissions import UnifiedPermissions


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("owner", OrganizationRole.OWNER),
        ("Admin", OrganizationRole.ADMIN),
        (OrganizationRole.MEMBER, OrganizationRole.MEMBER),
        (None, OrganizationRole.VIEWER),
        ("", OrganizationRole.VIEWER),
        ("superuser", OrganizationRole.VIEWER),
    ],
)
def test_normalize_role(raw, expected):
    assert normalize_role(raw) is expected


def test_normalize_role_uses_default_for_missing_role():
    assert normalize_role(None, default="member") is OrganizationRole.MEMBER


def test_coerce_roles_accepts_single_role_and_drops_unknown():
    assert coerce_roles("admin") == {OrganizationRole.ADMIN}
    assert coerce_roles(["owner", OrganizationRole.VIEWER, "root"]) == {
        OrganizationRole.OWNER,
        OrganizationRole.VIEWER,
    }


def test_member_roles_include_admin_roles():
    assert ADMIN_ROLES < MEMBER_ROLES
    assert OrganizationRole.VIEWER not in MEMBER_ROLES


def test_context_is_absent_without_organization():
    assert build_permission_context(SessionSnapshot.empty()) is None


def test_context_defaults_missing_role_to_viewer():
    snapshot = SessionSnapshot(organization=CurrentOrganization(id="org-9"), team_ids=frozenset({"t1"}))
    context = build_permission_context(snapshot, user_id="u1")
    assert context.organization_id == "org-9"
    assert context.user_role is OrganizationRole.VIEWER
    assert context.user_id == "u1"
    assert context.user_team_ids == {"t1"}


def test_managed_team_implies_access():
    snapshot = SessionSnapshot.build(organization_id="o", role="member", managed_team_ids=["t2"])
    assert snapshot.can_manage_team("t2") is True
    assert snapshot.has_team_access("t2") is True
    assert snapshot.can_manage_team("t3") is False
    assert snapshot.get_user_team_ids() == {"t2"}


@pytest.mark.parametrize("role", list(OrganizationRole))
def test_role_predicates_follow_role_sets(permissions_factory, role):
    permissions = permissions_factory(role)
    assert permissions.is_org_admin() is (role in ADMIN_ROLES)
    assert permissions.is_org_member() is (role in MEMBER_ROLES)
    if permissions.is_org_admin():
        assert permissions.is_org_member() is True


def test_has_role_accepts_strings_and_collections(permissions_factory):
    permissions = permissions_factory("member")
    assert permissions.has_role("member") is True
    assert permissions.has_role(["owner", "admin"]) is False
    assert permissions.has_role({OrganizationRole.MEMBER, OrganizationRole.VIEWER}) is True


def test_has_role_is_false_without_context(permissions_factory):
    permissions = permissions_factory("owner", organization_id=None)
    assert permissions.context is None
    assert permissions.has_role(list(OrganizationRole)) is False


def test_team_predicates_delegate_to_provider(permissions_factory):
    permissions = permissions_factory("viewer", team_ids=["t1"], managed_team_ids=["t2"])
    assert permissions.is_team_member("t1") is True
    assert permissions.is_team_manager("t1") is False
    assert permissions.is_team_manager("t2") is True
    assert permissions.is_team_member("t9") is False


def test_snapshot_from_headers():
    snapshot = snapshot_from_headers(
        {
            "x-session-organization-id": "org-7",
            "x-session-role": "admin",
            "x-session-user-id": "u-3",
            "x-session-team-ids": "t1, t2,,",
            "x-session-managed-team-ids": "t2",
        },
        prefix="x-session",
    )
    assert snapshot.organization == CurrentOrganization(id="org-7", user_role="admin")
    assert snapshot.user_id == "u-3"
    assert snapshot.team_ids == {"t1", "t2"}
    assert snapshot.managed_team_ids == {"t2"}


def test_snapshot_from_headers_without_organization_denies_everything():
    snapshot = snapshot_from_headers({"x-session-role": "owner"}, prefix="x-session")
    assert snapshot.organization is None
    assert UnifiedPermissions(snapshot).organization.can_manage is False
