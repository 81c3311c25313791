from equipops.api.deps import get_legacy_permissions
from equipops.core.rbac import OrganizationRole
from equipops.schemas.work_orders import WorkOrderRef
from equipops.services.legacy import LegacyPermissions


def test_legacy_names_map_to_unified_checks(permissions_factory):
    permissions = permissions_factory(OrganizationRole.MEMBER, team_ids=["T"], managed_team_ids=["M"])
    legacy = LegacyPermissions(permissions)
    team_order = WorkOrderRef(id="W", team_id="T")
    managed_order = WorkOrderRef(id="X", team_id="M")

    assert legacy.can_manage_team("M") is True
    assert legacy.can_manage_team("T") is False
    assert legacy.can_view_team("T") is True
    assert legacy.can_create_team() is False

    assert legacy.can_manage_equipment("M") is True
    assert legacy.can_manage_equipment() is False
    assert legacy.can_view_equipment() is True
    assert legacy.can_create_equipment() is False
    assert legacy.can_update_equipment_status("M") is True

    assert legacy.can_manage_work_order(team_order) is False
    assert legacy.can_manage_work_order(managed_order) is True
    assert legacy.can_view_work_order(team_order) is True
    assert legacy.can_create_work_order() is True
    assert legacy.can_assign_work_order(team_order) is False
    assert legacy.can_change_work_order_status(team_order) is True

    assert legacy.can_manage_organization() is False
    assert legacy.can_invite_members() is False
    assert legacy.has_role("member") is True
    assert legacy.is_team_member("T") is True
    assert legacy.is_team_manager("T") is False
    assert legacy.work_order_permissions(team_order) == permissions.work_orders.get_permissions(team_order)


def test_legacy_checks_deny_without_organization(permissions_factory):
    legacy = get_legacy_permissions(permissions_factory(OrganizationRole.OWNER, organization_id=None))
    assert legacy.can_manage_team("T") is False
    assert legacy.can_create_equipment() is False
    assert legacy.can_assign_work_order() is False
    assert legacy.can_change_work_order_status() is False
    assert legacy.can_manage_organization() is False
