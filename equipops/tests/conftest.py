import pytest
from fastapi.testclient import TestClient

from equipops.api.deps import get_session_provider
from equipops.core.rbac import OrganizationRole, SessionSnapshot
from equipops.main import app
from equipops.services.permissions import UnifiedPermissions

ORG_ID = "org-1"


@pytest.fixture
def snapshot_factory():
    def factory(
        role: OrganizationRole | str | None = OrganizationRole.MEMBER,
        *,
        organization_id: str | None = ORG_ID,
        team_ids=(),
        managed_team_ids=(),
        user_id: str | None = "user-1",
    ) -> SessionSnapshot:
        return SessionSnapshot.build(
            organization_id=organization_id,
            role=role,
            team_ids=team_ids,
            managed_team_ids=managed_team_ids,
            user_id=user_id,
        )

    return factory


@pytest.fixture
def permissions_factory(snapshot_factory):
    def factory(role=OrganizationRole.MEMBER, **kwargs) -> UnifiedPermissions:
        snapshot = snapshot_factory(role, **kwargs)
        return UnifiedPermissions(snapshot, user_id=snapshot.user_id)

    return factory


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_session(snapshot_factory):
    """Serve every request with the given session snapshot."""

    def apply(*args, **kwargs) -> SessionSnapshot:
        snapshot = snapshot_factory(*args, **kwargs)
        app.dependency_overrides[get_session_provider] = lambda: snapshot
        return snapshot

    yield apply
    app.dependency_overrides.pop(get_session_provider, None)
