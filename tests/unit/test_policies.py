import pytest

from app.domain.policies import CallerIdentity, Capability, Role, has_capability


class TestRoleCapabilities:
    @pytest.mark.parametrize("role", list(Role))
    def test_every_role_can_reserve(self, role):
        assert has_capability(role, Capability.RESERVE)

    def test_member_cannot_manage(self):
        assert not has_capability(Role.MEMBER, Capability.MANAGE_RESERVATIONS)
        assert not has_capability(Role.MEMBER, Capability.OVERRIDE_STATUS)
        assert not has_capability(Role.MEMBER, Capability.VIEW_ALL_RESERVATIONS)

    @pytest.mark.parametrize("role", [Role.EMPLOYEE, Role.ADMIN])
    def test_staff_has_every_capability(self, role):
        assert all(has_capability(role, capability) for capability in Capability)

    def test_no_role_has_no_capability(self):
        assert not has_capability(None, Capability.RESERVE)


class TestCallerIdentity:
    def test_member_owns_only_own_resources(self):
        caller = CallerIdentity(user_id="user-1", role=Role.MEMBER)
        assert caller.owns_or_manages("user-1")
        assert not caller.owns_or_manages("user-2")
        assert not caller.is_staff

    def test_staff_manages_everything(self):
        caller = CallerIdentity(user_id="staff-1", role=Role.ADMIN)
        assert caller.is_staff
        assert caller.owns_or_manages("user-2")
