"""Unit tests for the access predicates (no app, no database)."""
from dataclasses import FrozenInstanceError
from types import SimpleNamespace

import pytest

from app.fairgroup.access import (
    SessionContext,
    can_manage_event,
    can_manage_subcommittee,
    is_admin,
    is_subcommittee_leader,
    require_admin,
)
from app.fairgroup.errors import Forbidden, NotFound

SUBCOMMITTEE = SimpleNamespace(id=7, chair_id=1, vice_chair_id=2)
NO_LEADERSHIP = SimpleNamespace(id=8, chair_id=None, vice_chair_id=None)


def lookup(subcommittee_id):
    for sc in (SUBCOMMITTEE, NO_LEADERSHIP):
        if sc.id == subcommittee_id:
            return sc
    raise NotFound("Subcommittee not found")


def scoped(subcommittee_id=7):
    return SimpleNamespace(associated_subcommittee_id=subcommittee_id)


GROUP_WIDE = SimpleNamespace(associated_subcommittee_id=None)


class TestIsAdmin:
    def test_admin_role(self):
        assert is_admin(SessionContext(member_id=99, role="admin"))

    def test_member_role(self):
        assert not is_admin(SessionContext(member_id=99, role="member"))

    def test_role_is_exact_match(self):
        assert not is_admin(SessionContext(member_id=99, role="Admin"))
        assert not is_admin(SessionContext(member_id=99, role=""))


class TestLeadership:
    def test_chair_and_vice_chair_lead(self):
        assert is_subcommittee_leader(SessionContext(1, "member"), SUBCOMMITTEE)
        assert is_subcommittee_leader(SessionContext(2, "member"), SUBCOMMITTEE)

    def test_other_member_does_not_lead(self):
        assert not is_subcommittee_leader(SessionContext(3, "member"), SUBCOMMITTEE)

    def test_vacant_seats_match_nobody(self):
        assert not is_subcommittee_leader(SessionContext(1, "member"), NO_LEADERSHIP)

    def test_admin_is_not_leader_but_can_manage(self):
        ctx = SessionContext(50, "admin")
        assert not is_subcommittee_leader(ctx, SUBCOMMITTEE)
        assert can_manage_subcommittee(ctx, SUBCOMMITTEE)


class TestCanManageEvent:
    @pytest.mark.parametrize("member_id", [3, 4, 100])
    def test_non_leader_member_denied_on_scoped_event(self, member_id):
        assert not can_manage_event(SessionContext(member_id, "member"), scoped(), lookup)

    @pytest.mark.parametrize("event", [scoped(7), scoped(8), GROUP_WIDE])
    def test_admin_always_allowed(self, event):
        assert can_manage_event(SessionContext(50, "admin"), event, lookup)

    def test_leaders_allowed_on_own_subcommittee_only(self):
        assert can_manage_event(SessionContext(1, "member"), scoped(7), lookup)
        assert can_manage_event(SessionContext(2, "member"), scoped(7), lookup)
        assert not can_manage_event(SessionContext(1, "member"), scoped(8), lookup)

    def test_group_wide_is_admin_only(self):
        assert not can_manage_event(SessionContext(1, "member"), GROUP_WIDE, lookup)

    def test_group_wide_never_consults_lookup(self):
        def exploding(_id):
            raise AssertionError("lookup should not be called")

        assert can_manage_event(SessionContext(50, "admin"), GROUP_WIDE, exploding)

    def test_missing_subcommittee_is_not_found_not_deny(self):
        with pytest.raises(NotFound):
            can_manage_event(SessionContext(50, "admin"), scoped(404), lookup)
        with pytest.raises(NotFound):
            can_manage_event(SessionContext(1, "member"), scoped(404), lookup)


def test_session_context_is_immutable():
    ctx = SessionContext(1, "member")
    with pytest.raises(FrozenInstanceError):
        ctx.role = "admin"  # type: ignore[misc]


def test_require_admin():
    require_admin(SessionContext(50, "admin"))
    with pytest.raises(Forbidden):
        require_admin(SessionContext(1, "member"))
