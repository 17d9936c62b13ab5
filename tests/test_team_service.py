"""Manager invitations, removal and ownership transfer."""
import pytest

from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.extension import db
from voozea.models import Business, BusinessMember, Notification, User
from voozea.models.membership import ROLE_MANAGER, STATUS_PENDING, STATUS_ACTIVE, STATUS_REMOVED
from voozea.models.notification import (
    NOTIFY_MANAGER_INVITE, NOTIFY_MANAGER_ADDED, NOTIFY_MANAGER_REMOVED, NOTIFY_OWNERSHIP_TRANSFER,
)
from voozea.service.entity_service import can_act_as_entity
from voozea.service.team_service import (
    invite_manager, accept_invitation, decline_invitation, remove_manager,
    transfer_ownership, list_team, list_my_invitations, search_users,
)


@pytest.fixture
def owner(make_user):
    return make_user("owner")


@pytest.fixture
def business(make_business, owner):
    return make_business("Corner Cafe", owner=owner)


class TestMembershipLifecycle:
    def test_invite_accept_remove(self, owner, business, make_user):
        invitee = make_user("helper")

        member = invite_manager(owner, business.id, "helper")
        assert member.status == STATUS_PENDING
        assert member.role == ROLE_MANAGER
        assert not can_act_as_entity(invitee.id, business.id)
        assert Notification.query.filter_by(user_id=invitee.id, type=NOTIFY_MANAGER_INVITE).count() == 1

        accept_invitation(invitee, member.id)
        assert db.session.get(BusinessMember, member.id).status == STATUS_ACTIVE
        assert can_act_as_entity(invitee.id, business.id)
        assert Notification.query.filter_by(user_id=owner.id, type=NOTIFY_MANAGER_ADDED).count() == 1

        remove_manager(owner, member.id)
        assert db.session.get(BusinessMember, member.id).status == STATUS_REMOVED
        assert not can_act_as_entity(invitee.id, business.id)
        assert Notification.query.filter_by(user_id=invitee.id, type=NOTIFY_MANAGER_REMOVED).count() == 1

    def test_decline_deletes_invitation(self, owner, business, make_user):
        invitee = make_user("helper")
        member = invite_manager(owner, business.id, "helper")
        decline_invitation(invitee, member.id)
        assert BusinessMember.query.count() == 0

    def test_reinvite_after_removal(self, owner, business, make_user, make_manager):
        helper = make_user("helper")
        member = make_manager(business, helper, status=STATUS_REMOVED)

        again = invite_manager(owner, business.id, "helper")
        assert again.id == member.id
        assert again.status == STATUS_PENDING

    def test_duplicate_invitations(self, owner, business, make_user, make_manager):
        make_user("pending_one")
        invite_manager(owner, business.id, "pending_one")
        with pytest.raises(ConflictError):
            invite_manager(owner, business.id, "pending_one")

        make_manager(business, make_user("active_one"))
        with pytest.raises(ConflictError):
            invite_manager(owner, business.id, "active_one")

    def test_only_owner_invites(self, business, make_user, make_manager):
        manager = make_user("manager")
        make_manager(business, manager)
        make_user("friend")
        with pytest.raises(AuthorizationError):
            invite_manager(manager, business.id, "friend")

    def test_unknown_invitee_and_self(self, owner, business):
        with pytest.raises(NotFoundError):
            invite_manager(owner, business.id, "ghost")
        with pytest.raises(ValidationError):
            invite_manager(owner, business.id, "owner")

    def test_cannot_accept_someone_elses_invitation(self, owner, business, make_user):
        make_user("helper")
        member = invite_manager(owner, business.id, "helper")
        with pytest.raises(NotFoundError):
            accept_invitation(make_user("intruder"), member.id)

    def test_invitations_and_team_listing(self, owner, business, make_user, make_manager):
        helper = make_user("helper")
        invite_manager(owner, business.id, "helper")
        assert [m.business_id for m in list_my_invitations(helper)] == [business.id]

        _, members = list_team(owner, business.id)
        assert [m.user_id for m in members] == [helper.id]
        with pytest.raises(AuthorizationError):
            list_team(helper, business.id)


class TestTransferOwnership:
    def test_transfer_to_active_manager(self, owner, business, make_user, make_manager):
        successor = make_user("successor")
        make_manager(business, successor)

        transfer_ownership(owner, business.id, successor.id)

        assert db.session.get(Business, business.id).owner_id == successor.id
        old_owner_row = BusinessMember.query.filter_by(business_id=business.id, user_id=owner.id).one()
        assert old_owner_row.role == ROLE_MANAGER
        assert old_owner_row.status == STATUS_ACTIVE
        assert BusinessMember.query.filter_by(business_id=business.id, user_id=successor.id).count() == 0
        assert db.session.get(User, successor.id).is_business_owner
        assert Notification.query.filter_by(user_id=successor.id, type=NOTIFY_OWNERSHIP_TRANSFER).count() == 1

        # both can still act as the business
        assert can_act_as_entity(owner.id, business.id)
        assert can_act_as_entity(successor.id, business.id)

    def test_transfer_reuses_old_owner_row(self, owner, business, make_user, make_manager):
        successor = make_user("successor")
        make_manager(business, successor)
        make_manager(business, owner, status=STATUS_REMOVED)

        transfer_ownership(owner, business.id, successor.id)
        rows = BusinessMember.query.filter_by(business_id=business.id, user_id=owner.id).all()
        assert len(rows) == 1
        assert rows[0].status == STATUS_ACTIVE

    def test_new_owner_must_be_active_manager(self, owner, business, make_user, make_manager):
        pending = make_user("pending")
        make_manager(business, pending, status=STATUS_PENDING)
        with pytest.raises(ValidationError):
            transfer_ownership(owner, business.id, pending.id)
        assert db.session.get(Business, business.id).owner_id == owner.id

    def test_only_owner_transfers(self, business, make_user, make_manager):
        manager = make_user("manager")
        make_manager(business, manager)
        with pytest.raises(AuthorizationError):
            transfer_ownership(manager, business.id, manager.id)


class TestUserSearch:
    def test_excludes_self_and_needs_two_characters(self, make_user):
        me = make_user("sam")
        make_user("samantha")
        assert search_users(me, "s") == []
        assert [u.username for u in search_users(me, "sam")] == ["samantha"]
