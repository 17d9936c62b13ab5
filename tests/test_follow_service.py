"""The follow graph: edges, counters, listing and the legacy self-follow paths."""
import pytest

from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.extension import db
from voozea.models import Business, EntityFollow, Notification, User
from voozea.models.notification import NOTIFY_BUSINESS_FOLLOW
from voozea.service import follow_service
from voozea.service.follow_service import (
    follow, unfollow, is_following, followers_of, following_of, followers_page,
    follow_business, follow_user, follow_many,
)


def edge_count(follower_id, following_id):
    return EntityFollow.query.filter_by(follower_id=follower_id, following_id=following_id).count()


class TestFollow:
    def test_no_self_follow(self, make_user):
        user = make_user()
        with pytest.raises(ValidationError):
            follow(user.id, user.id, user.id)
        assert EntityFollow.query.count() == 0

    def test_business_cannot_follow_itself(self, make_user, make_business):
        owner = make_user()
        business = make_business(owner=owner)
        with pytest.raises(ValidationError):
            follow(owner.id, business.id, business.id)

    def test_authorization_gate(self, make_user, make_business):
        alice, bob, carol = make_user(), make_user(), make_user()
        business = make_business(owner=carol)

        with pytest.raises(AuthorizationError):
            follow(alice.id, bob.id, carol.id)
        with pytest.raises(AuthorizationError):
            follow(alice.id, business.id, bob.id)
        assert EntityFollow.query.count() == 0

    def test_missing_ids(self, make_user):
        user = make_user()
        with pytest.raises(ValidationError):
            follow(user.id, user.id, None)

    def test_unknown_target(self, make_user):
        user = make_user()
        with pytest.raises(NotFoundError):
            follow(user.id, user.id, "no-such-entity")

    def test_duplicate_is_conflict(self, make_user):
        alice, bob = make_user(), make_user()
        follow(alice.id, alice.id, bob.id)
        with pytest.raises(ConflictError, match="Already following"):
            follow(alice.id, alice.id, bob.id)
        assert edge_count(alice.id, bob.id) == 1

    def test_unique_constraint_is_the_final_word(self, make_user, monkeypatch):
        alice, bob = make_user(), make_user()
        follow(alice.id, alice.id, bob.id)

        # simulate a racing request that passed the existence check
        monkeypatch.setattr(follow_service, "_find_edge", lambda *args: None)
        with pytest.raises(ConflictError):
            follow(alice.id, alice.id, bob.id)

        assert edge_count(alice.id, bob.id) == 1
        assert db.session.get(User, bob.id).follower_count == 1

    def test_manager_follows_as_business(self, make_user, make_business, make_manager):
        owner, manager, target = make_user(), make_user(), make_user()
        business = make_business(owner=owner)
        make_manager(business, manager)

        follow(manager.id, business.id, target.id)
        assert is_following(business.id, target.id)
        assert db.session.get(Business, business.id).following_count == 1

    def test_entity_follow_sends_no_notification(self, make_user, make_business):
        owner, fan = make_user(), make_user()
        business = make_business(owner=owner)
        follow(fan.id, fan.id, business.id)
        assert Notification.query.count() == 0


class TestUnfollow:
    def test_idempotent(self, make_user):
        alice, bob = make_user(), make_user()
        follow(alice.id, alice.id, bob.id)

        unfollow(alice.id, alice.id, bob.id)
        assert not is_following(alice.id, bob.id)
        unfollow(alice.id, alice.id, bob.id)
        assert not is_following(alice.id, bob.id)

    def test_requires_authorization(self, make_user):
        alice, bob, carol = make_user(), make_user(), make_user()
        follow(bob.id, bob.id, carol.id)
        with pytest.raises(AuthorizationError):
            unfollow(alice.id, bob.id, carol.id)
        assert is_following(bob.id, carol.id)

    def test_counters_converge(self, make_user):
        alice, bob = make_user(), make_user()
        follow(alice.id, alice.id, bob.id)
        assert db.session.get(User, alice.id).following_count == 1
        assert db.session.get(User, bob.id).follower_count == 1

        unfollow(alice.id, alice.id, bob.id)
        unfollow(alice.id, alice.id, bob.id)
        assert db.session.get(User, alice.id).following_count == 0
        assert db.session.get(User, bob.id).follower_count == 0


class TestListing:
    def test_newest_first(self, make_user):
        target = make_user()
        first, second = make_user(), make_user()
        follow(first.id, first.id, target.id)
        follow(second.id, second.id, target.id)

        assert [e.id for e in followers_of(target.id)] == [second.id, first.id]
        assert [e.id for e in following_of(first.id)] == [target.id]

    def test_stale_entries_are_skipped(self, make_user):
        target, gone, stays = make_user(), make_user(), make_user()
        follow(gone.id, gone.id, target.id)
        follow(stays.id, stays.id, target.id)

        User.query.filter_by(id=gone.id).delete(synchronize_session=False)
        db.session.commit()

        assert [e.id for e in followers_of(target.id)] == [stays.id]

    def test_cursor_pagination(self, make_user):
        target = make_user()
        fans = [make_user() for _ in range(3)]
        for fan in fans:
            follow(fan.id, fan.id, target.id)

        page = followers_page(target.id, limit=2)
        assert [e.id for e in page["items"]] == [fans[2].id, fans[1].id]
        assert page["next_cursor"] is not None

        page = followers_page(target.id, limit=2, cursor=page["next_cursor"])
        assert [e.id for e in page["items"]] == [fans[0].id]
        assert page["next_cursor"] is None

    def test_bad_cursor(self, make_user):
        target = make_user()
        with pytest.raises(ValidationError):
            followers_page(target.id, cursor="nope")

    def test_is_following_needs_no_principal(self, make_user):
        alice, bob = make_user(), make_user()
        follow(alice.id, alice.id, bob.id)
        assert is_following(alice.id, bob.id)
        assert not is_following(bob.id, alice.id)


class TestLegacyPaths:
    def test_follow_business_notifies_owner(self, make_user, make_business):
        owner, fan = make_user(), make_user()
        business = make_business(owner=owner)

        follow_business(fan.id, business.id)

        notification = Notification.query.one()
        assert notification.user_id == owner.id
        assert notification.type == NOTIFY_BUSINESS_FOLLOW
        assert notification.actor_id == fan.id
        assert notification.business_id == business.id

    def test_unclaimed_business_follow_has_no_one_to_notify(self, make_user, make_business):
        fan = make_user()
        business = make_business()
        follow_business(fan.id, business.id)
        assert is_following(fan.id, business.id)
        assert Notification.query.count() == 0

    def test_follow_business_twice(self, make_user, make_business):
        fan = make_user()
        business = make_business(owner=make_user())
        follow_business(fan.id, business.id)
        with pytest.raises(ConflictError):
            follow_business(fan.id, business.id)
        assert Notification.query.count() == 1

    def test_follow_user_as_self(self, make_user):
        alice, bob = make_user(), make_user()
        follow_user(alice.id, bob.id)
        assert is_following(alice.id, bob.id)

    def test_follow_many_skips_self_and_existing(self, make_user):
        me, a, b = make_user(), make_user(), make_user()
        follow(me.id, me.id, a.id)

        added = follow_many(me.id, [me.id, a.id, b.id, b.id, "unknown"])
        assert added == 1
        assert is_following(me.id, b.id)
        assert db.session.get(User, me.id).following_count == 2

    def test_follow_many_refuses_non_string_ids(self, make_user):
        me, other = make_user(), make_user()
        with pytest.raises(ValidationError):
            follow_many(me.id, [other.id, {"a": 1}])
        assert not is_following(me.id, other.id)
