"""Usernames, registration, onboarding, businesses, suggestions and search."""
import pytest

from voozea.errors import ValidationError, AuthorizationError, ConflictError
from voozea.extension import db
from voozea.models import Business, User
from voozea.service.business_service import (
    create_business, update_business, parse_hours, slugify, sanitize_slug, SLUG_MAX_LENGTH,
)
from voozea.service.follow_service import follow
from voozea.service.notification_service import notify, list_notifications, unread_count, mark_read, mark_all_read
from voozea.service.profile_service import (
    normalize_username, register_user, authenticate, update_profile, skip_onboarding,
)
from voozea.service.rating_service import rate_product
from voozea.service.search_service import global_search
from voozea.service.suggestion_service import suggested_users


class TestUsernames:
    @pytest.mark.parametrize("raw, expected", [
        ("Alice", "alice"),
        ("  Jo Smith ", "jo_smith"),
        ("a--b..c", "a_b_c"),
        ("__x__", "x"),
        ("x" * 40, "x" * 30),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_username(raw) == expected

    def test_too_short_after_normalizing(self, make_user):
        user = make_user()
        with pytest.raises(ValidationError):
            update_profile(user, username="a!")

    def test_taken(self, make_user):
        make_user("alice")
        bob = make_user("bob")
        with pytest.raises(ConflictError):
            update_profile(bob, username="Alice")


class TestRegistration:
    def test_register_and_authenticate(self, app):
        user = register_user("New@Example.com", "secret123", "New User")
        assert user.username == "new_user"
        assert user.display_name == "New User"
        assert user.needs_onboarding
        assert authenticate("new@example.com", "secret123").id == user.id
        assert authenticate("new@example.com", "wrong") is None

    def test_duplicate_email(self, make_user):
        make_user("alice")
        with pytest.raises(ConflictError):
            register_user("alice@example.com", "secret123", "another")

    def test_skip_onboarding(self, make_user):
        user = skip_onboarding(make_user())
        assert not user.needs_onboarding


class TestBusinesses:
    def test_unique_slugs(self, make_user):
        user = make_user()
        first = create_business(user, {"name": "Joe's Diner"})
        second = create_business(user, {"name": "Joe's Diner"})
        assert (first.slug, second.slug) == ("joes-diner", "joes-diner-1")
        assert first.owner_id is None
        assert not first.is_claimed

    def test_long_name_slug_fits_column(self, make_user):
        user = make_user()
        name = "Brewing Company " * 15
        first = create_business(user, {"name": name})
        second = create_business(user, {"name": name})
        assert len(first.slug) <= SLUG_MAX_LENGTH
        assert len(second.slug) <= SLUG_MAX_LENGTH
        assert second.slug.endswith("-1")
        assert first.slug != second.slug

    def test_create_as_owner(self, make_user):
        user = make_user()
        business = create_business(user, {"name": "Mine"}, as_owner=True)
        assert business.owner_id == user.id
        assert business.is_claimed
        assert db.session.get(User, user.id).is_business_owner

    def test_update_requires_owner(self, make_user, make_business, make_manager):
        owner, manager = make_user(), make_user()
        business = make_business(owner=owner)
        make_manager(business, manager)
        with pytest.raises(AuthorizationError):
            update_business(manager, business.id, {"name": "Renamed"})

    def test_slug_change(self, make_user, make_business):
        owner = make_user()
        business = make_business("Corner Cafe", owner=owner)
        make_business("Taken Name")

        with pytest.raises(ValidationError):
            update_business(owner, business.id, {"slug": "x!"})
        with pytest.raises(ConflictError):
            update_business(owner, business.id, {"slug": "Taken Name"})

        update_business(owner, business.id, {"slug": "The Corner!"})
        assert db.session.get(Business, business.id).slug == "the-corner"

    def test_hours(self):
        assert parse_hours(None) is None
        assert parse_hours({"monday": None}) is None
        assert parse_hours({"monday": {"open": "09:00", "close": "17:00"}})["monday"] == {
            "open": "09:00", "close": "17:00"
        }
        with pytest.raises(ValidationError):
            parse_hours({"monday": {"open": "9am", "close": "17:00"}})
        with pytest.raises(ValidationError):
            parse_hours({"someday": {"open": "09:00", "close": "17:00"}})

    def test_slug_helpers(self):
        assert slugify("  Café & Bar ") == "café-bar"
        assert sanitize_slug("Hello World!!") == "hello-world"


class TestNotifications:
    def test_inbox(self, make_user):
        me, actor = make_user(), make_user()
        notify(me.id, "follow", actor_id=actor.id)
        notify(me.id, "like", actor_id=actor.id)
        db.session.commit()

        items = list_notifications(me.id)
        assert [n.type for n, _ in items] == ["like", "follow"]
        assert items[0][1].id == actor.id
        assert unread_count(me.id) == 2

        mark_read(me.id, items[0][0].id)
        assert unread_count(me.id) == 1
        assert mark_all_read(me.id) == 1
        assert unread_count(me.id) == 0

    def test_unknown_type(self, make_user):
        with pytest.raises(ValidationError):
            notify(make_user().id, "poke")

    def test_deleted_actor_resolves_to_none(self, make_user):
        me, actor = make_user(), make_user()
        notify(me.id, "follow", actor_id=actor.id)
        db.session.commit()
        User.query.filter_by(id=actor.id).delete(synchronize_session=False)
        db.session.commit()

        [(notification, resolved)] = list_notifications(me.id)
        assert resolved is None


class TestSuggestions:
    def test_excludes_self_and_followed(self, make_user):
        me, followed, other = make_user(), make_user(), make_user()
        follow(me.id, me.id, followed.id)

        suggested = [user.id for user, _ in suggested_users(me)]
        assert me.id not in suggested
        assert followed.id not in suggested
        assert other.id in suggested

    def test_recent_raters_rank_higher(self, make_user, make_business, make_product):
        me, quiet, active = make_user(), make_user(), make_user()
        product = make_product(make_business())
        rate_product(active, product.id, 8)

        suggestions = suggested_users(me)
        assert suggestions[0][0].id == active.id
        assert suggestions[0][1].product_id == product.id


class TestGlobalSearch:
    def test_short_query(self, make_user):
        make_user("alice")
        assert global_search("a") == {"businesses": [], "products": [], "users": []}

    def test_finds_all_kinds(self, make_user, make_business, make_product):
        make_user("pizzalover")
        shop = make_business("Pizza Palace")
        make_product(shop, "Pizza Margherita")

        results = global_search("pizza")
        assert [b.name for b in results["businesses"]] == ["Pizza Palace"]
        assert [p.name for p in results["products"]] == ["Pizza Margherita"]
        assert [u.username for u in results["users"]] == ["pizzalover"]
