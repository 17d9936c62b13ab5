"""Entity resolution, the act-as predicate and entity search."""
from voozea.extension import db
from voozea.models import Entity, User
from voozea.models.entity import ENTITY_USER, ENTITY_BUSINESS
from voozea.models.membership import STATUS_PENDING, STATUS_REMOVED
from voozea.service.entity_service import (
    resolve_entity, can_act_as_entity, list_actable_entities, get_business_role, search_entities,
)


class TestResolveEntity:
    """resolve_entity dispatches on the entity type and tolerates stale ids."""

    def test_resolves_user(self, make_user):
        user = make_user("alice", display_name="Alice A")
        info = resolve_entity(user.id)
        assert info.type == ENTITY_USER
        assert info.name == "Alice A"
        assert info.username == "alice"
        assert info.slug is None

    def test_user_name_falls_back_to_username(self, make_user):
        user = make_user("bob", display_name=None)
        assert resolve_entity(user.id).name == "bob"

    def test_resolves_business(self, make_business):
        business = make_business("Corner Cafe", logo_url="https://img/logo.png")
        info = resolve_entity(business.id)
        assert info.type == ENTITY_BUSINESS
        assert info.name == "Corner Cafe"
        assert info.slug == "corner-cafe"
        assert info.avatar_url == "https://img/logo.png"

    def test_unknown_id_is_none(self, app):
        assert resolve_entity("does-not-exist") is None
        assert resolve_entity(None) is None

    def test_entity_without_projection_is_none(self, app):
        orphan = Entity(type=ENTITY_USER)
        db.session.add(orphan)
        db.session.commit()
        assert resolve_entity(orphan.id) is None


class TestCanActAsEntity:
    def test_self_is_always_actable(self, make_user):
        user = make_user()
        assert can_act_as_entity(user.id, user.id)

    def test_other_user_is_never_actable(self, make_user):
        alice, bob = make_user(), make_user()
        assert not can_act_as_entity(alice.id, bob.id)

    def test_owner_can_act_as_business(self, make_user, make_business):
        owner = make_user()
        business = make_business(owner=owner)
        assert get_business_role(business.id, owner.id) == "owner"
        assert can_act_as_entity(owner.id, business.id)

    def test_active_manager_can_act_as_business(self, make_user, make_business, make_manager):
        owner, manager = make_user(), make_user()
        business = make_business(owner=owner)
        make_manager(business, manager)
        assert get_business_role(business.id, manager.id) == "manager"
        assert can_act_as_entity(manager.id, business.id)

    def test_pending_and_removed_managers_cannot(self, make_user, make_business, make_manager):
        owner, pending, removed = make_user(), make_user(), make_user()
        business = make_business(owner=owner)
        make_manager(business, pending, status=STATUS_PENDING)
        make_manager(business, removed, status=STATUS_REMOVED)
        assert not can_act_as_entity(pending.id, business.id)
        assert not can_act_as_entity(removed.id, business.id)

    def test_unrelated_user_cannot_act_as_business(self, make_user, make_business):
        business = make_business(owner=make_user())
        stranger = make_user()
        assert get_business_role(business.id, stranger.id) is None
        assert not can_act_as_entity(stranger.id, business.id)

    def test_role_is_read_fresh(self, make_user, make_business, make_manager):
        owner, manager = make_user(), make_user()
        business = make_business(owner=owner)
        member = make_manager(business, manager)
        assert can_act_as_entity(manager.id, business.id)

        member.status = STATUS_REMOVED
        db.session.commit()
        assert not can_act_as_entity(manager.id, business.id)


class TestListActableEntities:
    def test_self_first_then_owned_then_managed(self, make_user, make_business, make_manager):
        user = make_user()
        owned = make_business("Zeta Bakery", owner=user)
        other_owner = make_user()
        managed = make_business("Alpha Bar", owner=other_owner)
        make_manager(managed, user)

        ids = [e.id for e in list_actable_entities(user.id)]
        assert ids == [user.id, owned.id, managed.id]

    def test_owned_business_listed_once(self, make_user, make_business, make_manager):
        user = make_user()
        business = make_business(owner=user)
        make_manager(business, user)

        ids = [e.id for e in list_actable_entities(user.id)]
        assert ids.count(business.id) == 1

    def test_plain_user_only_has_self(self, make_user):
        user = make_user()
        entities = list_actable_entities(user.id)
        assert [e.id for e in entities] == [user.id]


class TestSearchEntities:
    def test_single_character_returns_nothing(self, make_user):
        make_user("alice")
        assert search_entities("a", []) == []
        assert search_entities("  a  ", []) == []

    def test_two_characters_match(self, make_user):
        make_user("alice")
        assert [e.username for e in search_entities("al", [])] == ["alice"]

    def test_case_insensitive_over_display_name(self, make_user):
        make_user("zed", display_name="Coffee Lover")
        assert [e.username for e in search_entities("COFFEE", [])] == ["zed"]

    def test_users_first_then_businesses(self, make_user, make_business):
        make_business("Coffee Corner")
        make_user("coffeefan")
        types = [e.type for e in search_entities("coffee", [])]
        assert types == [ENTITY_USER, ENTITY_BUSINESS]

    def test_excluded_ids_removed(self, make_user):
        alice = make_user("alice")
        make_user("alina")
        results = search_entities("al", [alice.id])
        assert [e.username for e in results] == ["alina"]

    def test_capped_per_type(self, make_user, make_business):
        for i in range(7):
            make_user(f"tea{i}")
            make_business(f"Tea House {i}")
        results = search_entities("tea", [])
        assert len([e for e in results if e.type == ENTITY_USER]) == 5
        assert len([e for e in results if e.type == ENTITY_BUSINESS]) == 5

    def test_wildcards_are_literal(self, make_user):
        make_user("alice")
        assert search_entities("%%", []) == []
        assert search_entities("__", []) == []
