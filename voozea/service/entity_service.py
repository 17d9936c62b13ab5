"""
Entity identity resolution and the "act as" authorization model.

Users and businesses share one id namespace (the ``entities`` table). A
principal can always act as itself, and as any business it owns or holds an
active manager membership on. Nothing here is cached: roles are read from
the database on every call because ownership and memberships change between
requests.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import or_

from voozea.extension import db
from voozea.utils.helper import like_pattern
from voozea.models import Entity, User, Business, BusinessMember
from voozea.models.entity import ENTITY_USER, ENTITY_BUSINESS
from voozea.models.membership import ROLE_OWNER, ROLE_MANAGER, STATUS_ACTIVE

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2
SEARCH_LIMIT_PER_TYPE = 5


@dataclass
class EntityInfo:
    id: str
    type: str
    name: str
    avatar_url: Optional[str] = None
    slug: Optional[str] = None
    username: Optional[str] = None


def user_info(user: User) -> EntityInfo:
    return EntityInfo(
        id=user.id,
        type=ENTITY_USER,
        name=user.display_name or user.username,
        avatar_url=user.avatar_url,
        username=user.username,
    )


def business_info(business: Business) -> EntityInfo:
    return EntityInfo(
        id=business.id,
        type=ENTITY_BUSINESS,
        name=business.name,
        avatar_url=business.logo_url,
        slug=business.slug,
    )


def resolve_entity(entity_id) -> Optional[EntityInfo]:
    """Return the display projection of an entity, or None for unknown/stale ids."""
    if not entity_id:
        return None

    entity = db.session.get(Entity, entity_id)
    if not entity:
        return None

    if entity.type == ENTITY_USER:
        user = db.session.get(User, entity_id)
        return user_info(user) if user else None

    business = db.session.get(Business, entity_id)
    return business_info(business) if business else None


def get_business_role(business_id, user_id) -> Optional[str]:
    """'owner', 'manager' (active membership) or None."""
    business = db.session.get(Business, business_id) if business_id else None
    if business is None:
        return None

    if business.owner_id is not None and business.owner_id == user_id:
        return ROLE_OWNER

    member = BusinessMember.query.filter_by(
        business_id=business_id,
        user_id=user_id,
        status=STATUS_ACTIVE
    ).first()
    return member.role if member else None


def can_act_as_entity(principal_id, entity_id) -> bool:
    if not principal_id or not entity_id:
        return False
    if principal_id == entity_id:
        return True
    return get_business_role(entity_id, principal_id) is not None


def list_actable_entities(principal_id) -> list:
    entities = []

    user = db.session.get(User, principal_id)
    if user:
        entities.append(user_info(user))

    owned = (
        Business.query
        .filter_by(owner_id=principal_id)
        .order_by(Business.name)
        .all()
    )
    entities.extend(business_info(b) for b in owned)

    managed = (
        Business.query
        .join(BusinessMember, BusinessMember.business_id == Business.id)
        .filter(
            BusinessMember.user_id == principal_id,
            BusinessMember.status == STATUS_ACTIVE,
            BusinessMember.role == ROLE_MANAGER,
        )
        .order_by(Business.name)
        .all()
    )
    for business in managed:
        # ownership wins over a stale manager row
        if business.owner_id != principal_id:
            entities.append(business_info(business))

    return entities


def search_entities(query, exclude_ids=None) -> list:
    """
    Case-insensitive substring search over usernames/display names and
    business names, at most five of each, users first.
    """
    query = (query or "").strip()
    if len(query) < MIN_SEARCH_LENGTH:
        return []

    exclude = set(exclude_ids or [])
    pattern = like_pattern(query)

    users = (
        User.query
        .filter(or_(
            User.username.ilike(pattern, escape="\\"),
            User.display_name.ilike(pattern, escape="\\"),
        ))
        .order_by(User.username)
        .limit(SEARCH_LIMIT_PER_TYPE)
        .all()
    )
    businesses = (
        Business.query
        .filter(Business.name.ilike(pattern, escape="\\"))
        .order_by(Business.name)
        .limit(SEARCH_LIMIT_PER_TYPE)
        .all()
    )

    results = [user_info(u) for u in users if u.id not in exclude]
    results.extend(business_info(b) for b in businesses if b.id not in exclude)
    return results
