"""
Directed follow edges between entities.

The unique index on (follower_id, following_id) is what actually enforces
one edge per pair; the lookup before insert only gives a better message.
Follower/following counters on users and businesses move in the same
transaction as the edge.
"""
import logging
from sqlalchemy import and_, or_

from voozea.extension import db
from voozea.models import Entity, EntityFollow, User, Business
from voozea.models.entity import ENTITY_USER
from voozea.models.notification import NOTIFY_BUSINESS_FOLLOW
from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.service.entity_service import can_act_as_entity, resolve_entity
from voozea.service.notification_service import notify
from voozea.utils.helper import commit_or_raise

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _counter_model(entity_type):
    return User if entity_type == ENTITY_USER else Business


def _adjust_counters(follower, following, delta):
    follower_model = _counter_model(follower.type)
    following_model = _counter_model(following.type)

    follower_model.query.filter_by(id=follower.id).update(
        {follower_model.following_count: follower_model.following_count + delta},
        synchronize_session=False
    )
    following_model.query.filter_by(id=following.id).update(
        {following_model.follower_count: following_model.follower_count + delta},
        synchronize_session=False
    )


def _find_edge(follower_id, following_id):
    return EntityFollow.query.filter_by(
        follower_id=follower_id,
        following_id=following_id
    ).first()


def _add_edge(principal_id, follower_id, following_id):
    if not follower_id or not following_id:
        raise ValidationError("Missing required fields")

    if follower_id == following_id:
        raise ValidationError("Cannot follow yourself")

    if not can_act_as_entity(principal_id, follower_id):
        logger.warning(f"User {principal_id} refused to follow as {follower_id}")
        raise AuthorizationError("You do not have permission to follow as this entity")

    follower = db.session.get(Entity, follower_id)
    following = db.session.get(Entity, following_id)
    if follower is None or following is None:
        raise NotFoundError("Entity not found")

    if _find_edge(follower_id, following_id):
        raise ConflictError("Already following")

    # counters first: the edge insert is flushed by the commit, where a
    # concurrent duplicate surfaces as an IntegrityError
    _adjust_counters(follower, following, 1)
    edge = EntityFollow(follower_id=follower_id, following_id=following_id)
    db.session.add(edge)
    return edge


def follow(principal_id, follower_id, following_id):
    """Follow ``following_id`` as ``follower_id``; the principal must be able to act as the follower."""
    _add_edge(principal_id, follower_id, following_id)
    commit_or_raise("Already following")
    logger.info(f"Follow created: {follower_id} -> {following_id} (by {principal_id})")


def unfollow(principal_id, follower_id, following_id):
    """Remove the edge if present. Removing a missing edge is not an error."""
    if not follower_id or not following_id:
        raise ValidationError("Missing required fields")

    if not can_act_as_entity(principal_id, follower_id):
        logger.warning(f"User {principal_id} refused to unfollow as {follower_id}")
        raise AuthorizationError("You do not have permission to unfollow as this entity")

    deleted = EntityFollow.query.filter_by(
        follower_id=follower_id,
        following_id=following_id
    ).delete(synchronize_session=False)

    if deleted:
        follower = db.session.get(Entity, follower_id)
        following = db.session.get(Entity, following_id)
        if follower is not None and following is not None:
            _adjust_counters(follower, following, -deleted)

    commit_or_raise()
    if deleted:
        logger.info(f"Follow removed: {follower_id} -> {following_id} (by {principal_id})")


def is_following(follower_id, following_id):
    return _find_edge(follower_id, following_id) is not None


# ---------------------------
# Listing
# ---------------------------
def _edge_page(side, entity_id, limit=None, cursor=None):
    """
    Edges where ``side`` ("followers" or "following") of ``entity_id``,
    newest first. Returns (edges, next_cursor); the cursor is the id of the
    last edge returned.
    """
    if side == "followers":
        query = EntityFollow.query.filter(EntityFollow.following_id == entity_id)
    else:
        query = EntityFollow.query.filter(EntityFollow.follower_id == entity_id)

    if cursor is not None:
        try:
            anchor = db.session.get(EntityFollow, int(cursor))
        except (TypeError, ValueError):
            anchor = None
        if anchor is None:
            raise ValidationError("Invalid cursor")
        query = query.filter(or_(
            EntityFollow.created_at < anchor.created_at,
            and_(EntityFollow.created_at == anchor.created_at, EntityFollow.id < anchor.id),
        ))

    query = query.order_by(EntityFollow.created_at.desc(), EntityFollow.id.desc())
    if limit is not None:
        query = query.limit(limit)

    edges = query.all()
    next_cursor = None
    if limit is not None and len(edges) == limit:
        next_cursor = str(edges[-1].id)
    return edges, next_cursor


def _resolve_side(edges, side):
    infos = []
    for edge in edges:
        other = edge.follower_id if side == "followers" else edge.following_id
        info = resolve_entity(other)
        if info:
            infos.append(info)
    return infos


def followers_of(entity_id):
    edges, _ = _edge_page("followers", entity_id)
    return _resolve_side(edges, "followers")


def following_of(entity_id):
    edges, _ = _edge_page("following", entity_id)
    return _resolve_side(edges, "following")


def _page(side, entity_id, limit, cursor):
    limit = max(1, min(int(limit or DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE))
    edges, next_cursor = _edge_page(side, entity_id, limit, cursor)
    return {"items": _resolve_side(edges, side), "next_cursor": next_cursor}


def followers_page(entity_id, limit=None, cursor=None):
    return _page("followers", entity_id, limit, cursor)


def following_page(entity_id, limit=None, cursor=None):
    return _page("following", entity_id, limit, cursor)


def follower_ids(entity_id):
    return [
        row.follower_id for row in
        EntityFollow.query.with_entities(EntityFollow.follower_id).filter(EntityFollow.following_id == entity_id)
    ]


def following_ids(entity_id):
    return [
        row.following_id for row in
        EntityFollow.query.with_entities(EntityFollow.following_id).filter(EntityFollow.follower_id == entity_id)
    ]


# ---------------------------
# User-as-self shortcuts
# ---------------------------
def follow_user(principal_id, user_id):
    follow(principal_id, principal_id, user_id)


def unfollow_user(principal_id, user_id):
    unfollow(principal_id, principal_id, user_id)


def follow_business(principal_id, business_id):
    """Follow a business as yourself. Unlike entity follows, this notifies the owner."""
    business = db.session.get(Business, business_id) if business_id else None
    if business is None:
        raise NotFoundError("Business not found")

    _add_edge(principal_id, principal_id, business.id)
    if business.owner_id and business.owner_id != principal_id:
        notify(
            business.owner_id,
            NOTIFY_BUSINESS_FOLLOW,
            actor_id=principal_id,
            business_id=business.id,
        )
    commit_or_raise("You are already following this business")
    logger.info(f"Business follow: {principal_id} -> {business.id}")


def unfollow_business(principal_id, business_id):
    unfollow(principal_id, principal_id, business_id)


def follow_many(principal_id, entity_ids):
    """
    Follow several entities as yourself, skipping yourself and edges that
    already exist. Returns the number of new edges.
    """
    if not all(isinstance(entity_id, str) for entity_id in entity_ids or []):
        raise ValidationError("Entity ids must be strings")

    follower = db.session.get(Entity, principal_id)
    if follower is None:
        raise NotFoundError("Entity not found")

    existing = set(following_ids(principal_id))
    targets = []
    for entity_id in dict.fromkeys(entity_ids or []):
        if entity_id == principal_id or entity_id in existing:
            continue
        following = db.session.get(Entity, entity_id)
        if following is not None:
            targets.append(following)

    for following in targets:
        _adjust_counters(follower, following, 1)
    db.session.add_all(
        EntityFollow(follower_id=principal_id, following_id=f.id) for f in targets
    )

    commit_or_raise("Already following")
    return len(targets)
