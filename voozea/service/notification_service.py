import logging
from voozea.extension import db
from voozea.models import Notification
from voozea.models.notification import NOTIFICATION_TYPES
from voozea.errors import NotFoundError, ValidationError
from voozea.service.entity_service import resolve_entity
from voozea.utils.helper import commit_or_raise

logger = logging.getLogger(__name__)


def notify(user_id, type, actor_id=None, actor_entity_id=None, rating_id=None, business_id=None):
    """
    Queue a notification row in the current session. The caller commits, so
    the row lands in the same transaction as the action that caused it.
    """
    if type not in NOTIFICATION_TYPES:
        raise ValidationError(f"Unknown notification type: {type}")
    if not user_id:
        return None

    notification = Notification(
        user_id=user_id,
        type=type,
        actor_id=actor_id,
        actor_entity_id=actor_entity_id or actor_id,
        rating_id=rating_id,
        business_id=business_id,
    )
    db.session.add(notification)
    logger.info(f"Notification queued: type={type} user={user_id}")
    return notification


def list_notifications(user_id, limit=50):
    notifications = (
        Notification.query
        .filter_by(user_id=user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )
    # actors may have been deleted since; resolve_entity returns None then
    return [(n, resolve_entity(n.actor_entity_id or n.actor_id)) for n in notifications]


def unread_count(user_id):
    return Notification.query.filter_by(user_id=user_id, read=False).count()


def mark_read(user_id, notification_id):
    notification = Notification.query.filter_by(id=notification_id, user_id=user_id).first()
    if not notification:
        raise NotFoundError("Notification not found")

    notification.read = True
    commit_or_raise()
    return notification


def mark_all_read(user_id):
    updated = (
        Notification.query
        .filter_by(user_id=user_id, read=False)
        .update({"read": True}, synchronize_session=False)
    )
    commit_or_raise()
    return updated
