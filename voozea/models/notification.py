from datetime import datetime
from voozea.extension import db

NOTIFY_FOLLOW = "follow"
NOTIFY_LIKE = "like"
NOTIFY_COMMENT = "comment"
NOTIFY_CLAIM_APPROVED = "claim_approved"
NOTIFY_CLAIM_REJECTED = "claim_rejected"
NOTIFY_BUSINESS_FOLLOW = "business_follow"
NOTIFY_MANAGER_INVITE = "manager_invite"
NOTIFY_MANAGER_ADDED = "manager_added"
NOTIFY_MANAGER_REMOVED = "manager_removed"
NOTIFY_OWNERSHIP_TRANSFER = "ownership_transfer"

NOTIFICATION_TYPES = (
    NOTIFY_FOLLOW,
    NOTIFY_LIKE,
    NOTIFY_COMMENT,
    NOTIFY_CLAIM_APPROVED,
    NOTIFY_CLAIM_REJECTED,
    NOTIFY_BUSINESS_FOLLOW,
    NOTIFY_MANAGER_INVITE,
    NOTIFY_MANAGER_ADDED,
    NOTIFY_MANAGER_REMOVED,
    NOTIFY_OWNERSHIP_TRANSFER,
)


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    type = db.Column(db.String(30), nullable=False)
    # legacy actor reference (always a user); actor_entity_id is the generic one
    actor_id = db.Column(db.String(36), nullable=True)
    actor_entity_id = db.Column(db.String(36), nullable=True)
    rating_id = db.Column(db.Integer, db.ForeignKey("ratings.id", ondelete="SET NULL"), nullable=True)
    business_id = db.Column(db.String(36), db.ForeignKey("businesses.id", ondelete="SET NULL"), nullable=True)
    read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    business = db.relationship("Business")
    rating = db.relationship("Rating")
