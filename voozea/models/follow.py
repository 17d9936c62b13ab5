from datetime import datetime
from voozea.extension import db


class EntityFollow(db.Model):
    """Directed edge follower -> following between two entities."""
    __tablename__ = "entity_follows"

    id = db.Column(db.Integer, primary_key=True)
    follower_id = db.Column(db.String(36), db.ForeignKey("entities.id"), nullable=False)
    following_id = db.Column(db.String(36), db.ForeignKey("entities.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("follower_id", "following_id", name="uq_entity_follows_pair"),
        db.CheckConstraint("follower_id <> following_id", name="ck_entity_follows_no_self"),
        db.Index("ix_entity_follows_following", "following_id", "created_at"),
    )
