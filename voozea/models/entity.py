from datetime import datetime
from uuid import uuid4
from voozea.extension import db

ENTITY_USER = "user"
ENTITY_BUSINESS = "business"
ENTITY_TYPES = (ENTITY_USER, ENTITY_BUSINESS)


def new_id():
    return str(uuid4())


class Entity(db.Model):
    """
    Shared identity namespace for everything that can follow or be followed.
    A user's and a business's primary key is the id of their entity row;
    ``type`` is fixed at creation.
    """
    __tablename__ = "entities"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    type = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint("type IN ('user', 'business')", name="ck_entities_type"),
    )
