from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from voozea.extension import db
from voozea.models.entity import Entity, ENTITY_USER


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), db.ForeignKey("entities.id"), primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    username = db.Column(db.String(30), unique=True, nullable=False)
    display_name = db.Column(db.String(120), nullable=True)
    avatar_url = db.Column(db.String(500), nullable=True)
    bio = db.Column(db.String(500), nullable=True)
    follower_count = db.Column(db.Integer, nullable=False, default=0)
    following_count = db.Column(db.Integer, nullable=False, default=0)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    is_business_owner = db.Column(db.Boolean, nullable=False, default=False)
    onboarding_completed = db.Column(db.Boolean, nullable=False, default=False)
    onboarding_skipped = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    entity = db.relationship("Entity")

    owned_businesses = db.relationship(
        "Business",
        foreign_keys="Business.owner_id",
        back_populates="owner"
    )
    memberships = db.relationship(
        "BusinessMember",
        foreign_keys="BusinessMember.user_id",
        back_populates="user"
    )
    ratings = db.relationship("Rating", back_populates="user")

    def __init__(self, **kwargs):
        kwargs.setdefault("entity", Entity(type=ENTITY_USER))
        super().__init__(**kwargs)

    @property
    def name(self):
        return self.display_name or self.username

    @property
    def needs_onboarding(self):
        return not (self.onboarding_completed or self.onboarding_skipped)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
