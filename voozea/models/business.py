from datetime import datetime
from voozea.extension import db
from voozea.models.entity import Entity, ENTITY_BUSINESS

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class Business(db.Model):
    __tablename__ = "businesses"

    id = db.Column(db.String(36), db.ForeignKey("entities.id"), primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(60), unique=True, nullable=False)
    owner_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    is_claimed = db.Column(db.Boolean, nullable=False, default=False)
    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)
    description = db.Column(db.Text, nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(120), nullable=True)
    state = db.Column(db.String(120), nullable=True)
    postal_code = db.Column(db.String(20), nullable=True)
    country = db.Column(db.String(120), nullable=True)
    logo_url = db.Column(db.String(500), nullable=True)
    cover_url = db.Column(db.String(500), nullable=True)
    instagram_url = db.Column(db.String(255), nullable=True)
    facebook_url = db.Column(db.String(255), nullable=True)
    twitter_url = db.Column(db.String(255), nullable=True)
    # {"monday": {"open": "09:00", "close": "17:00"}, "tuesday": None, ...}
    hours = db.Column(db.JSON, nullable=True)
    average_rating = db.Column(db.Float, nullable=True)
    total_ratings = db.Column(db.Integer, nullable=False, default=0)
    follower_count = db.Column(db.Integer, nullable=False, default=0)
    following_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    entity = db.relationship("Entity")
    owner = db.relationship(
        "User",
        foreign_keys=[owner_id],
        back_populates="owned_businesses"
    )
    category = db.relationship("Category", foreign_keys=[category_id])
    members = db.relationship(
        "BusinessMember",
        back_populates="business",
        cascade="all, delete-orphan"
    )
    products = db.relationship("Product", back_populates="business", cascade="all, delete-orphan")
    claims = db.relationship("BusinessClaim", back_populates="business", cascade="all, delete-orphan")

    def __init__(self, **kwargs):
        kwargs.setdefault("entity", Entity(type=ENTITY_BUSINESS))
        super().__init__(**kwargs)
