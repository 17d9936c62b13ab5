from datetime import datetime
from voozea.extension import db

MIN_SCORE = 1.0
MAX_SCORE = 10.0


class Rating(db.Model):
    __tablename__ = "ratings"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    score = db.Column(db.Float, nullable=False)
    comment = db.Column(db.Text, nullable=True)
    like_count = db.Column(db.Integer, nullable=False, default=0)
    comment_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("user_id", "product_id", name="uq_ratings_user_product"),
        db.CheckConstraint("score >= 1 AND score <= 10", name="ck_ratings_score"),
    )

    user = db.relationship("User", back_populates="ratings")
    product = db.relationship("Product", back_populates="ratings")
    photos = db.relationship("RatingPhoto", back_populates="rating", cascade="all, delete-orphan")
    likes = db.relationship("RatingLike", back_populates="rating", cascade="all, delete-orphan")
    comments = db.relationship(
        "RatingComment",
        back_populates="rating",
        cascade="all, delete-orphan",
        order_by="RatingComment.created_at"
    )


class RatingPhoto(db.Model):
    __tablename__ = "rating_photos"

    id = db.Column(db.Integer, primary_key=True)
    rating_id = db.Column(db.Integer, db.ForeignKey("ratings.id", ondelete="CASCADE"), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    rating = db.relationship("Rating", back_populates="photos")


class RatingLike(db.Model):
    __tablename__ = "rating_likes"

    id = db.Column(db.Integer, primary_key=True)
    rating_id = db.Column(db.Integer, db.ForeignKey("ratings.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("rating_id", "user_id", name="uq_rating_likes_rating_user"),
    )

    rating = db.relationship("Rating", back_populates="likes")


class RatingComment(db.Model):
    __tablename__ = "rating_comments"

    id = db.Column(db.Integer, primary_key=True)
    rating_id = db.Column(db.Integer, db.ForeignKey("ratings.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    rating = db.relationship("Rating", back_populates="comments")
    user = db.relationship("User")
