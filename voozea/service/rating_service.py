"""
Ratings, photos, likes and comments.

One rating per (user, product): rating again updates the row and replaces
its photo. Averages and like/comment counts are recomputed in the same
transaction as the write that changes them.
"""
import logging
from sqlalchemy import func

from voozea.extension import db
from voozea.models import Product, Rating, RatingPhoto, RatingLike, RatingComment, Business
from voozea.models.rating import MIN_SCORE, MAX_SCORE
from voozea.models.notification import NOTIFY_LIKE, NOTIFY_COMMENT
from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.service.follow_service import following_ids
from voozea.service.notification_service import notify
from voozea.utils.helper import commit_or_raise, flush_or_raise

logger = logging.getLogger(__name__)

FEED_LIMIT = 50
FEED_GLOBAL = "global"
FEED_FOLLOWING = "following"


def parse_score(raw):
    try:
        score = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("Rating must be a number between 1 and 10")
    if score != score or score < MIN_SCORE or score > MAX_SCORE:
        raise ValidationError("Rating must be between 1 and 10")
    return round(score, 1)


def _refresh_product_stats(product):
    average, count = (
        db.session.query(func.avg(Rating.score), func.count(Rating.id))
        .filter(Rating.product_id == product.id)
        .one()
    )
    product.average_rating = round(average, 2) if average is not None else None
    product.rating_count = count

    business_average, business_count = (
        db.session.query(func.avg(Rating.score), func.count(Rating.id))
        .join(Product, Product.id == Rating.product_id)
        .filter(Product.business_id == product.business_id)
        .one()
    )
    business = db.session.get(Business, product.business_id)
    if business:
        business.average_rating = round(business_average, 2) if business_average is not None else None
        business.total_ratings = business_count


def rate_product(principal, product_id, score, comment=None, photo_url=None):
    score = parse_score(score)

    product = db.session.get(Product, product_id)
    if not product:
        raise NotFoundError("Product not found")

    rating = Rating.query.filter_by(product_id=product.id, user_id=principal.id).first()
    if rating:
        rating.score = score
        rating.comment = comment or None
        RatingPhoto.query.filter_by(rating_id=rating.id).delete(synchronize_session=False)
        # the bulk delete bypasses the session; drop the stale collection
        db.session.expire(rating, ["photos"])
        created = False
    else:
        rating = Rating(
            product_id=product.id,
            user_id=principal.id,
            score=score,
            comment=comment or None,
        )
        db.session.add(rating)
        created = True

    flush_or_raise("You already rated this product")
    if photo_url:
        db.session.add(RatingPhoto(rating_id=rating.id, url=photo_url))

    db.session.flush()
    _refresh_product_stats(product)
    commit_or_raise("You already rated this product")
    logger.info(f"Rating {'created' if created else 'updated'}: {rating.id} product={product.id} score={score}")
    return rating


def _get_rating(rating_id):
    rating = db.session.get(Rating, rating_id)
    if not rating:
        raise NotFoundError("Rating not found")
    return rating


def _refresh_like_count(rating):
    rating.like_count = RatingLike.query.filter_by(rating_id=rating.id).count()


def _refresh_comment_count(rating):
    rating.comment_count = RatingComment.query.filter_by(rating_id=rating.id).count()


def like_rating(principal, rating_id):
    rating = _get_rating(rating_id)
    if RatingLike.query.filter_by(rating_id=rating.id, user_id=principal.id).first():
        raise ConflictError("You already liked this rating")

    rating.like_count = RatingLike.query.filter_by(rating_id=rating.id).count() + 1
    db.session.add(RatingLike(rating_id=rating.id, user_id=principal.id))
    if rating.user_id != principal.id:
        notify(rating.user_id, NOTIFY_LIKE, actor_id=principal.id, rating_id=rating.id)
    commit_or_raise("You already liked this rating")
    return rating


def unlike_rating(principal, rating_id):
    rating = _get_rating(rating_id)
    RatingLike.query.filter_by(rating_id=rating.id, user_id=principal.id).delete(synchronize_session=False)
    _refresh_like_count(rating)
    commit_or_raise()
    return rating


def add_comment(principal, rating_id, content):
    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment cannot be empty")

    rating = _get_rating(rating_id)
    comment = RatingComment(rating_id=rating.id, user_id=principal.id, content=content)
    db.session.add(comment)
    db.session.flush()
    _refresh_comment_count(rating)
    if rating.user_id != principal.id:
        notify(rating.user_id, NOTIFY_COMMENT, actor_id=principal.id, rating_id=rating.id)
    commit_or_raise()
    return comment


def delete_comment(principal, comment_id):
    comment = db.session.get(RatingComment, comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    if comment.user_id != principal.id:
        raise AuthorizationError("You can only delete your own comments")

    rating = comment.rating
    db.session.delete(comment)
    db.session.flush()
    _refresh_comment_count(rating)
    commit_or_raise()


def feed(principal=None, view=FEED_GLOBAL, limit=FEED_LIMIT):
    """Newest ratings, either everyone's or from the users the principal follows."""
    query = Rating.query
    if view == FEED_FOLLOWING:
        if principal is None:
            return []
        followed = following_ids(principal.id)
        if not followed:
            return []
        query = query.filter(Rating.user_id.in_(followed))
    return query.order_by(Rating.created_at.desc(), Rating.id.desc()).limit(limit).all()


def liked_rating_ids(principal, ratings):
    if principal is None or not ratings:
        return set()
    rows = (
        RatingLike.query
        .with_entities(RatingLike.rating_id)
        .filter(RatingLike.user_id == principal.id, RatingLike.rating_id.in_([r.id for r in ratings]))
        .all()
    )
    return {row.rating_id for row in rows}
