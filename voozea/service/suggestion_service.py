"""
"Who to follow" suggestions.

Candidates come from two pools: the most followed users and the authors of
the latest ratings. Each candidate is scored by its rank in those pools and
gets a boost when it has rated something recently.
"""
from voozea.models import User, Rating
from voozea.service.follow_service import following_ids

SUGGESTION_LIMIT = 6
RECENT_RATINGS_WINDOW = 50
POPULARITY_WEIGHT = 2
ACTIVITY_WEIGHT = 1.5
RECENT_RATING_BOOST = 3


def _recent_ratings_by_user(exclude_ids):
    """Latest rating per user among the newest ratings overall."""
    ratings = (
        Rating.query
        .filter(Rating.user_id.notin_(exclude_ids))
        .order_by(Rating.created_at.desc(), Rating.id.desc())
        .limit(RECENT_RATINGS_WINDOW)
        .all()
    )
    latest = {}
    for rating in ratings:
        if rating.user_id not in latest:
            latest[rating.user_id] = rating
    return latest


def suggested_users(principal, limit=SUGGESTION_LIMIT):
    """Return ``[(user, recent_rating_or_None), ...]`` best first."""
    exclude_ids = [principal.id] + following_ids(principal.id)

    popular = (
        User.query
        .filter(User.id.notin_(exclude_ids))
        .order_by(User.follower_count.desc(), User.created_at)
        .limit(limit * 2)
        .all()
    )
    recent = _recent_ratings_by_user(exclude_ids)

    popular_ids = {u.id for u in popular}
    extra_ids = [uid for uid in recent if uid not in popular_ids]
    active = []
    if extra_ids:
        by_id = {u.id: u for u in User.query.filter(User.id.in_(extra_ids)).all()}
        # keep the recency order of the ratings window
        active = [by_id[uid] for uid in extra_ids if uid in by_id][:limit]

    scores = {}
    for index, user in enumerate(popular):
        scores[user.id] = [user, (len(popular) - index) * POPULARITY_WEIGHT]
    for index, user in enumerate(active):
        entry = scores.setdefault(user.id, [user, 0])
        entry[1] += (len(active) - index) * ACTIVITY_WEIGHT
    for user_id in recent:
        if user_id in scores:
            scores[user_id][1] += RECENT_RATING_BOOST

    ranked = sorted(scores.values(), key=lambda entry: entry[1], reverse=True)[:limit]
    return [(user, recent.get(user.id)) for user, _ in ranked]
