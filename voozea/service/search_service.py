from sqlalchemy import or_

from voozea.models import Business, Product, User
from voozea.utils.helper import like_pattern

SEARCH_LIMIT = 5
MIN_QUERY_LENGTH = 2


def global_search(query):
    """Businesses, products and users whose names contain ``query``."""
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return {"businesses": [], "products": [], "users": []}

    pattern = like_pattern(query)

    businesses = (
        Business.query
        .filter(Business.name.ilike(pattern, escape="\\"))
        .order_by(Business.name)
        .limit(SEARCH_LIMIT)
        .all()
    )
    products = (
        Product.query
        .join(Business, Business.id == Product.business_id)
        .filter(Product.name.ilike(pattern, escape="\\"))
        .order_by(Product.name)
        .limit(SEARCH_LIMIT)
        .all()
    )
    users = (
        User.query
        .filter(
            or_(
                User.username.ilike(pattern, escape="\\"),
                User.display_name.ilike(pattern, escape="\\"),
            )
        )
        .order_by(User.username)
        .limit(SEARCH_LIMIT)
        .all()
    )
    return {"businesses": businesses, "products": products, "users": users}
