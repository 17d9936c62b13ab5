from voozea.models import Business, BusinessClaim, Category, Product, User
from voozea.models.claim import CLAIM_PENDING


def admin_stats():
    return {
        "pending_claims": BusinessClaim.query.filter_by(status=CLAIM_PENDING).count(),
        "businesses": Business.query.count(),
        "products": Product.query.count(),
        "users": User.query.count(),
        "categories": Category.query.count(),
    }
