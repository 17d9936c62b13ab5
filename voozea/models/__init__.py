from voozea.extension import db
from voozea.models.entity import Entity
from voozea.models.user import User
from voozea.models.business import Business
from voozea.models.membership import BusinessMember
from voozea.models.claim import BusinessClaim
from voozea.models.category import Category
from voozea.models.product import Product
from voozea.models.rating import Rating, RatingPhoto, RatingLike, RatingComment
from voozea.models.follow import EntityFollow
from voozea.models.notification import Notification

__all__ = [
    "db",
    "Entity",
    "User",
    "Business",
    "BusinessMember",
    "BusinessClaim",
    "Category",
    "Product",
    "Rating",
    "RatingPhoto",
    "RatingLike",
    "RatingComment",
    "EntityFollow",
    "Notification",
]
