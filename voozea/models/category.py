from datetime import datetime
from voozea.extension import db

TYPE_BUSINESS = "business_type"
TYPE_PRODUCT = "product_category"
CATEGORY_TYPES = (TYPE_BUSINESS, TYPE_PRODUCT)


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    type = db.Column(db.String(30), nullable=False)
    parent_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)
    # only meaningful on business types
    default_product_category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)
    # only meaningful on product categories, see voozea.service.attribute_schema
    attribute_schema = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    parent = db.relationship(
        "Category",
        remote_side=[id],
        foreign_keys=[parent_id],
        backref="children"
    )
    default_product_category = db.relationship(
        "Category",
        remote_side=[id],
        foreign_keys=[default_product_category_id]
    )
