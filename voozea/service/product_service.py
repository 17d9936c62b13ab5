import logging
from voozea.extension import db
from voozea.models import Business, Category, Product, Rating
from voozea.models.category import TYPE_PRODUCT
from voozea.errors import ValidationError, AuthorizationError, NotFoundError
from voozea.service.attribute_schema import validate_attributes, clean_attributes
from voozea.service.business_service import slugify, unique_slug
from voozea.service.entity_service import get_business_role
from voozea.utils.helper import commit_or_raise

logger = logging.getLogger(__name__)

PRODUCT_SLUG_MAX_LENGTH = 255

# attributes accepted when a product has no category
FALLBACK_ATTRIBUTES = {
    "abv": {"type": "number", "label": "ABV", "optional": True},
    "price": {"type": "number", "label": "Price", "optional": True},
}


def _require_team(principal, business_id, message):
    if get_business_role(business_id, principal.id) is None:
        raise AuthorizationError(message)


def _product_category(category_id):
    if not category_id:
        return None
    category = db.session.get(Category, category_id)
    if not category or category.type != TYPE_PRODUCT:
        raise ValidationError("Category must be an existing product category")
    return category


def _checked_attributes(attributes, schema):
    """Keep only schema keys, validate them and coerce numbers."""
    schema = schema or {}
    picked = {k: v for k, v in (attributes or {}).items() if k in schema}
    errors = validate_attributes(picked, schema)
    if errors:
        raise ValidationError(", ".join(errors))
    return clean_attributes(picked, schema)


def create_product(principal, business_id, data):
    business = db.session.get(Business, business_id)
    if not business:
        raise NotFoundError("Business not found")
    _require_team(principal, business.id, "You do not have permission to add products to this business")

    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Product name is required")

    category = _product_category(data.get("category_id"))
    schema = category.attribute_schema if category else FALLBACK_ATTRIBUTES
    attributes = _checked_attributes(data.get("attributes"), schema)

    slug = unique_slug(
        slugify(name),
        lambda s: Product.query.filter_by(business_id=business.id, slug=s).first() is not None,
        max_length=PRODUCT_SLUG_MAX_LENGTH
    )

    product = Product(
        business_id=business.id,
        name=name,
        slug=slug,
        description=data.get("description") or None,
        photo_url=data.get("photo_url") or None,
        category_id=category.id if category else None,
        attributes=attributes,
    )
    db.session.add(product)
    commit_or_raise("A product with this slug already exists")
    logger.info(f"Product created: {product.id} in business {business.id} by {principal.id}")
    return product


def _team_product(principal, product_id):
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFoundError("Product not found")
    _require_team(principal, product.business_id, "You do not have permission to edit this product")
    return product


def update_product(principal, product_id, data):
    product = _team_product(principal, product_id)

    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            raise ValidationError("Product name is required")
        product.name = name
    if "description" in data:
        product.description = data.get("description") or None
    if "photo_url" in data:
        product.photo_url = data.get("photo_url") or None

    commit_or_raise()
    return product


def update_product_attributes(principal, product_id, attributes):
    product = _team_product(principal, product_id)

    if attributes is not None and not isinstance(attributes, dict):
        raise ValidationError("Attributes must be an object")

    schema = product.category.attribute_schema if product.category else None
    if schema:
        errors = validate_attributes(attributes, schema)
        if errors:
            raise ValidationError(", ".join(errors))

    product.attributes = clean_attributes(attributes, schema)
    commit_or_raise()
    return product


def get_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFoundError("Product not found")
    ratings = (
        Rating.query
        .filter_by(product_id=product.id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
        .all()
    )
    return product, ratings
