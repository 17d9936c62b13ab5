import logging
from voozea.extension import db
from voozea.models import Business, Category, Product
from voozea.models.category import CATEGORY_TYPES, TYPE_BUSINESS, TYPE_PRODUCT
from voozea.errors import ValidationError, ConflictError, NotFoundError
from voozea.service.attribute_schema import parse_attribute_schema
from voozea.service.business_service import slugify
from voozea.utils.helper import commit_or_raise

logger = logging.getLogger(__name__)


def _apply(category, data):
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Category name is required")

    category_type = data.get("type")
    if category_type not in CATEGORY_TYPES:
        raise ValidationError(f"type must be one of: {', '.join(CATEGORY_TYPES)}")

    slug = slugify(data.get("slug") or name)
    if not slug:
        raise ValidationError("Category slug is required")
    taken = Category.query.filter(Category.slug == slug)
    if category.id is not None:
        taken = taken.filter(Category.id != category.id)
    if taken.first():
        raise ConflictError(f'Category slug "{slug}" is already taken')

    parent_id = data.get("parent_id") or None
    if parent_id is not None:
        parent = db.session.get(Category, parent_id)
        if not parent:
            raise ValidationError("Parent category not found")
        if parent.type != category_type:
            raise ValidationError("Parent category must be of the same type")
        if category.id is not None and parent.id == category.id:
            raise ValidationError("A category cannot be its own parent")

    default_id = data.get("default_product_category_id") or None
    if default_id is not None:
        if category_type != TYPE_BUSINESS:
            raise ValidationError("Only business types can have a default product category")
        default = db.session.get(Category, default_id)
        if not default or default.type != TYPE_PRODUCT:
            raise ValidationError("Default product category must be an existing product category")

    attribute_schema = parse_attribute_schema(data.get("attribute_schema"))
    if attribute_schema and category_type != TYPE_PRODUCT:
        raise ValidationError("Only product categories can have an attribute schema")

    category.name = name
    category.slug = slug
    category.type = category_type
    category.parent_id = parent_id
    category.default_product_category_id = default_id
    category.attribute_schema = attribute_schema
    return category


def create_category(data):
    category = _apply(Category(), data)
    db.session.add(category)
    commit_or_raise("Category slug is already taken")
    logger.info(f"Category created: {category.id} ({category.slug})")
    return category


def update_category(category_id, data):
    category = db.session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category not found")
    _apply(category, data)
    commit_or_raise("Category slug is already taken")
    logger.info(f"Category updated: {category.id}")
    return category


def delete_category(category_id):
    """Refuse while anything still points at the category."""
    category = db.session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category not found")

    if Business.query.filter_by(category_id=category.id).first():
        raise ConflictError("Cannot delete: this category is assigned to one or more businesses")

    if Product.query.filter_by(category_id=category.id).first():
        raise ConflictError("Cannot delete: this category is assigned to one or more products")

    using_as_default = Category.query.filter_by(default_product_category_id=category.id).first()
    if using_as_default:
        raise ConflictError(
            f'Cannot delete: this is the default product category for "{using_as_default.name}"'
        )

    if Category.query.filter_by(parent_id=category.id).first():
        raise ConflictError("Cannot delete: this category has subcategories. Delete them first.")

    db.session.delete(category)
    commit_or_raise()
    logger.info(f"Category deleted: {category_id}")


def list_categories(category_type=None):
    query = Category.query
    if category_type:
        query = query.filter_by(type=category_type)
    return query.order_by(Category.type, Category.name).all()
