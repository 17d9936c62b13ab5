from marshmallow import Schema, fields, validate, EXCLUDE
from voozea.extension import ma
from voozea.models import Category
from voozea.models.category import CATEGORY_TYPES


class CategorySchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Category
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class CategoryInputSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    type = fields.String(required=True, validate=validate.OneOf(CATEGORY_TYPES))
    slug = fields.String(allow_none=True, validate=validate.Length(max=120))
    parent_id = fields.Integer(allow_none=True)
    default_product_category_id = fields.Integer(allow_none=True)
    # a JSON string or an object; checked by parse_attribute_schema
    attribute_schema = fields.Raw(allow_none=True)
