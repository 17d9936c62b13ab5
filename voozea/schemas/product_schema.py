from marshmallow import Schema, fields, validate, EXCLUDE
from voozea.extension import ma
from voozea.models import Product
from voozea.schemas.business_schema import BusinessSchema
from voozea.schemas.category_schema import CategorySchema


class ProductSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Product
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    business = fields.Nested(BusinessSchema, only=("id", "name", "slug", "logo_url"), dump_only=True)
    category = fields.Nested(CategorySchema, only=("id", "name", "slug", "attribute_schema"), dump_only=True)


class ProductInputSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    description = fields.String(allow_none=True)
    photo_url = fields.String(allow_none=True, validate=validate.Length(max=500))
    category_id = fields.Integer(allow_none=True)
    attributes = fields.Dict(allow_none=True)


class ProductAttributesSchema(Schema):
    attributes = fields.Dict(required=True, allow_none=True)
