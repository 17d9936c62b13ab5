from marshmallow import Schema, fields
from voozea.schemas.business_schema import BusinessSchema
from voozea.schemas.product_schema import ProductSchema
from voozea.schemas.user_schema import PublicUserSchema


class ProductHitSchema(ProductSchema):
    business_name = fields.Function(lambda p: p.business.name, dump_only=True)
    business_slug = fields.Function(lambda p: p.business.slug, dump_only=True)


class SearchResultSchema(Schema):
    businesses = fields.List(fields.Nested(
        BusinessSchema,
        only=("id", "name", "slug", "logo_url", "description", "average_rating")
    ))
    products = fields.List(fields.Nested(
        ProductHitSchema,
        only=("id", "name", "photo_url", "average_rating", "business_name", "business_slug")
    ))
    users = fields.List(fields.Nested(
        PublicUserSchema,
        only=("id", "username", "display_name", "avatar_url")
    ))
