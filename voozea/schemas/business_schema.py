from marshmallow import Schema, fields, validate, EXCLUDE
from voozea.extension import ma
from voozea.models import Business
from voozea.schemas.category_schema import CategorySchema
from voozea.schemas.user_schema import PublicUserSchema


# For reading responses
class BusinessSchema(ma.SQLAlchemyAutoSchema):
    category = fields.Nested(CategorySchema, only=("id", "name", "slug"), dump_only=True)
    owner = fields.Nested(PublicUserSchema, only=("id", "username", "display_name", "avatar_url"), dump_only=True)

    class Meta:
        model = Business
        load_instance = True
        include_fk = True
        dump_only = ("id", "created_at")

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


# For creating/updating
class BusinessInputSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    slug = fields.String(allow_none=True)
    category_id = fields.Integer(allow_none=True)
    hours = fields.Dict(allow_none=True)
    description = fields.String(allow_none=True)
    phone = fields.String(allow_none=True, validate=validate.Length(max=50))
    website = fields.String(allow_none=True, validate=validate.Length(max=255))
    address = fields.String(allow_none=True, validate=validate.Length(max=255))
    city = fields.String(allow_none=True)
    state = fields.String(allow_none=True)
    postal_code = fields.String(allow_none=True, validate=validate.Length(max=20))
    country = fields.String(allow_none=True)
    logo_url = fields.String(allow_none=True)
    cover_url = fields.String(allow_none=True)
    instagram_url = fields.String(allow_none=True)
    facebook_url = fields.String(allow_none=True)
    twitter_url = fields.String(allow_none=True)
    as_owner = fields.Boolean(load_default=False)
