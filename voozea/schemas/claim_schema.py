from marshmallow import Schema, fields
from voozea.extension import ma
from voozea.models import BusinessClaim
from voozea.schemas.business_schema import BusinessSchema
from voozea.schemas.user_schema import PublicUserSchema


class ClaimSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = BusinessClaim
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    business = fields.Nested(BusinessSchema, only=("id", "name", "slug", "is_claimed"), dump_only=True)
    user = fields.Nested(PublicUserSchema, only=("id", "username", "display_name"), dump_only=True)


class ClaimInputSchema(Schema):
    reason = fields.String(required=True)


class ClaimReviewSchema(Schema):
    notes = fields.String(allow_none=True)
