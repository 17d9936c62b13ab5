from marshmallow import Schema, fields
from voozea.extension import ma
from voozea.models import BusinessMember
from voozea.schemas.business_schema import BusinessSchema
from voozea.schemas.user_schema import PublicUserSchema


class MembershipSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = BusinessMember
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    user = fields.Nested(PublicUserSchema, only=("id", "username", "display_name", "avatar_url"), dump_only=True)
    business = fields.Nested(BusinessSchema, only=("id", "name", "slug", "logo_url"), dump_only=True)
    inviter = fields.Nested(PublicUserSchema, only=("id", "username", "display_name"), dump_only=True)


class InviteSchema(Schema):
    username = fields.String(required=True)


class TransferSchema(Schema):
    new_owner_id = fields.String(required=True)
