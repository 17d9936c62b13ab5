from marshmallow import Schema, fields, validate
from voozea.extension import ma
from voozea.models import User


class UserSchema(ma.SQLAlchemyAutoSchema):
    """The signed-in user's own account."""
    class Meta:
        model = User
        load_instance = True
        include_fk = True  # id is a foreign key to entities
        exclude = ("password_hash",)

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    needs_onboarding = fields.Boolean(dump_only=True)


class PublicUserSchema(ma.SQLAlchemyAutoSchema):
    """What anyone may see about a user."""
    class Meta:
        model = User
        include_fk = True
        fields = (
            "id",
            "username",
            "display_name",
            "avatar_url",
            "bio",
            "follower_count",
            "following_count",
            "is_business_owner",
            "created_at",
        )

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class RegisterSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=6))
    username = fields.String(required=True, validate=validate.Length(min=3, max=60))
    display_name = fields.String(allow_none=True, validate=validate.Length(max=120))


class LoginSchema(Schema):
    email = fields.String(required=True)
    password = fields.String(required=True)


class ProfileUpdateSchema(Schema):
    username = fields.String(allow_none=True)
    display_name = fields.String(allow_none=True, validate=validate.Length(max=120))
    bio = fields.String(allow_none=True, validate=validate.Length(max=500))
    avatar_url = fields.String(allow_none=True, validate=validate.Length(max=500))
