from marshmallow import Schema, fields, validate
from voozea.extension import ma
from voozea.models import Rating, RatingPhoto, RatingComment
from voozea.models.rating import MIN_SCORE, MAX_SCORE
from voozea.schemas.product_schema import ProductSchema
from voozea.schemas.user_schema import PublicUserSchema

AUTHOR_FIELDS = ("id", "username", "display_name", "avatar_url")


class RatingPhotoSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = RatingPhoto
        fields = ("id", "url")


class RatingCommentSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = RatingComment
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    user = fields.Nested(PublicUserSchema, only=AUTHOR_FIELDS, dump_only=True)


class RatingSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Rating
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    user = fields.Nested(PublicUserSchema, only=AUTHOR_FIELDS, dump_only=True)
    product = fields.Nested(ProductSchema, only=("id", "name", "slug", "business"), dump_only=True)
    photos = fields.List(fields.Nested(RatingPhotoSchema), dump_only=True)
    comments = fields.List(fields.Nested(RatingCommentSchema, exclude=("rating_id",)), dump_only=True)


class RatingInputSchema(Schema):
    score = fields.Float(required=True, validate=validate.Range(min=MIN_SCORE, max=MAX_SCORE))
    comment = fields.String(allow_none=True)
    photo_url = fields.String(allow_none=True, validate=validate.Length(max=500))


class CommentInputSchema(Schema):
    content = fields.String(required=True, validate=validate.Length(min=1))
