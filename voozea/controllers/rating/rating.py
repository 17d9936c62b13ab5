from flask import request, g
from flask_restful import Resource, Api
from voozea.service.rating_service import (
    rate_product, like_rating, unlike_rating, add_comment, delete_comment,
)
from voozea.utils.decorators import login_required, service_errors
from voozea.schemas.rating_schema import (
    RatingSchema, RatingCommentSchema, RatingInputSchema, CommentInputSchema,
)
from . import rating_bp

api = Api(rating_bp)

rating_schema = RatingSchema()
comment_schema = RatingCommentSchema()
rating_input_schema = RatingInputSchema()
comment_input_schema = CommentInputSchema()


class ProductRatings(Resource):
    @login_required
    @service_errors
    def post(self, product_id):
        json_data = request.get_json(silent=True) or {}
        errors = rating_input_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        rating = rate_product(
            g.current_user,
            product_id,
            json_data["score"],
            comment=json_data.get("comment"),
            photo_url=json_data.get("photo_url")
        )
        return {"rating": rating_schema.dump(rating), "message": "Rating saved"}, 200


class RatingLikeResource(Resource):
    @login_required
    @service_errors
    def post(self, rating_id):
        rating = like_rating(g.current_user, rating_id)
        return {"like_count": rating.like_count, "liked": True}, 201

    @login_required
    @service_errors
    def delete(self, rating_id):
        rating = unlike_rating(g.current_user, rating_id)
        return {"like_count": rating.like_count, "liked": False}, 200


class RatingComments(Resource):
    @login_required
    @service_errors
    def post(self, rating_id):
        json_data = request.get_json(silent=True) or {}
        errors = comment_input_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        comment = add_comment(g.current_user, rating_id, json_data["content"])
        return {"comment": comment_schema.dump(comment)}, 201


class CommentResource(Resource):
    @login_required
    @service_errors
    def delete(self, comment_id):
        delete_comment(g.current_user, comment_id)
        return {"message": "Comment deleted"}, 200

api.add_resource(ProductRatings, '/products/<int:product_id>/ratings')
api.add_resource(RatingLikeResource, '/ratings/<int:rating_id>/like')
api.add_resource(RatingComments, '/ratings/<int:rating_id>/comments')
api.add_resource(CommentResource, '/comments/<int:comment_id>')
