from flask import request, g
from flask_restful import Resource, Api
from voozea.service.rating_service import feed, liked_rating_ids, FEED_GLOBAL, FEED_FOLLOWING
from voozea.utils.decorators import login_optional
from voozea.schemas.rating_schema import RatingSchema
from . import rating_bp

api = Api(rating_bp)
feed_schema = RatingSchema(many=True, exclude=("comments",))


class Feed(Resource):
    @login_optional
    def get(self):
        view = request.args.get("view", FEED_GLOBAL)
        if view not in (FEED_GLOBAL, FEED_FOLLOWING):
            return {"message": f"view must be one of: {FEED_GLOBAL}, {FEED_FOLLOWING}"}, 400

        viewer = g.current_user
        ratings = feed(viewer, view=view)
        liked = liked_rating_ids(viewer, ratings)

        items = feed_schema.dump(ratings)
        for item in items:
            item["liked"] = item["id"] in liked
        return {"view": view, "ratings": items}, 200

api.add_resource(Feed, '/feed')
