from flask_restful import Resource, Api
from flask import request, g
from voozea.service.follow_service import (
    follow, unfollow, is_following, followers_page, following_page,
    follow_user, unfollow_user, follow_business, unfollow_business,
)
from voozea.schemas.entity_schema import EntityInfoSchema, FollowInputSchema
from voozea.utils.decorators import login_required, service_errors
from . import entity_bp

api = Api(entity_bp)
entities_schema = EntityInfoSchema(many=True)
follow_input_schema = FollowInputSchema()


def _page_response(page):
    return {
        "items": entities_schema.dump(page["items"]),
        "next_cursor": page["next_cursor"]
    }, 200


class Followers(Resource):
    @service_errors
    def get(self, entity_id):
        page = followers_page(
            entity_id,
            limit=request.args.get("limit", type=int),
            cursor=request.args.get("cursor")
        )
        return _page_response(page)


class Following(Resource):
    @service_errors
    def get(self, entity_id):
        page = following_page(
            entity_id,
            limit=request.args.get("limit", type=int),
            cursor=request.args.get("cursor")
        )
        return _page_response(page)


class FollowStatus(Resource):
    def get(self):
        follower_id = request.args.get("follower_id")
        following_id = request.args.get("following_id")
        if not follower_id or not following_id:
            return {"message": "follower_id and following_id are required"}, 400
        return {"is_following": is_following(follower_id, following_id)}, 200


# ---------------------------
# Follow as any actable entity
# ---------------------------
class EntityFollowResource(Resource):
    def _edge(self):
        data = request.get_json(silent=True) or request.args.to_dict()
        errors = follow_input_schema.validate(data)
        return data, errors

    @login_required
    @service_errors
    def post(self):
        data, errors = self._edge()
        if errors:
            return {"errors": errors}, 400
        follow(g.current_user.id, data["follower_id"], data["following_id"])
        return {"message": "Following"}, 201

    @login_required
    @service_errors
    def delete(self):
        data, errors = self._edge()
        if errors:
            return {"errors": errors}, 400
        unfollow(g.current_user.id, data["follower_id"], data["following_id"])
        return {"message": "Unfollowed"}, 200


# ---------------------------
# Follow as yourself
# ---------------------------
class UserFollow(Resource):
    @login_required
    @service_errors
    def post(self, user_id):
        follow_user(g.current_user.id, user_id)
        return {"message": "Following"}, 201

    @login_required
    @service_errors
    def delete(self, user_id):
        unfollow_user(g.current_user.id, user_id)
        return {"message": "Unfollowed"}, 200


class BusinessFollow(Resource):
    @login_required
    @service_errors
    def post(self, business_id):
        follow_business(g.current_user.id, business_id)
        return {"message": "Following"}, 201

    @login_required
    @service_errors
    def delete(self, business_id):
        unfollow_business(g.current_user.id, business_id)
        return {"message": "Unfollowed"}, 200

api.add_resource(Followers, '/entities/<string:entity_id>/followers')
api.add_resource(Following, '/entities/<string:entity_id>/following')
api.add_resource(FollowStatus, '/entities/follows/status')
api.add_resource(EntityFollowResource, '/entities/follows')
api.add_resource(UserFollow, '/users/<string:user_id>/follow')
api.add_resource(BusinessFollow, '/businesses/<string:business_id>/follow')
