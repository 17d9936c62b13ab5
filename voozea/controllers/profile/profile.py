from flask_restful import Resource, Api
from flask import request, g
from voozea.service.profile_service import get_profile_by_username
from voozea.service.follow_service import is_following
from voozea.schemas.user_schema import UserSchema, PublicUserSchema, ProfileUpdateSchema
from voozea.schemas.rating_schema import RatingSchema
from voozea.utils.decorators import login_required, login_optional, service_errors
from voozea.controllers.auth.me import apply_profile_patch
from . import profile_bp

api = Api(profile_bp)
user_schema = UserSchema()
public_user_schema = PublicUserSchema()
profile_update_schema = ProfileUpdateSchema()
ratings_schema = RatingSchema(many=True, exclude=("comments",))


class ProfileResource(Resource):
    @login_optional
    @service_errors
    def get(self, username):
        user = get_profile_by_username(username)
        viewer = g.current_user
        ratings = sorted(user.ratings, key=lambda r: (r.created_at, r.id), reverse=True)
        return {
            "profile": public_user_schema.dump(user),
            "ratings": ratings_schema.dump(ratings),
            "is_own_profile": bool(viewer and viewer.id == user.id),
            "is_following": bool(viewer and viewer.id != user.id and is_following(viewer.id, user.id))
        }, 200


class ProfileUpdate(Resource):
    @login_required
    @service_errors
    def patch(self):
        data = request.get_json(silent=True) or {}
        errors = profile_update_schema.validate(data)
        if errors:
            return {"errors": errors}, 400

        user = apply_profile_patch(g.current_user, data)
        return {"profile": user_schema.dump(user), "message": "Profile updated"}, 200

api.add_resource(ProfileResource, '/profiles/<string:username>')
api.add_resource(ProfileUpdate, '/profile')
