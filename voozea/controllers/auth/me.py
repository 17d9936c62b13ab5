from flask_restful import Resource, Api
from flask import request, g
from voozea.service.profile_service import update_profile
from voozea.schemas.user_schema import UserSchema, ProfileUpdateSchema
from voozea.utils.decorators import login_required, service_errors
from . import auth_bp

api = Api(auth_bp)
user_schema = UserSchema()
profile_update_schema = ProfileUpdateSchema()


def apply_profile_patch(user, data):
    """PATCH semantics: fields missing from the body keep their value."""
    return update_profile(
        user,
        username=data.get("username"),
        display_name=data.get("display_name", user.display_name),
        bio=data.get("bio", user.bio),
        avatar_url=data.get("avatar_url", user.avatar_url),
    )


class MeResource(Resource):
    @login_required
    def get(self):
        return user_schema.dump(g.current_user), 200

    @login_required
    @service_errors
    def patch(self):
        data = request.get_json(silent=True) or {}
        errors = profile_update_schema.validate(data)
        if errors:
            return {"errors": errors}, 400

        user = apply_profile_patch(g.current_user, data)
        return user_schema.dump(user), 200

api.add_resource(MeResource, '/me')
