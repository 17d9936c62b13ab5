from flask_restful import Resource, Api
from flask import request, g
from voozea.service.profile_service import update_onboarding_profile, complete_onboarding, skip_onboarding
from voozea.service.follow_service import follow_many
from voozea.service.suggestion_service import suggested_users
from voozea.schemas.entity_schema import FollowManyInputSchema
from voozea.schemas.user_schema import UserSchema, PublicUserSchema, ProfileUpdateSchema
from voozea.utils.decorators import login_required, service_errors
from voozea.utils.helper import parse_json
from . import profile_bp

api = Api(profile_bp)
user_schema = UserSchema()
public_user_schema = PublicUserSchema(only=("id", "username", "display_name", "avatar_url", "follower_count"))
onboarding_profile_schema = ProfileUpdateSchema(exclude=("username",))
follow_many_schema = FollowManyInputSchema()


class OnboardingProfile(Resource):
    @login_required
    @service_errors
    def post(self):
        data = request.get_json(silent=True) or {}
        errors = onboarding_profile_schema.validate(data)
        if errors:
            return {"errors": errors}, 400

        user = update_onboarding_profile(
            g.current_user,
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio"),
            display_name=data.get("display_name")
        )
        return {"user": user_schema.dump(user)}, 200


class OnboardingComplete(Resource):
    @login_required
    @service_errors
    def post(self):
        user = complete_onboarding(g.current_user)
        return {"user": user_schema.dump(user)}, 200


class OnboardingSkip(Resource):
    @login_required
    @service_errors
    def post(self):
        user = skip_onboarding(g.current_user)
        return {"user": user_schema.dump(user)}, 200


class OnboardingFollows(Resource):
    @login_required
    @service_errors
    def post(self):
        data, error, status = parse_json(required_fields=["user_ids"])
        if error:
            return error, status
        errors = follow_many_schema.validate(data)
        if errors:
            return {"errors": errors}, 400

        followed = follow_many(g.current_user.id, data["user_ids"])
        return {"followed": followed}, 200


def _recent_rating(rating):
    if rating is None:
        return None
    return {
        "product_name": rating.product.name,
        "business_name": rating.product.business.name,
        "score": rating.score
    }


class SuggestedUsers(Resource):
    @login_required
    def get(self):
        limit = request.args.get("limit", default=6, type=int)
        suggestions = suggested_users(g.current_user, limit=max(1, min(limit, 20)))
        return {
            "users": [
                dict(public_user_schema.dump(user), recent_rating=_recent_rating(rating))
                for user, rating in suggestions
            ]
        }, 200

api.add_resource(OnboardingProfile, '/onboarding/profile')
api.add_resource(OnboardingComplete, '/onboarding/complete')
api.add_resource(OnboardingSkip, '/onboarding/skip')
api.add_resource(OnboardingFollows, '/onboarding/follows')
api.add_resource(SuggestedUsers, '/users/suggested')
