from flask_restful import Resource, Api
from flask import request
from flask_jwt_extended import create_access_token
from voozea.service.profile_service import authenticate
from voozea.schemas.user_schema import UserSchema, LoginSchema
from . import auth_bp

api = Api(auth_bp)
user_schema = UserSchema()
login_schema = LoginSchema()


def issue_token(user):
    return create_access_token(
        identity=user.id,
        additional_claims={"is_admin": user.is_admin}
    )


class Login(Resource):
    def post(self):
        data = request.get_json(silent=True) or {}
        errors = login_schema.validate(data)
        if errors:
            return {"errors": errors}, 400

        user = authenticate(data["email"], data["password"])
        if not user:
            return {"message": "Invalid credentials"}, 401

        return {
            "access_token": issue_token(user),
            "user": user_schema.dump(user),
            "needs_onboarding": user.needs_onboarding
        }, 200

api.add_resource(Login, '/login')
