from flask_restful import Resource, Api
from flask import request
from voozea.service.profile_service import register_user
from voozea.schemas.user_schema import UserSchema, RegisterSchema
from voozea.utils.decorators import service_errors
from .login import issue_token
from . import auth_bp

api = Api(auth_bp)
user_schema = UserSchema()
register_schema = RegisterSchema()


class Register(Resource):
    @service_errors
    def post(self):
        data = request.get_json(silent=True) or {}
        errors = register_schema.validate(data)
        if errors:
            return {"errors": errors}, 400

        user = register_user(
            data["email"],
            data["password"],
            data["username"],
            display_name=data.get("display_name")
        )
        return {
            "message": "Account created",
            "access_token": issue_token(user),
            "user": user_schema.dump(user)
        }, 201

api.add_resource(Register, '/register')
