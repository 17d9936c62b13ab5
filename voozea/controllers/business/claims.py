from flask import request, g
from flask_restful import Resource, Api
from voozea.service.claim_service import claim_business, cancel_claim
from voozea.utils.decorators import login_required, service_errors
from voozea.schemas.claim_schema import ClaimSchema, ClaimInputSchema
from . import business_bp

api = Api(business_bp)
claim_schema = ClaimSchema()
claim_input_schema = ClaimInputSchema()


class BusinessClaims(Resource):
    @login_required
    @service_errors
    def post(self, business_id):
        json_data = request.get_json(silent=True) or {}
        errors = claim_input_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        claim = claim_business(g.current_user, business_id, json_data["reason"])
        return {"claim": claim_schema.dump(claim), "message": "Claim submitted for review"}, 201


class ClaimResource(Resource):
    @login_required
    @service_errors
    def delete(self, claim_id):
        cancel_claim(g.current_user, claim_id)
        return {"message": "Claim cancelled"}, 200

api.add_resource(BusinessClaims, '/businesses/<string:business_id>/claims')
api.add_resource(ClaimResource, '/claims/<int:claim_id>')
