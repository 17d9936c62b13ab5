from flask import request, g
from flask_restful import Resource, Api
from voozea.service.claim_service import list_claims, approve_claim, reject_claim
from voozea.models.claim import CLAIM_PENDING, CLAIM_APPROVED, CLAIM_REJECTED
from voozea.utils.decorators import admin_required, service_errors
from voozea.schemas.claim_schema import ClaimSchema, ClaimReviewSchema
from . import admin_bp

api = Api(admin_bp)
claim_schema = ClaimSchema()
claims_schema = ClaimSchema(many=True)
claim_review_schema = ClaimReviewSchema()

CLAIM_STATUSES = (CLAIM_PENDING, CLAIM_APPROVED, CLAIM_REJECTED)


class AdminClaims(Resource):
    @admin_required
    def get(self):
        status = request.args.get("status")
        if status and status not in CLAIM_STATUSES:
            return {"message": f"status must be one of: {', '.join(CLAIM_STATUSES)}"}, 400
        return {"claims": claims_schema.dump(list_claims(status))}, 200


class ApproveClaim(Resource):
    @admin_required
    @service_errors
    def post(self, claim_id):
        claim = approve_claim(g.current_user, claim_id)
        return {"claim": claim_schema.dump(claim), "message": "Claim approved"}, 200


class RejectClaim(Resource):
    @admin_required
    @service_errors
    def post(self, claim_id):
        json_data = request.get_json(silent=True) or {}
        errors = claim_review_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        claim = reject_claim(g.current_user, claim_id, json_data.get("notes"))
        return {"claim": claim_schema.dump(claim), "message": "Claim rejected"}, 200

api.add_resource(AdminClaims, '/claims')
api.add_resource(ApproveClaim, '/claims/<int:claim_id>/approve')
api.add_resource(RejectClaim, '/claims/<int:claim_id>/reject')
