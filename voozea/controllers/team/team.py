from flask import request, g
from flask_restful import Resource, Api
from voozea.service.team_service import (
    invite_manager, accept_invitation, decline_invitation, remove_manager,
    transfer_ownership, list_team, list_my_invitations, search_users,
)
from voozea.utils.decorators import login_required, service_errors
from voozea.schemas.business_schema import BusinessSchema
from voozea.schemas.membership_schema import MembershipSchema, InviteSchema, TransferSchema
from voozea.schemas.user_schema import PublicUserSchema
from . import team_bp

api = Api(team_bp)

business_schema = BusinessSchema(only=("id", "name", "slug", "owner"))
membership_schema = MembershipSchema()
memberships_schema = MembershipSchema(many=True, exclude=("business",))
invitations_schema = MembershipSchema(many=True)
user_hits_schema = PublicUserSchema(many=True, only=("id", "username", "display_name", "avatar_url"))
invite_schema = InviteSchema()
transfer_schema = TransferSchema()


class TeamResource(Resource):
    @login_required
    @service_errors
    def get(self, business_id):
        business, members = list_team(g.current_user, business_id)
        return {
            "business": business_schema.dump(business),
            "members": memberships_schema.dump(members)
        }, 200


class TeamInvitations(Resource):
    @login_required
    @service_errors
    def post(self, business_id):
        json_data = request.get_json(silent=True) or {}
        errors = invite_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        member = invite_manager(g.current_user, business_id, json_data["username"])
        return {"member": membership_schema.dump(member), "message": "Invitation sent"}, 201


class MyInvitations(Resource):
    @login_required
    def get(self):
        return {"invitations": invitations_schema.dump(list_my_invitations(g.current_user))}, 200


class AcceptInvitation(Resource):
    @login_required
    @service_errors
    def post(self, member_id):
        member = accept_invitation(g.current_user, member_id)
        return {"member": membership_schema.dump(member), "message": "Invitation accepted"}, 200


class DeclineInvitation(Resource):
    @login_required
    @service_errors
    def post(self, member_id):
        decline_invitation(g.current_user, member_id)
        return {"message": "Invitation declined"}, 200


class TeamMember(Resource):
    @login_required
    @service_errors
    def delete(self, member_id):
        member = remove_manager(g.current_user, member_id)
        return {"member": membership_schema.dump(member), "message": "Manager removed"}, 200


class OwnershipTransfer(Resource):
    @login_required
    @service_errors
    def post(self, business_id):
        json_data = request.get_json(silent=True) or {}
        errors = transfer_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        business = transfer_ownership(g.current_user, business_id, json_data["new_owner_id"])
        return {"business": business_schema.dump(business), "message": "Ownership transferred"}, 200


class TeamUserSearch(Resource):
    @login_required
    def get(self):
        users = search_users(g.current_user, request.args.get("q", ""))
        return {"users": user_hits_schema.dump(users)}, 200

api.add_resource(TeamResource, '/businesses/<string:business_id>/team')
api.add_resource(TeamInvitations, '/businesses/<string:business_id>/team/invitations')
api.add_resource(MyInvitations, '/team/invitations')
api.add_resource(AcceptInvitation, '/team/invitations/<int:member_id>/accept')
api.add_resource(DeclineInvitation, '/team/invitations/<int:member_id>/decline')
api.add_resource(TeamMember, '/team/members/<int:member_id>')
api.add_resource(OwnershipTransfer, '/businesses/<string:business_id>/transfer')
api.add_resource(TeamUserSearch, '/team/user-search')
