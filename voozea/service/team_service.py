"""
Business team management.

Ownership lives on ``Business.owner_id``; membership rows describe managers
(pending -> active -> removed, or pending -> deleted on decline).
"""
import logging
from sqlalchemy import or_

from voozea.extension import db
from voozea.models import Business, BusinessMember, User
from voozea.models.membership import (
    ROLE_MANAGER, STATUS_PENDING, STATUS_ACTIVE, STATUS_REMOVED,
)
from voozea.models.notification import (
    NOTIFY_MANAGER_INVITE, NOTIFY_MANAGER_ADDED, NOTIFY_MANAGER_REMOVED, NOTIFY_OWNERSHIP_TRANSFER,
)
from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.service.business_service import mark_business_owner
from voozea.service.entity_service import get_business_role
from voozea.service.notification_service import notify
from voozea.utils.helper import commit_or_raise, like_pattern

logger = logging.getLogger(__name__)

USER_SEARCH_LIMIT = 10


def _owned_business(principal, business_id, message):
    business = db.session.get(Business, business_id) if business_id else None
    if not business:
        raise NotFoundError("Business not found")
    if business.owner_id != principal.id:
        raise AuthorizationError(message)
    return business


def invite_manager(principal, business_id, username):
    if not business_id or not username:
        raise ValidationError("Missing required fields")

    business = _owned_business(principal, business_id, "Only business owners can invite managers")

    invitee = User.query.filter_by(username=username.strip().lower()).first()
    if not invitee:
        raise NotFoundError("User not found. They must have a Voozea account.")
    if invitee.id == principal.id:
        raise ValidationError("You cannot invite yourself")

    member = BusinessMember.query.filter_by(business_id=business.id, user_id=invitee.id).first()
    if member:
        if member.status == STATUS_ACTIVE:
            raise ConflictError("This user is already a team member")
        if member.status == STATUS_PENDING:
            raise ConflictError("This user already has a pending invitation")
        member.status = STATUS_PENDING
        member.role = ROLE_MANAGER
        member.invited_by = principal.id
    else:
        member = BusinessMember(
            business_id=business.id,
            user_id=invitee.id,
            role=ROLE_MANAGER,
            status=STATUS_PENDING,
            invited_by=principal.id,
        )
        db.session.add(member)

    notify(
        invitee.id,
        NOTIFY_MANAGER_INVITE,
        actor_id=principal.id,
        actor_entity_id=business.id,
        business_id=business.id,
    )
    commit_or_raise("This user already has a pending invitation")
    logger.info(f"Manager invited: business={business.id} user={invitee.id}")
    return member


def _own_pending_invitation(principal, member_id):
    member = BusinessMember.query.filter_by(
        id=member_id,
        user_id=principal.id,
        status=STATUS_PENDING
    ).first()
    if not member:
        raise NotFoundError("Invitation not found or already processed")
    return member


def accept_invitation(principal, member_id):
    member = _own_pending_invitation(principal, member_id)
    member.status = STATUS_ACTIVE

    if member.invited_by:
        notify(
            member.invited_by,
            NOTIFY_MANAGER_ADDED,
            actor_id=principal.id,
            business_id=member.business_id,
        )
    commit_or_raise()
    logger.info(f"Invitation accepted: business={member.business_id} user={principal.id}")
    return member


def decline_invitation(principal, member_id):
    member = _own_pending_invitation(principal, member_id)
    db.session.delete(member)
    commit_or_raise()
    logger.info(f"Invitation declined: business={member.business_id} user={principal.id}")


def remove_manager(principal, member_id):
    member = db.session.get(BusinessMember, member_id)
    if not member:
        raise NotFoundError("Member not found")
    if member.business.owner_id != principal.id:
        raise AuthorizationError("Only business owners can remove managers")
    if member.status == STATUS_REMOVED:
        return member

    member.status = STATUS_REMOVED
    notify(
        member.user_id,
        NOTIFY_MANAGER_REMOVED,
        actor_id=principal.id,
        business_id=member.business_id,
    )
    commit_or_raise()
    logger.info(f"Manager removed: business={member.business_id} user={member.user_id}")
    return member


def transfer_ownership(principal, business_id, new_owner_id):
    """
    Hand the business to an active manager. The old owner stays on as an
    active manager; the new owner's membership row goes away because
    ownership is recorded on the business itself.
    """
    if not business_id or not new_owner_id:
        raise ValidationError("Missing required fields")

    business = _owned_business(principal, business_id, "Only the current owner can transfer ownership")

    new_owner_member = BusinessMember.query.filter_by(
        business_id=business.id,
        user_id=new_owner_id,
        status=STATUS_ACTIVE
    ).first()
    if not new_owner_member:
        raise ValidationError("New owner must be an active manager")

    business.owner_id = new_owner_id
    db.session.delete(new_owner_member)

    old_owner_member = BusinessMember.query.filter_by(
        business_id=business.id,
        user_id=principal.id
    ).first()
    if old_owner_member:
        old_owner_member.role = ROLE_MANAGER
        old_owner_member.status = STATUS_ACTIVE
        old_owner_member.invited_by = new_owner_id
    else:
        db.session.add(BusinessMember(
            business_id=business.id,
            user_id=principal.id,
            role=ROLE_MANAGER,
            status=STATUS_ACTIVE,
            invited_by=new_owner_id,
        ))

    mark_business_owner(new_owner_id)
    notify(
        new_owner_id,
        NOTIFY_OWNERSHIP_TRANSFER,
        actor_id=principal.id,
        business_id=business.id,
    )
    commit_or_raise()
    logger.info(f"Ownership transferred: business={business.id} {principal.id} -> {new_owner_id}")
    return business


def list_team(principal, business_id):
    business = db.session.get(Business, business_id)
    if not business:
        raise NotFoundError("Business not found")
    if get_business_role(business.id, principal.id) is None:
        raise AuthorizationError("Only the business team can view members")

    members = (
        BusinessMember.query
        .filter(
            BusinessMember.business_id == business.id,
            BusinessMember.status != STATUS_REMOVED,
        )
        .order_by(BusinessMember.created_at)
        .all()
    )
    return business, members


def list_my_invitations(principal):
    return (
        BusinessMember.query
        .filter_by(user_id=principal.id, status=STATUS_PENDING)
        .order_by(BusinessMember.created_at.desc())
        .all()
    )


def search_users(principal, query):
    query = (query or "").strip()
    if len(query) < 2:
        return []

    pattern = like_pattern(query)
    return (
        User.query
        .filter(
            or_(
                User.username.ilike(pattern, escape="\\"),
                User.display_name.ilike(pattern, escape="\\"),
            ),
            User.id != principal.id,
        )
        .order_by(User.username)
        .limit(USER_SEARCH_LIMIT)
        .all()
    )

