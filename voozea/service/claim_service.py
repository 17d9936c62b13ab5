"""
Business claims: a user asks to become the owner of an unclaimed business,
an administrator approves or rejects.
"""
import logging
from voozea.extension import db
from voozea.models import Business, BusinessClaim
from voozea.models.claim import CLAIM_PENDING, CLAIM_APPROVED, CLAIM_REJECTED
from voozea.models.notification import NOTIFY_CLAIM_APPROVED, NOTIFY_CLAIM_REJECTED
from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.service.business_service import mark_business_owner
from voozea.service.notification_service import notify
from voozea.utils.helper import commit_or_raise

logger = logging.getLogger(__name__)

REASON_MIN_LENGTH = 10


def claim_business(principal, business_id, reason):
    reason = (reason or "").strip()
    if len(reason) < REASON_MIN_LENGTH:
        raise ValidationError(
            f"Please provide a reason with at least {REASON_MIN_LENGTH} characters "
            "explaining why you own this business"
        )

    business = db.session.get(Business, business_id)
    if not business:
        raise NotFoundError("Business not found")

    if business.is_claimed:
        raise ConflictError("This business has already been claimed")

    existing = BusinessClaim.query.filter_by(business_id=business.id, user_id=principal.id).first()
    if existing:
        if existing.status == CLAIM_PENDING:
            raise ConflictError("You already have a pending claim for this business")
        if existing.status == CLAIM_APPROVED:
            raise ConflictError("Your claim has already been approved")
        # rejected before: replace it with a fresh claim
        db.session.delete(existing)
        db.session.flush()

    claim = BusinessClaim(
        business_id=business.id,
        user_id=principal.id,
        reason=reason,
        status=CLAIM_PENDING,
    )
    db.session.add(claim)
    commit_or_raise("You already have a pending claim for this business")
    logger.info(f"Claim submitted: business={business.id} user={principal.id}")
    return claim


def cancel_claim(principal, claim_id):
    claim = db.session.get(BusinessClaim, claim_id)
    if not claim:
        raise NotFoundError("Claim not found")
    if claim.user_id != principal.id:
        raise AuthorizationError("You can only cancel your own claims")
    if claim.status != CLAIM_PENDING:
        raise ValidationError("Only pending claims can be cancelled")

    db.session.delete(claim)
    commit_or_raise()


def _pending_claim(claim_id):
    claim = db.session.get(BusinessClaim, claim_id)
    if not claim:
        raise NotFoundError("Claim not found")
    if claim.status != CLAIM_PENDING:
        raise ValidationError("Claim is not pending")
    return claim


def approve_claim(admin, claim_id):
    """
    Approve a pending claim. The claim status, the business owner and claimed
    flag, the claimant's owner flag and the notification commit together.
    """
    claim = _pending_claim(claim_id)
    business = claim.business

    if business.is_claimed and business.owner_id != claim.user_id:
        raise ConflictError("This business has already been claimed")

    claim.status = CLAIM_APPROVED
    business.owner_id = claim.user_id
    business.is_claimed = True
    mark_business_owner(claim.user_id)
    notify(
        claim.user_id,
        NOTIFY_CLAIM_APPROVED,
        actor_id=admin.id,
        business_id=business.id,
    )
    commit_or_raise("This business has already been claimed")
    logger.info(f"Claim {claim.id} approved by {admin.id}: business={business.id} owner={claim.user_id}")
    return claim


def reject_claim(admin, claim_id, notes=None):
    claim = _pending_claim(claim_id)

    claim.status = CLAIM_REJECTED
    claim.review_notes = (notes or "").strip() or None
    notify(
        claim.user_id,
        NOTIFY_CLAIM_REJECTED,
        actor_id=admin.id,
        business_id=claim.business_id,
    )
    commit_or_raise()
    logger.info(f"Claim {claim.id} rejected by {admin.id}")
    return claim


def list_claims(status=None):
    query = BusinessClaim.query
    if status:
        query = query.filter_by(status=status)
    return query.order_by(BusinessClaim.created_at.desc(), BusinessClaim.id.desc()).all()
