"""Claiming unclaimed businesses and the admin review."""
import pytest

from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.extension import db
from voozea.models import Business, BusinessClaim, Notification, User
from voozea.models.claim import CLAIM_PENDING, CLAIM_APPROVED, CLAIM_REJECTED
from voozea.models.notification import NOTIFY_CLAIM_APPROVED, NOTIFY_CLAIM_REJECTED
from voozea.service.claim_service import (
    claim_business, cancel_claim, approve_claim, reject_claim, list_claims,
)

REASON = "I am the founder and run this place"


@pytest.fixture
def admin(make_user):
    return make_user("admin", is_admin=True)


class TestClaimBusiness:
    def test_creates_pending_claim(self, make_user, make_business):
        user = make_user()
        business = make_business()
        claim = claim_business(user, business.id, f"  {REASON}  ")
        assert claim.status == CLAIM_PENDING
        assert claim.reason == REASON

    def test_reason_too_short(self, make_user, make_business):
        with pytest.raises(ValidationError):
            claim_business(make_user(), make_business().id, "mine")

    def test_unknown_business(self, make_user):
        with pytest.raises(NotFoundError):
            claim_business(make_user(), "missing", REASON)

    def test_already_claimed_business(self, make_user, make_business):
        business = make_business(owner=make_user())
        with pytest.raises(ConflictError):
            claim_business(make_user(), business.id, REASON)

    def test_second_pending_claim_is_conflict(self, make_user, make_business):
        user, business = make_user(), make_business()
        claim_business(user, business.id, REASON)
        with pytest.raises(ConflictError):
            claim_business(user, business.id, REASON)

    def test_reclaim_after_rejection(self, admin, make_user, make_business):
        user, business = make_user(), make_business()
        first = claim_business(user, business.id, REASON)
        reject_claim(admin, first.id, "no proof")

        second = claim_business(user, business.id, REASON + " (with proof)")
        assert second.status == CLAIM_PENDING
        assert BusinessClaim.query.filter_by(business_id=business.id, user_id=user.id).count() == 1

    def test_cancel_own_pending_claim(self, make_user, make_business):
        user, business = make_user(), make_business()
        claim = claim_business(user, business.id, REASON)
        cancel_claim(user, claim.id)
        assert BusinessClaim.query.count() == 0

    def test_cannot_cancel_someone_elses_claim(self, make_user, make_business):
        user, business = make_user(), make_business()
        claim = claim_business(user, business.id, REASON)
        with pytest.raises(AuthorizationError):
            cancel_claim(make_user(), claim.id)


class TestReview:
    def test_approval_applies_everything(self, admin, make_user, make_business):
        user, business = make_user(), make_business()
        claim = claim_business(user, business.id, REASON)

        approve_claim(admin, claim.id)

        assert db.session.get(BusinessClaim, claim.id).status == CLAIM_APPROVED
        business = db.session.get(Business, business.id)
        assert business.owner_id == user.id
        assert business.is_claimed
        assert db.session.get(User, user.id).is_business_owner

        notification = Notification.query.filter_by(user_id=user.id).one()
        assert notification.type == NOTIFY_CLAIM_APPROVED

    def test_failed_approval_applies_nothing(self, admin, make_user, make_business, monkeypatch):
        user, business = make_user(), make_business()
        claim = claim_business(user, business.id, REASON)

        def broken_notify(*args, **kwargs):
            raise RuntimeError("notification store down")

        monkeypatch.setattr("voozea.service.claim_service.notify", broken_notify)
        with pytest.raises(RuntimeError):
            approve_claim(admin, claim.id)
        db.session.rollback()

        assert db.session.get(BusinessClaim, claim.id).status == CLAIM_PENDING
        business = db.session.get(Business, business.id)
        assert business.owner_id is None
        assert not business.is_claimed
        assert not db.session.get(User, user.id).is_business_owner

    def test_only_pending_claims_can_be_reviewed(self, admin, make_user, make_business):
        claim = claim_business(make_user(), make_business().id, REASON)
        approve_claim(admin, claim.id)
        with pytest.raises(ValidationError):
            approve_claim(admin, claim.id)
        with pytest.raises(ValidationError):
            reject_claim(admin, claim.id)

    def test_rejection(self, admin, make_user, make_business):
        user = make_user()
        claim = claim_business(user, make_business().id, REASON)

        reject_claim(admin, claim.id, "  Could not verify  ")

        claim = db.session.get(BusinessClaim, claim.id)
        assert claim.status == CLAIM_REJECTED
        assert claim.review_notes == "Could not verify"
        assert Notification.query.filter_by(user_id=user.id).one().type == NOTIFY_CLAIM_REJECTED

    def test_list_by_status(self, admin, make_user, make_business):
        first = claim_business(make_user(), make_business("One").id, REASON)
        claim_business(make_user(), make_business("Two").id, REASON)
        reject_claim(admin, first.id)

        assert len(list_claims()) == 2
        assert len(list_claims(CLAIM_PENDING)) == 1
        assert list_claims(CLAIM_REJECTED)[0].id == first.id
