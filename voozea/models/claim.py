from datetime import datetime
from voozea.extension import db

CLAIM_PENDING = "pending"
CLAIM_APPROVED = "approved"
CLAIM_REJECTED = "rejected"


class BusinessClaim(db.Model):
    __tablename__ = "business_claims"

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.String(36), db.ForeignKey("businesses.id"), nullable=False)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    reason = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=CLAIM_PENDING)
    review_notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("business_id", "user_id", name="uq_business_claims_business_user"),
    )

    business = db.relationship("Business", back_populates="claims")
    user = db.relationship("User")
