from datetime import datetime
from voozea.extension import db

ROLE_OWNER = "owner"
ROLE_MANAGER = "manager"
MEMBER_ROLES = (ROLE_OWNER, ROLE_MANAGER)

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_REMOVED = "removed"
MEMBER_STATUSES = (STATUS_PENDING, STATUS_ACTIVE, STATUS_REMOVED)


class BusinessMember(db.Model):
    __tablename__ = "business_members"

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.String(36), db.ForeignKey("businesses.id"), nullable=False)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_MANAGER)
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)
    invited_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("business_id", "user_id", name="uq_business_members_business_user"),
    )

    business = db.relationship("Business", back_populates="members")
    user = db.relationship("User", foreign_keys=[user_id], back_populates="memberships")
    inviter = db.relationship("User", foreign_keys=[invited_by])
