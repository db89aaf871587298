# models/partners/partners.py
from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Enum, Integer, Numeric, String, Text, func
)

from shared.core.database import Base
from ...enum.verification_enum import VerificationStatus


class Partner(Base):
    __tablename__ = "partners"
    __table_args__ = (
        CheckConstraint("credit_balance >= 0", name="ck_partners_credit_balance_non_negative"),
        CheckConstraint(
            "(verification_status = 'rejected') = (rejection_reason IS NOT NULL)",
            name="ck_partners_rejection_reason_only_when_rejected",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(200), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=False)
    phone = Column(String(20), nullable=False)
    company_name = Column(String(200), nullable=True)
    business_address = Column(Text, nullable=True)
    gst_number = Column(String(20), nullable=True)
    pan_number = Column(String(20), nullable=True)

    verification_status = Column(
        Enum(VerificationStatus, name="verification_status",
             values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=VerificationStatus.PENDING,
        index=True,
    )
    rejection_reason = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # owned by the credit ledger, never written here
    credit_balance = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # equals created_at of the history entry that set the current status
    status_changed_at = Column(DateTime(timezone=True), nullable=True)
