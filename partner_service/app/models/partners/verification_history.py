from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from shared.core.database import Base
from ...enum.verification_enum import VerificationAction


class VerificationHistoryEntry(Base):
    """One immutable row per verification action taken on a partner."""
    __tablename__ = "partner_verification_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    partner_id = Column(Integer, ForeignKey("partners.id"), nullable=False, index=True)

    action_type = Column(
        Enum(VerificationAction, name="verification_action",
             values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    message_from_admin = Column(Text, nullable=True)
    # written only by the partner-facing clarification response
    message_from_partner = Column(Text, nullable=True)
    performed_by_admin_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)

    partner = relationship("Partner")
