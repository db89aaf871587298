from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from shared.core.database import Base


class ServiceablePincode(Base):
    __tablename__ = "partner_serviceable_pincodes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    partner_id = Column(Integer, ForeignKey("partners.id"), nullable=False, index=True)
    pincode = Column(String(10), nullable=False)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    partner = relationship("Partner")
