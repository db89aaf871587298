import uuid
from sqlalchemy import (
    Column, String, Boolean, ForeignKey, Integer, TIMESTAMP, func
)
from sqlalchemy.orm import relationship
from ..core.database import Base


class AdminLoginSession(Base):
    __tablename__ = "admin_login_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    admin_id = Column(Integer, ForeignKey(
        "admins.id", ondelete="CASCADE"), nullable=False, index=True)
    ip_address = Column(String(50), nullable=True)
    user_agent = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    logged_out_at = Column(TIMESTAMP(timezone=True), nullable=True)

    admin = relationship("Admins", backref="login_sessions")
