from sqlalchemy import TIMESTAMP, Boolean, Column, Enum, Integer, String, func
from passlib.context import CryptContext

from shared.core.database import Base
from shared.utils.enums import AdminRole

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class Admins(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(200), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(AdminRole, name="admin_role",
             values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AdminRole.ADMIN,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    last_login_at = Column(TIMESTAMP(timezone=True), nullable=True)

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)
