import logging
import os

from shared.core.database import Base, SessionLocal, engine
from shared.helpers.password_generator import generate_secure_password
from shared.models.admin_login_session import AdminLoginSession  # noqa: F401
from shared.models.admins import Admins
from shared.utils.enums import AdminRole

logger = logging.getLogger(__name__)


def ensure_super_admin(db, email: str, full_name: str = "Super Admin", password: str | None = None):
    """Create the first super admin unless one exists. Returns (admin, password or None)."""
    existing_super_admin = (
        db.query(Admins)
        .filter(Admins.role == AdminRole.SUPER_ADMIN)
        .first()
    )
    if existing_super_admin:
        return existing_super_admin, None

    password = password or generate_secure_password(16)
    super_admin = Admins(
        email=email.strip().lower(),
        full_name=full_name,
        role=AdminRole.SUPER_ADMIN,
        is_active=True,
    )
    super_admin.set_password(password)

    try:
        db.add(super_admin)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(super_admin)
    return super_admin, password


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        admin, password = ensure_super_admin(
            db, os.getenv("SUPER_ADMIN_EMAIL", "superadmin@example.com"))
        if password:
            logger.info("Super Admin created: %s / %s", admin.email, password)
        else:
            logger.info("Super Admin already exists: %s", admin.email)
    finally:
        db.close()
