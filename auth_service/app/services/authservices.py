import logging
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.config import settings
from shared.core.exceptions import Forbidden, Unauthenticated
from shared.core.schemas import AdminToken
from shared.models.admin_login_session import AdminLoginSession
from shared.models.admins import Admins
from shared.utils.app_status_code import AppStatusCode
from ..schemas import authschemas

logger = logging.getLogger(__name__)


#### EMAIL + PASSWORD LOGIN ###

def login(request: Request, db: Session, req: authschemas.AdminLoginRequest):
    admin = db.query(Admins).filter(Admins.email == req.email.strip().lower()).first()

    if not admin or not admin.verify_password(req.password):
        logger.warning("Failed console login for %s", req.email)
        raise Unauthenticated(
            "Invalid email or password",
            app_status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID)

    if not admin.is_active:
        raise Forbidden("Admin account is not active")

    session = AdminLoginSession(
        admin_id=admin.id,
        ip_address=request.client.host if request.client else None,
        user_agent=(request.headers.get("user-agent") or "")[:255],
    )
    db.add(session)
    admin.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(session)
    db.refresh(admin)

    token = auth.create_access_token({
        "admin_id": admin.id,
        "session_id": session.id,
        "role": admin.role.value,
        "email": admin.email,
    })

    logger.info("Admin %s logged in (session %s)", admin.id, session.id)

    return authschemas.AuthenticationResponse(
        access_token=token,
        token_type="bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        admin=authschemas.AdminOut.model_validate(admin),
    )


def get_me(db: Session, current_admin: AdminToken):
    admin = db.query(Admins).filter(Admins.id == current_admin.admin_id).first()
    return authschemas.AdminOut.model_validate(admin)


def logout(db: Session, current_admin: AdminToken):
    session = db.query(AdminLoginSession).filter(
        AdminLoginSession.id == current_admin.session_id,
        AdminLoginSession.admin_id == current_admin.admin_id,
    ).first()

    session.is_active = False
    session.logged_out_at = datetime.now(timezone.utc)
    db.commit()

    logger.info("Admin %s logged out (session %s)", current_admin.admin_id, session.id)
    return {"message": "Logged out successfully"}
