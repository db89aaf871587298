from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_db
from shared.core.exceptions import Forbidden, Unauthenticated
from shared.core.schemas import AdminToken
from shared.models.admin_login_session import AdminLoginSession
from shared.models.admins import Admins
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import PRIVILEGED_ROLES, READ_ROLES, REVIEW_ROLES

# missing header is reported by us as 401, not by FastAPI as 403
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    payload = data.copy()
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(db: Session, token: str) -> AdminToken:
    """Decode a bearer token and check that its login session is still live."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        admin = AdminToken(**payload)
    except ExpiredSignatureError:
        raise Unauthenticated(
            "Token has expired",
            app_status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED)
    except (JWTError, ValidationError, TypeError):
        raise Unauthenticated(
            "Invalid token",
            app_status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID)

    session = db.query(AdminLoginSession).filter(
        AdminLoginSession.id == admin.session_id,
        AdminLoginSession.admin_id == admin.admin_id
    ).first()

    if not session or not session.is_active:
        raise Unauthenticated(
            "Session has been logged out or is inactive",
            app_status_code=AppStatusCode.AUTHENTICATION_SESSION_TIMEOUT)

    return admin


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> AdminToken:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated(
            "Not authenticated",
            app_status_code=AppStatusCode.AUTHENTICATION_TOKEN_MISSING)

    admin_data = verify_token(db, credentials.credentials)

    admin = db.query(Admins).filter(Admins.id == admin_data.admin_id).first()
    if not admin or not admin.is_active:
        # a deactivated operator has to log in again, not merely be refused
        raise Unauthenticated(
            "Admin account is not active",
            app_status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE)

    # role comes from the database, not the token
    admin_data.role = admin.role
    admin_data.email = admin.email
    return admin_data


def _require(roles, message: str):
    def checker(current_admin: AdminToken = Depends(validate_current_token)) -> AdminToken:
        if current_admin.role not in roles:
            raise Forbidden(message)
        return current_admin
    return checker


allow_reader = _require(READ_ROLES, "Access forbidden")
allow_reviewer = _require(REVIEW_ROLES, "Access forbidden: reviewers only")
allow_super_admin = _require(PRIVILEGED_ROLES, "Access forbidden: super admins only")
