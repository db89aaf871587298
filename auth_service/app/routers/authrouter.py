from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import AdminToken
from ..schemas import authschemas
from ..services import authservices

router = APIRouter(prefix="/api/admin/auth", tags=["Admin Auth"])


@router.post("/login", response_model=authschemas.AuthenticationResponse)
def login(
        req: authschemas.AdminLoginRequest,
        request: Request,
        db: Session = Depends(get_db)):
    return authservices.login(request, db, req)


@router.get("/me", response_model=authschemas.AdminOut)
def me(
        db: Session = Depends(get_db),
        current_admin: AdminToken = Depends(auth.validate_current_token)):
    return authservices.get_me(db, current_admin)


@router.post("/logout")
def logout(
        db: Session = Depends(get_db),
        current_admin: AdminToken = Depends(auth.validate_current_token)):
    return authservices.logout(db, current_admin)
