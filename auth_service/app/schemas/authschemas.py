from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from shared.utils.enums import AdminRole


# -------- Email & Password --------

class AdminLoginRequest(BaseModel):
    email: str
    password: str


# -------- Common --------

class AdminOut(BaseModel):
    id: int
    email: str
    full_name: str
    role: AdminRole
    is_active: bool
    last_login_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AuthenticationResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    admin: AdminOut
