# app/schemas/partners/partner_schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel

from shared.core.schemas import CommonQueryParams
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.verification_enum import VerificationAction, VerificationStatus


class PartnerOut(BaseModel):
    id: int
    email: str
    full_name: str
    phone: str
    company_name: Optional[str] = None
    business_address: Optional[str] = None
    gst_number: Optional[str] = None
    pan_number: Optional[str] = None
    verification_status: VerificationStatus
    rejection_reason: Optional[str] = None
    credit_balance: Decimal
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class PincodeOut(BaseModel):
    id: int
    pincode: str
    city: Optional[str] = None
    state: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}


class VerificationHistoryOut(BaseModel):
    id: int
    action_type: VerificationAction
    message_from_admin: Optional[str] = None
    message_from_partner: Optional[str] = None
    performed_by_admin_id: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class VerificationDetailsOut(BaseModel):
    partner: PartnerOut
    serviceable_pincodes: List[PincodeOut]
    verification_history: List[VerificationHistoryOut]
    allowed_actions: List[str] = []


class PartnerListRequest(CommonQueryParams):
    verification_status: Optional[str] = None


class PartnerListResponse(BaseModel):
    partners: List[PartnerOut]
    total: int


# -------- Verification actions --------
# blank or missing text is refused by the workflow with a 400

class ApproveRequest(EmptyStringModel):
    approval_notes: Optional[str] = None


class RejectRequest(EmptyStringModel):
    rejection_reason: Optional[str] = None


class ClarificationRequest(EmptyStringModel):
    message: Optional[str] = None


class SuspendRequest(EmptyStringModel):
    reason: Optional[str] = None


class ReinstateRequest(EmptyStringModel):
    notes: Optional[str] = None
