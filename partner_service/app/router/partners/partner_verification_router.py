# app/router/partners/partner_verification_router.py
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_reader, allow_reviewer, allow_super_admin
from shared.core.database import get_db
from shared.core.schemas import AdminToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode

from ...schemas.partners.partner_schemas import (
    ApproveRequest,
    ClarificationRequest,
    PartnerListRequest,
    PartnerListResponse,
    PartnerOut,
    ReinstateRequest,
    RejectRequest,
    SuspendRequest,
    VerificationDetailsOut,
)
from ...crud.partners import verification_query as query
from ...crud.partners import verification_workflow as workflow

router = APIRouter(
    prefix="/api/admin/partners",
    tags=["partner verification"],
    dependencies=[Depends(allow_reader)],
)


def _updated(partner, message: str):
    return success_response(
        data=PartnerOut.model_validate(partner),
        message=message,
        status_code=AppStatusCode.OPERATION_SUCCESSFUL,
    )

# ------------ listing


@router.get("", response_model=PartnerListResponse)
def list_partners(
    params: PartnerListRequest = Depends(),
    db: Session = Depends(get_db),
):
    return query.list_partners(db, params)


@router.get("/pending-verification", response_model=list[PartnerOut])
def pending_verification(db: Session = Depends(get_db)):
    return query.list_pending_verification(db)


@router.get("/{partner_id}/verification-details", response_model=VerificationDetailsOut)
def verification_details(partner_id: int, db: Session = Depends(get_db)):
    return query.get_verification_details(db, partner_id)

# ------------ review actions


@router.post("/{partner_id}/approve")
def approve_partner(
    partner_id: int,
    payload: Optional[ApproveRequest] = None,
    db: Session = Depends(get_db),
    current_admin: AdminToken = Depends(allow_reviewer),
):
    partner = workflow.approve_partner(
        db, partner_id, current_admin, payload.approval_notes if payload else None)
    return _updated(partner, "Partner approved successfully")


@router.post("/{partner_id}/reject")
def reject_partner(
    partner_id: int,
    payload: RejectRequest,
    db: Session = Depends(get_db),
    current_admin: AdminToken = Depends(allow_reviewer),
):
    partner = workflow.reject_partner(
        db, partner_id, current_admin, payload.rejection_reason)
    return _updated(partner, "Partner rejected")


@router.post("/{partner_id}/request-clarification")
def request_clarification(
    partner_id: int,
    payload: ClarificationRequest,
    db: Session = Depends(get_db),
    current_admin: AdminToken = Depends(allow_reviewer),
):
    partner = workflow.request_clarification(
        db, partner_id, current_admin, payload.message)
    return _updated(partner, "Clarification requested")

# ------------ privileged


@router.post("/{partner_id}/suspend")
def suspend_partner(
    partner_id: int,
    payload: SuspendRequest,
    db: Session = Depends(get_db),
    current_admin: AdminToken = Depends(allow_super_admin),
):
    partner = workflow.suspend_partner(db, partner_id, current_admin, payload.reason)
    return _updated(partner, "Partner suspended")


@router.post("/{partner_id}/reinstate")
def reinstate_partner(
    partner_id: int,
    payload: Optional[ReinstateRequest] = None,
    db: Session = Depends(get_db),
    current_admin: AdminToken = Depends(allow_super_admin),
):
    partner = workflow.reinstate_partner(db, partner_id, current_admin, payload.notes if payload else None)
    return _updated(partner, "Partner reinstated")
