# crud/partners/verification_query.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import ValidationFailed
from ...enum.verification_enum import OPEN_REVIEW_STATUSES, VerificationStatus
from ...schemas.partners.partner_schemas import (
    PartnerListRequest, PartnerListResponse, PartnerOut, PincodeOut,
    VerificationDetailsOut, VerificationHistoryOut
)
from . import audit_log_store, partner_store
from .verification_workflow import allowed_actions, replay_history

logger = logging.getLogger(__name__)


class SnapshotUnavailable(RuntimeError):
    """History and partner row kept disagreeing across every read attempt."""


def _begin_snapshot(db: Session):
    # one snapshot for all three reads where the engine supports it
    if db.in_transaction():
        db.rollback()
    if db.get_bind().dialect.name == "postgresql":
        db.connection(execution_options={"isolation_level": "REPEATABLE READ"})


def _read_once(db: Session, partner_id: int):
    _begin_snapshot(db)
    partner = partner_store.get_partner(db, partner_id)
    pincodes = partner_store.list_pincodes(db, partner_id)
    history = audit_log_store.list_history(db, partner_id)
    return partner, pincodes, history


def _is_consistent(partner, history) -> bool:
    try:
        replayed = replay_history(history)
    except ValueError:
        logger.exception("Partner %s has a history that does not replay", partner.id)
        return False

    if replayed != VerificationStatus(partner.verification_status):
        return False

    # a suspend/reinstate pair can replay to the same status, the timestamp cannot
    last_change = history[-1].created_at if history else None
    return last_change == partner.status_changed_at


def _to_details(partner, pincodes, history) -> VerificationDetailsOut:
    return VerificationDetailsOut(
        partner=PartnerOut.model_validate(partner),
        serviceable_pincodes=[PincodeOut.model_validate(p) for p in pincodes],
        verification_history=[VerificationHistoryOut.model_validate(h) for h in history],
        allowed_actions=allowed_actions(
            VerificationStatus(partner.verification_status), partner.is_active),
    )


def get_verification_details(db: Session, partner_id: int) -> VerificationDetailsOut:
    """Partner profile, serviceable pincodes and full history (oldest first),
    all taken from the same point in time."""
    attempts = max(1, settings.SNAPSHOT_READ_ATTEMPTS)
    for attempt in range(1, attempts + 1):
        try:
            partner, pincodes, history = _read_once(db, partner_id)
            if _is_consistent(partner, history):
                return _to_details(partner, pincodes, history)
        finally:
            # end the read transaction, which also expires the cached rows
            db.rollback()

        logger.warning(
            "Verification snapshot for partner %s inconsistent (attempt %s/%s)",
            partner_id, attempt, attempts)

    raise SnapshotUnavailable(
        f"Could not read a consistent verification snapshot for partner {partner_id}")


def parse_status_filter(value: Optional[str]) -> Optional[VerificationStatus]:
    if not value or value == "all":
        return None
    try:
        return VerificationStatus(value)
    except ValueError:
        raise ValidationFailed(f"Unknown verification status '{value}'")


def list_partners(db: Session, params: PartnerListRequest) -> PartnerListResponse:
    status = parse_status_filter(params.verification_status)
    partners, total = partner_store.query_partners(
        db,
        statuses=[status] if status else None,
        search=params.search,
        skip=params.skip or 0,
        limit=params.limit,
    )
    return PartnerListResponse(
        partners=[PartnerOut.model_validate(p) for p in partners],
        total=total,
    )


def list_pending_verification(db: Session):
    partners, _ = partner_store.query_partners(
        db, statuses=OPEN_REVIEW_STATUSES, oldest_first=True)
    return [PartnerOut.model_validate(p) for p in partners]
