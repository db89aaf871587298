# crud/partners/verification_workflow.py
"""Partner verification state machine.

Every transition runs as one unit of work: check the current status against
the transition table, compare-and-swap the partner row, append exactly one
history entry, commit. If anything in between fails the session is rolled
back, so a status change never exists without its history entry.

Concurrency control is the compare-and-swap on ``verification_status`` alone.
A writer that loses the race gets ``ConcurrentModification`` immediately and
nothing is retried here; the caller refetches and decides again.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import FrozenSet, Iterable, Optional

from sqlalchemy.orm import Session

from shared.core.exceptions import (
    ConcurrentModification, InvalidTransition, ValidationFailed
)
from shared.core.schemas import AdminToken
from ...enum.verification_enum import (
    OPEN_REVIEW_STATUSES, VerificationAction, VerificationStatus
)
from ...models.partners.partners import Partner
from . import audit_log_store, partner_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    name: str
    sources: FrozenSet[VerificationStatus]
    target: VerificationStatus
    history_action: VerificationAction
    message_label: Optional[str] = None  # set when a non-blank message is required
    from_partner: bool = False
    requires_active: bool = False


APPROVE = Transition(
    name="approve",
    sources=frozenset(OPEN_REVIEW_STATUSES),
    target=VerificationStatus.APPROVED,
    history_action=VerificationAction.APPROVED,
)
REJECT = Transition(
    name="reject",
    sources=frozenset(OPEN_REVIEW_STATUSES),
    target=VerificationStatus.REJECTED,
    history_action=VerificationAction.REJECTED,
    message_label="Rejection reason",
)
REQUEST_CLARIFICATION = Transition(
    name="request_clarification",
    sources=frozenset(OPEN_REVIEW_STATUSES),
    target=VerificationStatus.CLARIFICATION_NEEDED,
    history_action=VerificationAction.CLARIFICATION_REQUESTED,
    message_label="Clarification message",
)
PARTNER_RESPONDS = Transition(
    name="partner_responds",
    sources=frozenset({VerificationStatus.CLARIFICATION_NEEDED}),
    target=VerificationStatus.UNDER_REVIEW,
    history_action=VerificationAction.CLARIFICATION_RESPONDED,
    message_label="Response message",
    from_partner=True,
)
SUSPEND = Transition(
    name="suspend",
    sources=frozenset({VerificationStatus.APPROVED}),
    target=VerificationStatus.SUSPENDED,
    history_action=VerificationAction.SUSPENDED,
    message_label="Suspension reason",
    requires_active=True,
)
# reinstatement is logged as a fresh approval
REINSTATE = Transition(
    name="reinstate",
    sources=frozenset({VerificationStatus.SUSPENDED}),
    target=VerificationStatus.APPROVED,
    history_action=VerificationAction.APPROVED,
)

TRANSITIONS = {
    t.name: t for t in (APPROVE, REJECT, REQUEST_CLARIFICATION, PARTNER_RESPONDS, SUSPEND, REINSTATE)
}

# history action -> status it leaves the partner in, with the states it may follow
_REPLAY_RULES = {
    VerificationAction.APPROVED: (
        APPROVE.sources | REINSTATE.sources, VerificationStatus.APPROVED),
    VerificationAction.REJECTED: (REJECT.sources, VerificationStatus.REJECTED),
    VerificationAction.CLARIFICATION_REQUESTED: (
        REQUEST_CLARIFICATION.sources, VerificationStatus.CLARIFICATION_NEEDED),
    VerificationAction.CLARIFICATION_RESPONDED: (
        PARTNER_RESPONDS.sources, VerificationStatus.UNDER_REVIEW),
    VerificationAction.SUSPENDED: (SUSPEND.sources, VerificationStatus.SUSPENDED),
    VerificationAction.REINSTATED: (REINSTATE.sources, VerificationStatus.APPROVED),
}


def allowed_actions(status: VerificationStatus, is_active: bool = True) -> list:
    """Admin-facing action names legal from ``status``."""
    return [
        t.name for t in TRANSITIONS.values()
        if status in t.sources and not t.from_partner
        and (is_active or not t.requires_active)
    ]


def replay_history(entries: Iterable) -> VerificationStatus:
    """Fold history entries, oldest first, into the status they produce.

    Raises ValueError if the sequence could not have been written by this
    state machine.
    """
    status = VerificationStatus.PENDING
    for entry in entries:
        action = VerificationAction(entry.action_type)
        sources, target = _REPLAY_RULES[action]
        if status not in sources:
            raise ValueError(
                f"History entry {getattr(entry, 'id', None)} ({action.value}) "
                f"cannot follow status {status.value}")
        status = target
    return status


def _require_text(value: Optional[str], label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailed(f"{label} is required")
    return cleaned


def _optional_text(value: Optional[str]) -> Optional[str]:
    cleaned = (value or "").strip()
    return cleaned or None


def apply_transition(
    db: Session,
    partner_id: int,
    transition: Transition,
    message: Optional[str] = None,
    performed_by: Optional[AdminToken] = None,
) -> Partner:
    if transition.message_label:
        message = _require_text(message, transition.message_label)
    else:
        message = _optional_text(message)

    try:
        partner = partner_store.get_partner(db, partner_id)
        current = VerificationStatus(partner.verification_status)

        if current not in transition.sources:
            logger.warning(
                "Refused %s on partner %s in status %s",
                transition.name, partner_id, current.value)
            raise InvalidTransition(
                f"Cannot {transition.name.replace('_', ' ')} a partner "
                f"whose status is {current.value}")

        if transition.requires_active and not partner.is_active:
            raise InvalidTransition(
                f"Cannot {transition.name} an inactive partner")

        now = datetime.now(timezone.utc)
        swapped = partner_store.cas_update_partner_status(
            db,
            partner_id,
            expected_status=current,
            new_status=transition.target,
            changed_at=now,
            rejection_reason=message if transition is REJECT else None,
        )
        if not swapped:
            logger.warning(
                "Lost race on partner %s: %s expected status %s",
                partner_id, transition.name, current.value)
            raise ConcurrentModification()

        audit_log_store.append_history(
            db,
            partner_id=partner_id,
            action_type=transition.history_action,
            created_at=now,
            message_from_admin=None if transition.from_partner else message,
            message_from_partner=message if transition.from_partner else None,
            performed_by_admin_id=performed_by.admin_id if performed_by else None,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Partner %s: %s -> %s via %s by admin %s",
        partner_id, current.value, transition.target.value, transition.name,
        performed_by.admin_id if performed_by else "partner")

    db.refresh(partner)
    return partner


def approve_partner(db: Session, partner_id: int, performed_by: AdminToken, notes: Optional[str] = None):
    return apply_transition(db, partner_id, APPROVE, notes, performed_by)


def reject_partner(db: Session, partner_id: int, performed_by: AdminToken, reason: Optional[str]):
    return apply_transition(db, partner_id, REJECT, reason, performed_by)


def request_clarification(db: Session, partner_id: int, performed_by: AdminToken, message: Optional[str]):
    return apply_transition(db, partner_id, REQUEST_CLARIFICATION, message, performed_by)


def record_partner_response(db: Session, partner_id: int, message: Optional[str]):
    return apply_transition(db, partner_id, PARTNER_RESPONDS, message)


def suspend_partner(db: Session, partner_id: int, performed_by: AdminToken, reason: Optional[str]):
    return apply_transition(db, partner_id, SUSPEND, reason, performed_by)


def reinstate_partner(db: Session, partner_id: int, performed_by: AdminToken, notes: Optional[str] = None):
    return apply_transition(db, partner_id, REINSTATE, notes, performed_by)
