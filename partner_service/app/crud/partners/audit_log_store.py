# crud/partners/audit_log_store.py
"""Append-only verification history. Entries are never updated or deleted."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from ...enum.verification_enum import VerificationAction
from ...models.partners.verification_history import VerificationHistoryEntry


def append_history(
    db: Session,
    partner_id: int,
    action_type: VerificationAction,
    created_at: datetime,
    message_from_admin: Optional[str] = None,
    message_from_partner: Optional[str] = None,
    performed_by_admin_id: Optional[int] = None,
) -> int:
    entry = VerificationHistoryEntry(
        partner_id=partner_id,
        action_type=action_type,
        message_from_admin=message_from_admin,
        message_from_partner=message_from_partner,
        performed_by_admin_id=performed_by_admin_id,
        created_at=created_at,
    )
    db.add(entry)
    db.flush()
    return entry.id


def list_history(db: Session, partner_id: int) -> List[VerificationHistoryEntry]:
    return (
        db.query(VerificationHistoryEntry)
        .filter(VerificationHistoryEntry.partner_id == partner_id)
        .order_by(
            VerificationHistoryEntry.created_at.asc(),
            VerificationHistoryEntry.id.asc(),
        )
        .all()
    )
