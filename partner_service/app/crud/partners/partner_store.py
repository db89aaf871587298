# crud/partners/partner_store.py
"""Partner record store.

Only the verification workflow and the verification query service import this
module. Nothing here commits; the caller owns the unit of work.
"""
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFound
from ...enum.verification_enum import VerificationStatus
from ...models.partners.partners import Partner
from ...models.partners.serviceable_pincodes import ServiceablePincode


def get_partner(db: Session, partner_id: int) -> Partner:
    partner = db.query(Partner).filter(Partner.id == partner_id).first()
    if not partner:
        raise NotFound(f"Partner {partner_id} not found")
    return partner


def cas_update_partner_status(
    db: Session,
    partner_id: int,
    expected_status: VerificationStatus,
    new_status: VerificationStatus,
    changed_at: datetime,
    rejection_reason: Optional[str] = None,
) -> bool:
    """Write the new status only if the row still holds ``expected_status``.

    Returns False when another writer got there first.
    """
    updated = (
        db.query(Partner)
        .filter(
            Partner.id == partner_id,
            Partner.verification_status == expected_status,
        )
        .update(
            {
                Partner.verification_status: new_status,
                Partner.rejection_reason: rejection_reason,
                Partner.updated_at: changed_at,
                Partner.status_changed_at: changed_at,
            },
            synchronize_session=False,
        )
    )
    return updated == 1


def list_pincodes(db: Session, partner_id: int) -> List[ServiceablePincode]:
    return (
        db.query(ServiceablePincode)
        .filter(ServiceablePincode.partner_id == partner_id)
        .order_by(ServiceablePincode.pincode.asc(), ServiceablePincode.id.asc())
        .all()
    )


def query_partners(
    db: Session,
    statuses: Optional[Iterable[VerificationStatus]] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    oldest_first: bool = False,
):
    query = db.query(Partner)

    if statuses:
        query = query.filter(Partner.verification_status.in_(list(statuses)))

    if search:
        like = f"%{search}%"
        query = query.filter(or_(
            Partner.full_name.ilike(like),
            Partner.email.ilike(like),
            Partner.company_name.ilike(like),
            Partner.phone.ilike(like),
        ))

    total = query.count()

    order = Partner.created_at.asc() if oldest_first else Partner.created_at.desc()
    query = query.order_by(order, Partner.id.asc() if oldest_first else Partner.id.desc())

    if skip:
        query = query.offset(skip)
    if limit:
        query = query.limit(limit)

    return query.all(), total
