import pytest

from shared.core.config import settings
from shared.core.exceptions import NotFound, ValidationFailed
from partner_service.app.crud.partners import audit_log_store
from partner_service.app.crud.partners import verification_query as query
from partner_service.app.crud.partners import verification_workflow as workflow
from partner_service.app.enum.verification_enum import VerificationAction, VerificationStatus
from partner_service.app.schemas.partners.partner_schemas import PartnerListRequest


def test_details_include_profile_pincodes_and_history(db, make_partner, reviewer):
    partner = make_partner(
        pincodes=[("560034", "Bengaluru"), ("110001", "New Delhi")],
        gst_number="29ABCDE1234F1Z5",
    )
    workflow.request_clarification(db, partner.id, reviewer, "Upload PAN")
    workflow.record_partner_response(db, partner.id, "Done")
    workflow.approve_partner(db, partner.id, reviewer, "Looks good")

    details = query.get_verification_details(db, partner.id)

    assert details.partner.id == partner.id
    assert details.partner.gst_number == "29ABCDE1234F1Z5"
    assert details.partner.verification_status == VerificationStatus.APPROVED
    assert [p.pincode for p in details.serviceable_pincodes] == ["110001", "560034"]
    assert [h.action_type for h in details.verification_history] == [
        VerificationAction.CLARIFICATION_REQUESTED,
        VerificationAction.CLARIFICATION_RESPONDED,
        VerificationAction.APPROVED,
    ]
    assert details.verification_history[1].message_from_partner == "Done"
    assert details.allowed_actions == ["suspend"]


def test_details_for_fresh_partner(db, make_partner):
    partner = make_partner()

    details = query.get_verification_details(db, partner.id)

    assert details.verification_history == []
    assert details.serviceable_pincodes == []
    assert details.partner.verification_status == VerificationStatus.PENDING


def test_details_hide_suspend_for_inactive_partner(db, make_partner, reviewer):
    partner = make_partner(is_active=False)
    workflow.approve_partner(db, partner.id, reviewer)

    details = query.get_verification_details(db, partner.id)

    assert details.allowed_actions == []


def test_details_unknown_partner(db):
    with pytest.raises(NotFound):
        query.get_verification_details(db, 424242)


def test_details_reread_when_history_lags_status(db, approved_partner, monkeypatch):
    real_list_history = audit_log_store.list_history
    calls = []

    def lagging_list_history(session, partner_id):
        calls.append(partner_id)
        history = real_list_history(session, partner_id)
        # first read misses the entry committed alongside the status change
        return history[:-1] if len(calls) == 1 else history

    monkeypatch.setattr(audit_log_store, "list_history", lagging_list_history)

    details = query.get_verification_details(db, approved_partner.id)

    assert len(calls) == 2
    assert [h.action_type for h in details.verification_history] == [VerificationAction.APPROVED]


def test_details_reread_when_status_cycles_between_reads(db, session_factory, approved_partner,
                                                        super_admin, monkeypatch):
    real_list_history = audit_log_store.list_history
    calls = []

    def list_history_after_suspend_and_reinstate(session, partner_id):
        calls.append(partner_id)
        if len(calls) == 1:
            # partner row already read as approved; another operator cycles it meanwhile
            with session_factory() as other:
                workflow.suspend_partner(other, partner_id, super_admin, "Fraud report")
                workflow.reinstate_partner(other, partner_id, super_admin)
        return real_list_history(session, partner_id)

    monkeypatch.setattr(audit_log_store, "list_history", list_history_after_suspend_and_reinstate)

    details = query.get_verification_details(db, approved_partner.id)

    assert len(calls) == 2
    assert details.partner.verification_status == VerificationStatus.APPROVED
    assert [h.action_type for h in details.verification_history] == [
        VerificationAction.APPROVED,
        VerificationAction.SUSPENDED,
        VerificationAction.APPROVED,
    ]


def test_details_give_up_after_bounded_attempts(db, approved_partner, monkeypatch):
    calls = []

    def empty_history(session, partner_id):
        calls.append(partner_id)
        return []

    monkeypatch.setattr(audit_log_store, "list_history", empty_history)

    with pytest.raises(query.SnapshotUnavailable):
        query.get_verification_details(db, approved_partner.id)

    assert len(calls) == max(1, settings.SNAPSHOT_READ_ATTEMPTS)


def test_list_partners_newest_first_with_total(db, make_partner):
    first = make_partner()
    second = make_partner()
    third = make_partner()

    result = query.list_partners(db, PartnerListRequest(limit=2))

    assert result.total == 3
    assert [p.id for p in result.partners] == [third.id, second.id]
    assert first.id not in [p.id for p in result.partners]


def test_list_partners_filters_by_status_and_alias(db, make_partner, reviewer):
    waiting = make_partner()
    asked = make_partner()
    workflow.request_clarification(db, asked.id, reviewer, "Need address proof")

    for value in ("clarification_needed", "clarification"):
        result = query.list_partners(db, PartnerListRequest(verification_status=value))
        assert [p.id for p in result.partners] == [asked.id]

    everyone = query.list_partners(db, PartnerListRequest(verification_status="all"))
    assert {p.id for p in everyone.partners} == {waiting.id, asked.id}


def test_list_partners_rejects_unknown_status(db):
    with pytest.raises(ValidationFailed):
        query.list_partners(db, PartnerListRequest(verification_status="archived"))


def test_list_partners_search(db, make_partner):
    make_partner(company_name="Green Loop Recyclers")
    target = make_partner(company_name="Second Life Phones")

    result = query.list_partners(db, PartnerListRequest(search="  life phones "))

    assert result.total == 1
    assert result.partners[0].id == target.id


def test_pending_verification_lists_open_reviews_oldest_first(db, make_partner, reviewer):
    older = make_partner()
    done = make_partner()
    asked = make_partner()
    turned_down = make_partner()
    workflow.approve_partner(db, done.id, reviewer)
    workflow.request_clarification(db, asked.id, reviewer, "Need bank proof")
    workflow.reject_partner(db, turned_down.id, reviewer, "Duplicate account")

    pending = query.list_pending_verification(db)

    assert [p.id for p in pending] == [older.id, asked.id]
