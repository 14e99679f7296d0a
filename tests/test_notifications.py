from datetime import timedelta

import pytest

from hiring.models import Notification, NotificationType, Role
from hiring.models.base import utcnow
from hiring.services import applications as lifecycle
from hiring.services import mail, notifications

from conftest import make_user


def test_submission_notifies_applicant_and_hr(ctx, outbox):
    make_user("hr@bcfi.edu.ph", role=Role.HR, first_name="Ana")
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})

    assert sorted(m["to"] for m in outbox) == ["hr@bcfi.edu.ph", "maria@bcfi.edu.ph"]
    rows = notifications.history(application_id=application.id)
    assert {(n.email, n.type) for n in rows} == {
        ("maria@bcfi.edu.ph", NotificationType.SUBMISSION),
        ("hr@bcfi.edu.ph", NotificationType.HR_ALERT),
    }
    assert all(n.provider_message_id.startswith("msg-") for n in rows)


def test_delivery_failure_does_not_block_transition(ctx, monkeypatch):
    def broken_send(*args, **kwargs):
        raise RuntimeError("SendGrid unavailable")

    monkeypatch.setattr("hiring.jobs.notify.send_email", broken_send)
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    approved = lifecycle.approve_application(application.id)

    assert approved.status == "APPROVED"
    assert Notification.query.count() == 0


def test_disabled_notifications_send_nothing(ctx, outbox):
    ctx.config["NOTIFICATIONS_ENABLED"] = False
    applicant = make_user("maria@bcfi.edu.ph")
    lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    assert outbox == []


def test_reschedule_reason_changes_applicant_message(ctx, outbox):
    make_user("hr@bcfi.edu.ph", role=Role.HR)
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    lifecycle.approve_application(application.id)
    lifecycle.schedule_demo(application.id, utcnow() + timedelta(days=2), location="Room 101")
    del outbox[:]

    lifecycle.schedule_demo(application.id, utcnow() + timedelta(days=4), reason="APPLICANT_NO_SHOW")

    to_applicant = [m for m in outbox if m["to"] == "maria@bcfi.edu.ph"]
    to_hr = [m for m in outbox if m["to"] == "hr@bcfi.edu.ph"]
    assert to_applicant[0]["subject"] == "Action Required: Rescheduling Your Teaching Demo"
    assert "Room 101" in to_applicant[0]["text"]
    assert "Reason: APPLICANT_NO_SHOW" in to_hr[0]["text"]
    types = {n.type for n in notifications.history(email="maria@bcfi.edu.ph")}
    assert NotificationType.RESCHEDULE in types


def test_final_interview_audit_row_uses_short_message(ctx, outbox):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    lifecycle.complete_application(application.id, 90, "PASS", interview_eligible=True)
    for stage in ("initial", "final"):
        lifecycle.schedule_interview(application.id, stage, utcnow() + timedelta(days=2))
        lifecycle.record_interview_result(application.id, stage, "PASS")

    sent = outbox[-1]
    assert sent["subject"] == "Congratulations! Passed Final Interview"
    row = notifications.history(email="maria@bcfi.edu.ph", limit=1)[0]
    assert row.subject == sent["subject"]
    assert row.message.startswith("Congratulations! You have passed the final interview")
    assert row.message != sent["text"]


def test_results_message_requires_completed_scores(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    with pytest.raises(ValueError):
        notifications.results_message(application, applicant, [])


def test_send_email_with_retry_backs_off(ctx, monkeypatch):
    calls = []

    def flaky_send(to_email, subject, text):
        calls.append(to_email)
        if len(calls) < 3:
            raise RuntimeError("timeout")
        return 202, {}

    delays = []
    monkeypatch.setattr(mail, "send_email", flaky_send)
    monkeypatch.setattr(mail.time, "sleep", delays.append)

    assert mail.send_email_with_retry("maria@bcfi.edu.ph", "Hi", "Body", initial_delay=1) == (202, {})
    assert len(calls) == 3
    assert delays == [1, 2]


def test_send_email_with_retry_gives_up(ctx, monkeypatch):
    def down(to_email, subject, text):
        raise RuntimeError("down")

    monkeypatch.setattr(mail, "send_email", down)
    monkeypatch.setattr(mail.time, "sleep", lambda seconds: None)
    with pytest.raises(RuntimeError, match="down"):
        mail.send_email_with_retry("maria@bcfi.edu.ph", "Hi", "Body")


def test_send_email_requires_api_key(ctx):
    with pytest.raises(RuntimeError, match="SENDGRID_API_KEY"):
        mail.send_email("maria@bcfi.edu.ph", "Hi", "Body")
