from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from hiring import signals
from hiring.errors import ConflictError, NotFoundError, ValidationError
from hiring.extensions import db
from hiring.models import Application, ApplicationStatus
from hiring.models.base import utcnow
from hiring.services import applications as lifecycle

from conftest import make_user


def _in_days(days, hour=9):
    return (utcnow() + timedelta(days=days)).replace(hour=hour, minute=30, second=0, microsecond=0)


def test_first_application_is_attempt_one(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    assert application.attempt_number == 1
    assert application.status == ApplicationStatus.PENDING
    assert lifecycle.get_active_application(applicant.id).id == application.id


def test_second_active_application_conflicts(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    with pytest.raises(ConflictError, match="already have an active application"):
        lifecycle.create_application(applicant.id, {"program": "BSEd Math"})

    first = lifecycle.list_applicant_applications(applicant.id)[0]
    lifecycle.approve_application(first.id)
    with pytest.raises(ConflictError):
        lifecycle.create_application(applicant.id, {"program": "BSEd Math"})


def test_attempt_numbers_increase(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    attempts = []
    for program in ("BSEd English", "BSEd Math", "BSEd Science"):
        application = lifecycle.create_application(applicant.id, {"program": program})
        attempts.append(application.attempt_number)
        lifecycle.reject_application(application.id, "Incomplete documents")
    assert attempts == [1, 2, 3]
    assert [a.attempt_number for a in lifecycle.list_applicant_applications(applicant.id)] == [3, 2, 1]


def test_one_active_application_enforced_by_index(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    db.session.add(Application(applicant_id=applicant.id, program="BSEd Math",
                               attempt_number=2, status=ApplicationStatus.PENDING))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_create_application_validation(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    with pytest.raises(ValidationError, match="Invalid applicant ID"):
        lifecycle.create_application(999, {"program": "BSEd English"})
    with pytest.raises(ValidationError, match="Invalid applicant ID"):
        lifecycle.create_application("abc", {"program": "BSEd English"})
    with pytest.raises(ValidationError, match="Program is required"):
        lifecycle.create_application(applicant.id, {"program": " "})


def test_approve_and_reject_keep_notes(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    lifecycle.approve_application(application.id, "Strong credentials")
    assert application.status == ApplicationStatus.APPROVED
    assert application.hr_notes == "Strong credentials"

    # no notes given: previous notes stay
    lifecycle.reject_application(application.id)
    assert application.status == ApplicationStatus.REJECTED
    assert application.hr_notes == "Strong credentials"

    # approve is allowed from any status
    lifecycle.approve_application(application.id)
    assert application.status == ApplicationStatus.APPROVED


def test_update_application_rejects_unknown_fields(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    with pytest.raises(ValidationError):
        lifecycle.update_application(application.id, {"applicant_id": 5})
    with pytest.raises(ValidationError):
        lifecycle.update_application(application.id, {"status": "HIRED"})
    with pytest.raises(NotFoundError):
        lifecycle.update_application(999, {"hr_notes": "x"})


def test_schedule_demo_requires_approval(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    with pytest.raises(ValidationError, match="must be approved"):
        lifecycle.schedule_demo(application.id, _in_days(3))


def test_schedule_demo_must_be_a_future_day(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    lifecycle.approve_application(application.id)
    with pytest.raises(ValidationError, match="at least 1 day in the future"):
        lifecycle.schedule_demo(application.id, utcnow())
    with pytest.raises(ValidationError):
        lifecycle.schedule_demo(application.id, "tomorrow")


def test_schedule_then_reschedule_emit_distinct_signals(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    lifecycle.approve_application(application.id)

    scheduled, rescheduled = [], []

    def on_scheduled(sender, **kwargs):
        scheduled.append(kwargs)

    def on_rescheduled(sender, **kwargs):
        rescheduled.append(kwargs)

    with signals.demo_scheduled.connected_to(on_scheduled), \
            signals.demo_rescheduled.connected_to(on_rescheduled):
        first = _in_days(3, hour=14)
        lifecycle.schedule_demo(application.id, first, location="Room 204", duration=60)
        lifecycle.schedule_demo(application.id, _in_days(5), reason="SCHOOL")

    assert len(scheduled) == 1
    assert len(rescheduled) == 1
    assert rescheduled[0]["reason"] == "SCHOOL"
    assert rescheduled[0]["previous"] == first
    # location kept from the first call
    assert application.demo_location == "Room 204"
    assert application.demo_time() == "9:30 AM"


def test_complete_application_sets_result(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    lifecycle.complete_application(application.id, 82.5, "PASS")
    assert application.status == ApplicationStatus.COMPLETED
    assert application.total_score == 82.5
    with pytest.raises(ValidationError):
        lifecycle.complete_application(application.id, 82.5, "MAYBE")

    # completed is no longer active, so a new attempt is allowed
    assert lifecycle.create_application(applicant.id, {"program": "BSEd Math"}).attempt_number == 2


def test_interview_flow(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    with pytest.raises(ValidationError, match="not eligible"):
        lifecycle.schedule_interview(application.id, "initial", _in_days(2))

    lifecycle.complete_application(application.id, 90, "PASS", interview_eligible=True)
    with pytest.raises(ValidationError, match="Initial interview must be passed"):
        lifecycle.schedule_interview(application.id, "final", _in_days(4))
    with pytest.raises(ValidationError, match="has not been scheduled"):
        lifecycle.record_interview_result(application.id, "initial", "PASS")
    with pytest.raises(ValidationError, match="Invalid interview stage"):
        lifecycle.schedule_interview(application.id, "panel", _in_days(2))

    lifecycle.schedule_interview(application.id, "initial", _in_days(2))
    lifecycle.record_interview_result(application.id, "initial", "PASS")

    passed = []

    def on_passed(sender, **kwargs):
        passed.append(kwargs["application"].id)

    with signals.final_interview_passed.connected_to(on_passed):
        lifecycle.schedule_interview(application.id, "final", _in_days(4))
        lifecycle.record_interview_result(application.id, "final", "PASS")
    assert passed == [application.id]
    assert application.final_interview_result == "PASS"


def test_list_applications_filters_and_pages(ctx):
    for i, name in enumerate(("Maria", "Jose", "Ana")):
        applicant = make_user(f"{name.lower()}@bcfi.edu.ph", first_name=name)
        application = lifecycle.create_application(applicant.id, {"program": f"Program {i}"})
        if name == "Jose":
            lifecycle.approve_application(application.id)

    items, total = lifecycle.list_applications(status=ApplicationStatus.PENDING)
    assert total == 2
    items, total = lifecycle.list_applications(search="jose")
    assert total == 1
    assert items[0].applicant.first_name == "Jose"
    items, total = lifecycle.list_applications(page=2, limit=2)
    assert total == 3
    assert len(items) == 1


def test_delete_application(ctx):
    applicant = make_user("maria@bcfi.edu.ph")
    application = lifecycle.create_application(applicant.id, {"program": "BSEd English"})
    lifecycle.delete_application(application.id)
    with pytest.raises(NotFoundError):
        lifecycle.get_application(application.id)


def _stale_active_lookup(monkeypatch, misses):
    """Active-application lookup that misses the first ``misses`` calls."""
    real_lookup = lifecycle.get_active_application
    calls = []

    def lookup(applicant_id):
        calls.append(applicant_id)
        if len(calls) <= misses:
            return None
        return real_lookup(applicant_id)

    monkeypatch.setattr(lifecycle, "get_active_application", lookup)
    return calls


def test_create_collision_retries_then_conflicts(ctx, monkeypatch):
    applicant = make_user("maria@bcfi.edu.ph")
    first = lifecycle.create_application(applicant.id, {"program": "BSEd English"})

    calls = _stale_active_lookup(monkeypatch, misses=1)
    with pytest.raises(ConflictError, match="already have an active application"):
        lifecycle.create_application(applicant.id, {"program": "BSEd Math"})

    assert len(calls) == 2
    assert [a.id for a in lifecycle.list_applicant_applications(applicant.id)] == [first.id]


def test_create_gives_up_after_repeated_collisions(ctx, monkeypatch):
    applicant = make_user("maria@bcfi.edu.ph")
    lifecycle.create_application(applicant.id, {"program": "BSEd English"})

    calls = _stale_active_lookup(monkeypatch, misses=lifecycle.MAX_CREATE_ATTEMPTS)
    with pytest.raises(ConflictError):
        lifecycle.create_application(applicant.id, {"program": "BSEd Math"})

    assert len(calls) == lifecycle.MAX_CREATE_ATTEMPTS
    assert Application.query.filter_by(applicant_id=applicant.id).count() == 1
