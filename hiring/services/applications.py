"""Application lifecycle: submission, HR decisions, demo and interview scheduling.

Every mutation commits before its signal is sent, so notification receivers
only ever see persisted state and cannot undo a transition.
"""
from datetime import datetime, timedelta, timezone
from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from ..extensions import db
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models.application import Application, ApplicationStatus, ApplicationResult
from ..models.base import utcnow
from ..models.user import User
from .. import signals

ACTIVE_APPLICATION_MESSAGE = (
    "You already have an active application. "
    "Please wait for the current application to be completed."
)

CREATE_FIELDS = ("program", "documents", "position", "subject_specialization",
                 "educational_background", "teaching_experience", "motivation")

UPDATE_FIELDS = ("status", "result", "total_score", "demo_schedule", "demo_location",
                 "demo_duration", "demo_notes", "hr_notes", "interview_eligible",
                 "initial_interview_schedule", "initial_interview_result",
                 "final_interview_schedule", "final_interview_result")

INTERVIEW_STAGES = ("initial", "final")

# concurrent submissions can collide on attempt_number; re-read and retry
MAX_CREATE_ATTEMPTS = 3


def _coerce_id(value):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def _emit(signal, application, **extra):
    signal.send(current_app._get_current_object(), application=application,
                applicant=application.applicant, **extra)


def get_application(application_id):
    application = db.session.get(Application, application_id)
    if not application:
        raise NotFoundError("Application not found")
    return application


def get_active_application(applicant_id):
    return (Application.query
            .filter(Application.applicant_id == applicant_id,
                    Application.status.in_(ApplicationStatus.ACTIVE))
            .first())


def list_applicant_applications(applicant_id):
    return (Application.query.filter_by(applicant_id=applicant_id)
            .order_by(Application.attempt_number.desc()).all())


def list_applications(status=None, result=None, search=None, page=1, limit=10):
    """Paged HR listing. Returns ``(items, total)``."""
    query = Application.query
    if status:
        query = query.filter(Application.status == status)
    if result:
        query = query.filter(Application.result == result)
    if search:
        like = f"%{search}%"
        query = query.join(User, User.id == Application.applicant_id).filter(or_(
            User.first_name.ilike(like), User.last_name.ilike(like), User.email.ilike(like)))
    pagination = (query.order_by(Application.created_at.desc(), Application.id.desc())
                  .paginate(page=page, per_page=limit, error_out=False))
    return pagination.items, pagination.total


def create_application(applicant_id, data):
    applicant_id = _coerce_id(applicant_id)
    if not applicant_id or not db.session.get(User, applicant_id):
        raise ValidationError("Invalid applicant ID")
    fields = {k: v for k, v in (data or {}).items() if k in CREATE_FIELDS}
    if not (fields.get("program") or "").strip():
        raise ValidationError("Program is required")

    for attempt in range(MAX_CREATE_ATTEMPTS):
        if get_active_application(applicant_id):
            raise ConflictError(ACTIVE_APPLICATION_MESSAGE)
        last = (Application.query.filter_by(applicant_id=applicant_id)
                .order_by(Application.attempt_number.desc()).first())
        application = Application(
            applicant_id=applicant_id,
            attempt_number=last.attempt_number + 1 if last else 1,
            status=ApplicationStatus.PENDING,
            **fields,
        )
        db.session.add(application)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            current_app.logger.warning('Application create for applicant %s collided (try %s)', applicant_id, attempt + 1)
            continue
        current_app.logger.info('Application %s submitted by applicant %s (attempt %s)',
                                application.id, applicant_id, application.attempt_number)
        _emit(signals.application_submitted, application)
        return application
    raise ConflictError(ACTIVE_APPLICATION_MESSAGE)


def _check_update(fields):
    unknown = set(fields) - set(UPDATE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
    if "status" in fields and fields["status"] not in ApplicationStatus.ALL:
        raise ValidationError(f"Invalid status: {fields['status']}")
    for key in ("result", "initial_interview_result", "final_interview_result"):
        if fields.get(key) is not None and fields[key] not in ApplicationResult.ALL:
            raise ValidationError(f"Invalid {key}: {fields[key]}")


def update_application(application_id, fields):
    _check_update(fields)
    application = get_application(application_id)
    for key, value in fields.items():
        setattr(application, key, value)
    try:
        db.session.commit()
    except IntegrityError:
        # partial unique index: a second active application for this applicant
        db.session.rollback()
        raise ConflictError(ACTIVE_APPLICATION_MESSAGE)
    return application


def approve_application(application_id, hr_notes=None):
    fields = {"status": ApplicationStatus.APPROVED}
    if hr_notes is not None:
        fields["hr_notes"] = hr_notes
    application = update_application(application_id, fields)
    current_app.logger.info('Application %s approved', application.id)
    _emit(signals.application_approved, application)
    return application


def reject_application(application_id, hr_notes=None):
    fields = {"status": ApplicationStatus.REJECTED}
    if hr_notes is not None:
        fields["hr_notes"] = hr_notes
    application = update_application(application_id, fields)
    current_app.logger.info('Application %s rejected', application.id)
    _emit(signals.application_rejected, application)
    return application


def _to_naive_utc(value):
    if value.tzinfo:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def schedule_demo(application_id, demo_schedule, location=None, duration=None, notes=None, reason=None):
    application = get_application(application_id)
    if application.status != ApplicationStatus.APPROVED:
        raise ValidationError("Application must be approved before scheduling demo")
    if not isinstance(demo_schedule, datetime):
        raise ValidationError("Demo schedule must be a date and time")
    demo_schedule = _to_naive_utc(demo_schedule)
    today = utcnow().date()
    if (demo_schedule.date() - today).days < 1:
        raise ValidationError(
            "Demo date must be at least 1 day in the future. "
            f"Please select a date starting from {(today + timedelta(days=1)).isoformat()}")

    previous = application.demo_schedule
    fields = {"demo_schedule": demo_schedule}
    if location is not None:
        fields["demo_location"] = location
    if duration is not None:
        fields["demo_duration"] = duration
    if notes is not None:
        fields["demo_notes"] = notes
    application = update_application(application.id, fields)

    if previous is None:
        _emit(signals.demo_scheduled, application)
    else:
        _emit(signals.demo_rescheduled, application, reason=reason, previous=previous)
    return application


def complete_application(application_id, total_score, result, interview_eligible=None):
    if result not in ApplicationResult.ALL:
        raise ValidationError(f"Invalid result: {result}")
    fields = {"status": ApplicationStatus.COMPLETED, "total_score": total_score, "result": result}
    if interview_eligible is not None:
        fields["interview_eligible"] = interview_eligible
    application = update_application(application_id, fields)
    current_app.logger.info('Application %s completed: %s (%s)', application.id, result, total_score)
    return application


def delete_application(application_id):
    application = get_application(application_id)
    db.session.delete(application)
    db.session.commit()
    current_app.logger.info('Application %s deleted', application_id)


def _check_stage(stage):
    if stage not in INTERVIEW_STAGES:
        raise ValidationError(f"Invalid interview stage: {stage}")


def schedule_interview(application_id, stage, when):
    _check_stage(stage)
    application = get_application(application_id)
    if not application.interview_eligible:
        raise ValidationError("Application is not eligible for interviews")
    if stage == "final" and application.initial_interview_result != ApplicationResult.PASS:
        raise ValidationError("Initial interview must be passed before scheduling the final interview")
    if not isinstance(when, datetime):
        raise ValidationError("Interview schedule must be a date and time")
    application = update_application(application.id, {f"{stage}_interview_schedule": _to_naive_utc(when)})
    _emit(signals.interview_scheduled, application, stage=stage)
    return application


def record_interview_result(application_id, stage, result):
    _check_stage(stage)
    if result not in ApplicationResult.ALL:
        raise ValidationError(f"Invalid result: {result}")
    application = get_application(application_id)
    if getattr(application, f"{stage}_interview_schedule") is None:
        raise ValidationError(f"The {stage} interview has not been scheduled")
    application = update_application(application.id, {f"{stage}_interview_result": result})
    if stage == "final" and result == ApplicationResult.PASS:
        _emit(signals.final_interview_passed, application)
    return application
