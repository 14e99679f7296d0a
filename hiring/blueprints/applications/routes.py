from flask import request
from flask_login import login_required, current_user
from . import bp
from .forms import (ApplicationForm, DecisionForm, DemoScheduleForm, ApplicationUpdateForm,
                    CompleteForm, InterviewScheduleForm, InterviewResultForm)
from ...errors import AuthorizationError, ValidationError
from ...services import applications as lifecycle
from ...utils.decorators import hr_required
from ...utils.http import api_response, json_body, formdata, validate, page_args


def _documents(body):
    docs = body.get("documents")
    if docs is None:
        return None
    if not isinstance(docs, list) or not all(isinstance(d, dict) for d in docs):
        raise ValidationError("documents must be a list of file descriptors")
    return docs


@bp.post("")
@login_required
def create_application():
    body = json_body()
    form = validate(ApplicationForm(formdata=formdata(body)))
    data = {k: v for k, v in form.data.items() if v not in (None, "")}
    docs = _documents(body)
    if docs is not None:
        data["documents"] = docs
    application = lifecycle.create_application(current_user.id, data)
    return api_response(application.to_dict(), "Application submitted successfully", 201)


@bp.get("/my-applications")
@login_required
def my_applications():
    items = lifecycle.list_applicant_applications(current_user.id)
    return api_response([a.to_dict() for a in items], "Applications retrieved successfully")


@bp.get("/my-active-application")
@login_required
def my_active_application():
    application = lifecycle.get_active_application(current_user.id)
    return api_response(application.to_dict() if application else None,
                        "Active application retrieved successfully")


@bp.get("")
@login_required
@hr_required
def list_applications():
    page, limit = page_args()
    items, total = lifecycle.list_applications(
        status=request.args.get("status"),
        result=request.args.get("result"),
        search=request.args.get("search"),
        page=page, limit=limit,
    )
    return api_response({
        "applications": [a.to_dict(with_applicant=True) for a in items],
        "total": total,
        "page": page,
        "limit": limit,
    }, "Applications retrieved successfully")


@bp.get("/<int:application_id>")
@login_required
def get_application(application_id):
    application = lifecycle.get_application(application_id)
    if not (current_user.is_staff or application.applicant_id == current_user.id):
        raise AuthorizationError("Access denied. You can only view your own application")
    return api_response(application.to_dict(with_applicant=True), "Application retrieved successfully")


@bp.put("/<int:application_id>")
@login_required
@hr_required
def update_application(application_id):
    body = json_body()
    form = validate(ApplicationUpdateForm(formdata=formdata(body)))
    fields = {k: form.data[k] for k in form.data if k in body and k != "csrf_token"}
    application = lifecycle.update_application(application_id, fields)
    return api_response(application.to_dict(), "Application updated successfully")


@bp.delete("/<int:application_id>")
@login_required
@hr_required
def delete_application(application_id):
    lifecycle.delete_application(application_id)
    return api_response(None, "Application deleted successfully")


@bp.put("/<int:application_id>/approve")
@login_required
@hr_required
def approve_application(application_id):
    form = validate(DecisionForm(formdata=formdata()))
    application = lifecycle.approve_application(application_id, form.hr_notes.data or None)
    return api_response(application.to_dict(), "Application approved successfully")


@bp.put("/<int:application_id>/reject")
@login_required
@hr_required
def reject_application(application_id):
    form = validate(DecisionForm(formdata=formdata()))
    application = lifecycle.reject_application(application_id, form.hr_notes.data or None)
    return api_response(application.to_dict(), "Application rejected successfully")


@bp.put("/<int:application_id>/schedule")
@login_required
@hr_required
def schedule_demo(application_id):
    form = validate(DemoScheduleForm(formdata=formdata()))
    application = lifecycle.schedule_demo(
        application_id, form.demo_schedule.data,
        location=form.demo_location.data or None,
        duration=form.demo_duration.data,
        notes=form.demo_notes.data or None,
        reason=form.reason.data or None,
    )
    return api_response(application.to_dict(), "Demo scheduled successfully")


@bp.put("/<int:application_id>/complete")
@login_required
@hr_required
def complete_application(application_id):
    form = validate(CompleteForm(formdata=formdata()))
    application = lifecycle.complete_application(application_id, form.total_score.data, form.result.data)
    return api_response(application.to_dict(), "Application completed successfully")


@bp.put("/<int:application_id>/interviews/<stage>")
@login_required
@hr_required
def schedule_interview(application_id, stage):
    form = validate(InterviewScheduleForm(formdata=formdata()))
    application = lifecycle.schedule_interview(application_id, stage, form.scheduled_at.data)
    return api_response(application.to_dict(), "Interview scheduled successfully")


@bp.put("/<int:application_id>/interviews/<stage>/result")
@login_required
@hr_required
def record_interview_result(application_id, stage):
    form = validate(InterviewResultForm(formdata=formdata()))
    application = lifecycle.record_interview_result(application_id, stage, form.result.data)
    return api_response(application.to_dict(), "Interview result recorded successfully")
