from flask import request
from flask_login import login_required, current_user
from . import bp
from .forms import RubricForm, RubricUpdateForm, ScoreForm, ScoreUpdateForm
from ...services import scoring
from ...utils.decorators import hr_required
from ...utils.http import api_response, json_body, formdata, validate


# --- rubrics

@bp.post("/rubrics")
@login_required
@hr_required
def create_rubric():
    form = validate(RubricForm(formdata=formdata()))
    rubric = scoring.create_rubric(
        form.criteria.data, description=form.description.data or None,
        max_score=form.max_score.data if form.max_score.data is not None else 10,
        weight=form.weight.data if form.weight.data is not None else 1.0,
    )
    return api_response(rubric.to_dict(), "Rubric created successfully", 201)


@bp.get("/rubrics")
@login_required
def list_rubrics():
    include_inactive = request.args.get("include_inactive", "false").lower() == "true"
    rubrics = scoring.list_rubrics(include_inactive=include_inactive and current_user.is_staff)
    return api_response([r.to_dict() for r in rubrics], "Rubrics retrieved successfully")


@bp.get("/rubrics/<int:rubric_id>")
@login_required
def get_rubric(rubric_id):
    return api_response(scoring.get_rubric(rubric_id).to_dict(), "Rubric retrieved successfully")


@bp.put("/rubrics/<int:rubric_id>")
@login_required
@hr_required
def update_rubric(rubric_id):
    body = json_body()
    form = validate(RubricUpdateForm(formdata=formdata(body)))
    # only fields present in the body are changed
    changes = {k: form.data[k] for k in ("criteria", "description", "max_score", "weight", "is_active") if k in body}
    rubric = scoring.update_rubric(rubric_id, **changes)
    return api_response(rubric.to_dict(), "Rubric updated successfully")


@bp.delete("/rubrics/<int:rubric_id>")
@login_required
@hr_required
def delete_rubric(rubric_id):
    outcome = scoring.delete_rubric(rubric_id)
    if outcome == "archived":
        return api_response({"id": rubric_id, "state": outcome},
                            "Rubric has existing scores and was deactivated instead of deleted")
    return api_response({"id": rubric_id, "state": outcome}, "Rubric deleted successfully")


# --- scores

@bp.post("/scores")
@login_required
@hr_required
def create_score():
    form = validate(ScoreForm(formdata=formdata()))
    score = scoring.record_score(form.application_id.data, form.rubric_id.data,
                                 form.score_value.data, form.comments.data or None)
    return api_response(score.to_dict(), "Score recorded successfully", 201)


@bp.get("/applications/<int:application_id>/scores")
@login_required
@hr_required
def list_scores(application_id):
    scores = scoring.list_scores(application_id)
    return api_response([s.to_dict() for s in scores], "Scores retrieved successfully")


@bp.put("/applications/<int:application_id>/scores/<int:rubric_id>")
@login_required
@hr_required
def update_score(application_id, rubric_id):
    form = validate(ScoreUpdateForm(formdata=formdata()))
    score = scoring.record_score(application_id, rubric_id, form.score_value.data, form.comments.data or None)
    return api_response(score.to_dict(), "Score updated successfully")


@bp.delete("/applications/<int:application_id>/scores/<int:rubric_id>")
@login_required
@hr_required
def delete_score(application_id, rubric_id):
    scoring.delete_score(application_id, rubric_id)
    return api_response(None, "Score deleted successfully")


# --- results

@bp.get("/applications/<int:application_id>/calculate")
@login_required
@hr_required
def calculate(application_id):
    return api_response(scoring.calculate(application_id), "Score calculated successfully")


@bp.post("/applications/<int:application_id>/complete")
@login_required
@hr_required
def complete(application_id):
    application = scoring.complete(application_id)
    return api_response(application.to_dict(), "Application scoring completed successfully")


@bp.get("/applications/<int:application_id>/summary")
@login_required
def summary(application_id):
    return api_response(scoring.summary(application_id, current_user), "Score summary retrieved successfully")
