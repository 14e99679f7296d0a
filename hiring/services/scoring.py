"""Rubric management and weighted scoring of teaching demos."""
from flask import current_app
from sqlalchemy.exc import IntegrityError
from ..extensions import db
from ..errors import AuthorizationError, NotFoundError, ValidationError
from ..models.application import ApplicationStatus, ApplicationResult
from ..models.rubric import Rubric, RubricState
from ..models.score import Score
from .. import signals
from . import applications as lifecycle

DEFAULT_PASSING_PERCENTAGE = 70.0
DEFAULT_INTERVIEW_PERCENTAGE = 75.0


def passing_threshold():
    return float(current_app.config.get("PASSING_SCORE_PERCENTAGE", DEFAULT_PASSING_PERCENTAGE))


def compute_result(entries, threshold=DEFAULT_PASSING_PERCENTAGE):
    """Weighted percentage over ``(score_value, max_score, weight)`` triples.

    Weight multiplies both the earned and the attainable points, so the
    percentage is a weighted average rather than a plain mean. A percentage
    equal to the threshold passes.
    """
    entries = list(entries)
    if not entries:
        raise ValidationError("No scores found for this application")
    total = sum(value * weight for value, _, weight in entries)
    max_possible = sum(max_score * weight for _, max_score, weight in entries)
    if max_possible <= 0:
        raise ValidationError("Scores carry no attainable points")
    percentage = total / max_possible * 100
    return {
        "total_score": total,
        "max_possible_score": max_possible,
        "percentage": percentage,
        "passing_threshold": threshold,
        "result": ApplicationResult.PASS if percentage >= threshold else ApplicationResult.FAIL,
    }


# --- rubrics -----------------------------------------------------------------

def _positive(name, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number")
    if value <= 0:
        raise ValidationError(f"{name} must be greater than zero")
    return value


def create_rubric(criteria, description=None, max_score=10, weight=1.0):
    if not (criteria or "").strip():
        raise ValidationError("Criteria is required")
    rubric = Rubric(criteria=criteria.strip(), description=description,
                    max_score=_positive("max_score", max_score),
                    weight=_positive("weight", weight),
                    state=RubricState.ACTIVE)
    db.session.add(rubric)
    db.session.commit()
    return rubric


def list_rubrics(include_inactive=False):
    query = Rubric.query
    if not include_inactive:
        query = query.filter(Rubric.state == RubricState.ACTIVE)
    return query.order_by(Rubric.id.asc()).all()


def get_rubric(rubric_id):
    rubric = db.session.get(Rubric, rubric_id)
    if not rubric:
        raise NotFoundError("Rubric not found")
    return rubric


def update_rubric(rubric_id, criteria=None, description=None, max_score=None, weight=None, is_active=None):
    rubric = get_rubric(rubric_id)
    if criteria is not None:
        if not criteria.strip():
            raise ValidationError("Criteria is required")
        rubric.criteria = criteria.strip()
    if description is not None:
        rubric.description = description
    if max_score is not None:
        rubric.max_score = _positive("max_score", max_score)
    if weight is not None:
        rubric.weight = _positive("weight", weight)
    if is_active is not None:
        rubric.state = RubricState.ACTIVE if is_active else RubricState.ARCHIVED
    db.session.commit()
    return rubric


def delete_rubric(rubric_id):
    """Archive a rubric that has scores, delete it otherwise.

    Returns the resulting state: ``"archived"`` or ``"deleted"``.
    """
    rubric = get_rubric(rubric_id)
    if Score.query.filter_by(rubric_id=rubric.id).first():
        rubric.state = RubricState.ARCHIVED
        db.session.commit()
        current_app.logger.info('Rubric %s archived (has scores)', rubric.id)
        return "archived"
    db.session.delete(rubric)
    db.session.commit()
    return "deleted"


# --- scores ------------------------------------------------------------------

def _find_score(application_id, rubric_id):
    return Score.query.filter_by(application_id=application_id, rubric_id=rubric_id).first()


def record_score(application_id, rubric_id, score_value, comments=None):
    application = lifecycle.get_application(application_id)
    rubric = get_rubric(rubric_id)
    if application.status != ApplicationStatus.APPROVED:
        raise ValidationError("Can only score approved applications")
    if not rubric.is_active:
        raise ValidationError("Cannot score with an inactive rubric")
    try:
        score_value = float(score_value)
    except (TypeError, ValueError):
        raise ValidationError("Score value must be a number")
    if score_value < 0 or score_value > rubric.max_score:
        raise ValidationError(f"Score value must be between 0 and {rubric.max_score:g}")

    score = _find_score(application.id, rubric.id)
    if score is None:
        score = Score(application_id=application.id, rubric_id=rubric.id)
        db.session.add(score)
    score.score_value = score_value
    score.comments = comments
    try:
        db.session.commit()
    except IntegrityError:
        # a concurrent insert won the unique key; overwrite it
        db.session.rollback()
        score = _find_score(application_id, rubric_id)
        score.score_value = score_value
        score.comments = comments
        db.session.commit()
    return score


def list_scores(application_id):
    lifecycle.get_application(application_id)
    return (Score.query.filter_by(application_id=application_id)
            .order_by(Score.rubric_id.asc()).all())


def delete_score(application_id, rubric_id):
    score = _find_score(application_id, rubric_id)
    if not score:
        raise NotFoundError("Score not found")
    db.session.delete(score)
    db.session.commit()


def calculate(application_id, threshold=None):
    scores = list_scores(application_id)
    if threshold is None:
        threshold = passing_threshold()
    calc = compute_result(((s.score_value, s.rubric.max_score, s.rubric.weight) for s in scores), threshold)
    calc["application_id"] = application_id
    calc["scores"] = [s.to_dict() for s in scores]
    return calc


def complete(application_id, threshold=None):
    calc = calculate(application_id, threshold)
    percentage = round(calc["percentage"], 2)
    eligible_at = float(current_app.config.get("INTERVIEW_ELIGIBLE_PERCENTAGE", DEFAULT_INTERVIEW_PERCENTAGE))
    eligible = calc["result"] == ApplicationResult.PASS and calc["percentage"] >= eligible_at
    application = lifecycle.complete_application(application_id, percentage, calc["result"],
                                                 interview_eligible=eligible)
    signals.results_ready.send(current_app._get_current_object(), application=application,
                               applicant=application.applicant, scores=list(application.scores))
    return application


def summary(application_id, viewer):
    application = lifecycle.get_application(application_id)
    if not (viewer.is_staff or viewer.id == application.applicant_id):
        raise AuthorizationError("Access denied. You can only view your own application")
    scores = list_scores(application_id)
    calculation = None
    if scores:
        calculation = calculate(application_id)
        calculation.pop("scores")
    return {
        "application": application.to_dict(with_applicant=True),
        "scores": [s.to_dict() for s in scores],
        "calculation": calculation,
        "total_score": application.total_score if application.total_score is not None
        else (round(calculation["percentage"], 2) if calculation else None),
        "result": application.result or (calculation["result"] if calculation else None),
    }
