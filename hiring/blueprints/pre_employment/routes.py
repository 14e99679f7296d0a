from flask_login import login_required, current_user
from . import bp
from ...services import pre_employment
from ...services.users import get_user
from ...utils.decorators import hr_required
from ...utils.http import api_response, json_body


@bp.get("")
@login_required
def get_own():
    record = pre_employment.get_requirements(current_user.id)
    return api_response(record.to_dict() if record else None,
                        "Pre-employment requirements retrieved successfully")


@bp.get("/<int:user_id>")
@login_required
@hr_required
def get_for_user(user_id):
    get_user(user_id)
    record = pre_employment.get_requirements(user_id)
    return api_response(record.to_dict() if record else None,
                        "Pre-employment requirements retrieved successfully")


@bp.post("")
@login_required
def upsert_own():
    record = pre_employment.upsert_requirements(current_user.id, json_body())
    return api_response(record.to_dict(), "Pre-employment requirements saved successfully")


@bp.delete("")
@login_required
def delete_own():
    pre_employment.delete_requirements(current_user.id)
    return api_response(None, "Pre-employment requirements deleted successfully")
