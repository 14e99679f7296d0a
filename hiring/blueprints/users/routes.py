from flask import request
from flask_login import login_required
from . import bp
from ...services import users as user_service
from ...utils.decorators import hr_required
from ...utils.http import api_response


@bp.get("")
@login_required
@hr_required
def list_users():
    users = user_service.list_users(role=request.args.get("role"))
    return api_response([u.to_dict() for u in users], "Users retrieved successfully")


@bp.get("/<int:user_id>")
@login_required
@hr_required
def get_user(user_id):
    return api_response(user_service.get_user(user_id).to_dict(), "User retrieved successfully")


@bp.delete("/<int:user_id>")
@login_required
@hr_required
def delete_user(user_id):
    user_service.delete_user(user_id)
    return api_response(None, "User deleted successfully")
