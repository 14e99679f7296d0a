from flask import request
from flask_login import login_required, current_user
from . import bp
from ...services import notifications
from ...utils.http import api_response


@bp.get("")
@login_required
def list_notifications():
    limit = min(max(request.args.get("limit", default=50, type=int) or 50, 1), 200)
    # applicants only ever see what was sent to them
    email = request.args.get("email") if current_user.is_staff else current_user.email
    rows = notifications.history(email=email, type=request.args.get("type"),
                                 application_id=request.args.get("application_id", type=int),
                                 limit=limit)
    return api_response([n.to_dict() for n in rows], "Notifications retrieved successfully")
