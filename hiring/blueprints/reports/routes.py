from flask import request
from flask_login import login_required
from . import bp
from ...services import reports
from ...utils.decorators import hr_required
from ...utils.http import api_response


@bp.get("/statistics")
@login_required
@hr_required
def statistics():
    stats = reports.statistics(start_date=request.args.get("start_date"),
                               end_date=request.args.get("end_date"))
    return api_response(stats, "Report statistics retrieved successfully")


@bp.get("/analytics")
@login_required
@hr_required
def analytics():
    return api_response(reports.dashboard(), "Dashboard analytics retrieved successfully")
