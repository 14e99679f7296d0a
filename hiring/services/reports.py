"""Read-only projections over the applications table."""
import math
from datetime import datetime, timedelta
from sqlalchemy import func
from ..errors import ValidationError
from ..extensions import db
from ..models.application import Application, ApplicationStatus, ApplicationResult
from ..models.base import utcnow


def _parse_date(value, name):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value}")


def _month_start(d, back=0):
    month = d.month - back
    year = d.year
    while month < 1:
        month += 12
        year -= 1
    return datetime(year, month, 1)


def growth_percentage(this_month, last_month):
    if last_month > 0:
        return (this_month - last_month) / last_month * 100
    return 100.0 if this_month > 0 else 0.0


def processing_days(created_at, updated_at):
    """Whole days between submission and completion."""
    return math.floor((updated_at - created_at).total_seconds() / 86400)


def _round_half_up(value):
    return math.floor(value + 0.5)


def statistics(start_date=None, end_date=None, now=None):
    now = now or utcnow()
    start = _parse_date(start_date, "start_date")
    end = _parse_date(end_date, "end_date")

    base = Application.query
    if start:
        base = base.filter(Application.created_at >= start)
    if end:
        base = base.filter(Application.created_at <= end)

    this_month_start = _month_start(now)
    last_month_start = _month_start(now, back=1)
    this_month = base.filter(Application.created_at >= this_month_start).count()
    last_month = base.filter(Application.created_at >= last_month_start,
                             Application.created_at < this_month_start).count()

    counts = dict(base.with_entities(Application.status, func.count(Application.id))
                  .group_by(Application.status).all())
    status_breakdown = {s.lower(): counts.get(s, 0) for s in ApplicationStatus.ALL}

    programs = (base.with_entities(Application.program, func.count(Application.id))
                .group_by(Application.program).all())
    program_breakdown = {program: count for program, count in programs}

    completed = (base.filter(Application.status == ApplicationStatus.COMPLETED)
                 .with_entities(Application.created_at, Application.updated_at, Application.result).all())
    average_processing_time = 0
    pass_rate = 0.0
    if completed:
        days = [processing_days(c.created_at, c.updated_at) for c in completed]
        average_processing_time = _round_half_up(sum(days) / len(days))
        passed = sum(1 for c in completed if c.result == ApplicationResult.PASS)
        pass_rate = passed / len(completed) * 100

    return {
        "total_applications": base.count(),
        "this_month": this_month,
        "last_month": last_month,
        "growth": round(growth_percentage(this_month, last_month), 1),
        "status_breakdown": status_breakdown,
        "program_breakdown": program_breakdown,
        "average_processing_time": average_processing_time,
        "pass_rate": round(pass_rate, 1),
    }


def dashboard(now=None):
    now = now or utcnow()
    stats = statistics(now=now)

    top_programs = sorted(stats["program_breakdown"].items(), key=lambda kv: kv[1], reverse=True)[:5]

    monthly_trend = []
    for back in range(5, -1, -1):
        month_start = _month_start(now, back=back)
        next_start = _month_start(month_start + timedelta(days=32))
        count = (db.session.query(func.count(Application.id))
                 .filter(Application.created_at >= month_start, Application.created_at < next_start)
                 .scalar())
        monthly_trend.append({"month": month_start.strftime("%b"), "applications": count})

    stats["top_programs"] = [{"name": name, "count": count} for name, count in top_programs]
    stats["monthly_trend"] = monthly_trend
    return stats
