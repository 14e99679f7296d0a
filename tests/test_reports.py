from datetime import datetime

import pytest

from hiring.errors import ValidationError
from hiring.extensions import db
from hiring.models import Application, ApplicationStatus
from hiring.services import reports

from conftest import make_user

NOW = datetime(2026, 10, 15, 12, 0)


def _seed():
    applicant = make_user("maria@bcfi.edu.ph")
    rows = [
        # attempt, program, status, result, created, updated
        (1, "BSEd English", ApplicationStatus.REJECTED, None, datetime(2026, 8, 20), datetime(2026, 8, 22)),
        (2, "BSEd English", ApplicationStatus.COMPLETED, "PASS", datetime(2026, 10, 2), datetime(2026, 10, 5, 12)),
        (3, "BSEd Math", ApplicationStatus.COMPLETED, "FAIL", datetime(2026, 10, 3), datetime(2026, 10, 7)),
        (4, "BSEd English", ApplicationStatus.PENDING, None, datetime(2026, 9, 10), datetime(2026, 9, 10)),
    ]
    for attempt, program, status, result, created, updated in rows:
        db.session.add(Application(applicant_id=applicant.id, attempt_number=attempt, program=program,
                                   status=status, result=result, created_at=created, updated_at=updated))
    db.session.commit()


def test_growth_percentage():
    assert reports.growth_percentage(3, 2) == 50
    assert reports.growth_percentage(1, 2) == -50
    assert reports.growth_percentage(3, 0) == 100
    assert reports.growth_percentage(0, 0) == 0


def test_processing_days_floors():
    assert reports.processing_days(datetime(2026, 1, 1), datetime(2026, 1, 2, 23, 59)) == 1
    assert reports.processing_days(datetime(2026, 1, 1), datetime(2026, 1, 1, 8)) == 0


def test_statistics(ctx):
    _seed()
    stats = reports.statistics(now=NOW)

    assert stats["total_applications"] == 4
    assert stats["this_month"] == 2
    assert stats["last_month"] == 1
    assert stats["growth"] == 100.0
    assert stats["status_breakdown"] == {"pending": 1, "approved": 0, "rejected": 1, "completed": 2}
    assert stats["program_breakdown"] == {"BSEd English": 3, "BSEd Math": 1}
    # (3 + 4) / 2 rounds up
    assert stats["average_processing_time"] == 4
    assert stats["pass_rate"] == 50.0


def test_statistics_date_range(ctx):
    _seed()
    stats = reports.statistics(start_date="2026-10-01", now=NOW)
    assert stats["total_applications"] == 2
    assert stats["last_month"] == 0

    with pytest.raises(ValidationError):
        reports.statistics(start_date="last tuesday")


def test_statistics_empty(ctx):
    stats = reports.statistics(now=NOW)
    assert stats["total_applications"] == 0
    assert stats["growth"] == 0
    assert stats["average_processing_time"] == 0
    assert stats["pass_rate"] == 0


def test_dashboard(ctx):
    _seed()
    data = reports.dashboard(now=NOW)

    assert data["top_programs"] == [{"name": "BSEd English", "count": 3}, {"name": "BSEd Math", "count": 1}]
    assert [m["month"] for m in data["monthly_trend"]] == ["May", "Jun", "Jul", "Aug", "Sep", "Oct"]
    assert [m["applications"] for m in data["monthly_trend"]] == [0, 0, 0, 1, 1, 2]
    assert data["total_applications"] == 4
