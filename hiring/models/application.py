from ..extensions import db
from .base import TimestampMixin, SerializerMixin


class ApplicationStatus:
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"
    ALL = (PENDING, APPROVED, REJECTED, COMPLETED)
    # at most one of these per applicant
    ACTIVE = (PENDING, APPROVED)


class ApplicationResult:
    PASS = "PASS"
    FAIL = "FAIL"
    ALL = (PASS, FAIL)


_ACTIVE_WHERE = db.text("status IN ('PENDING', 'APPROVED')")


class Application(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "applications"
    __table_args__ = (
        db.UniqueConstraint("applicant_id", "attempt_number", name="uq_applications_applicant_attempt"),
        db.Index("uq_applications_one_active", "applicant_id", unique=True,
                 sqlite_where=_ACTIVE_WHERE, postgresql_where=_ACTIVE_WHERE),
    )

    id = db.Column(db.Integer, primary_key=True)
    applicant_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    program = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ApplicationStatus.PENDING, index=True)
    result = db.Column(db.String(10))
    total_score = db.Column(db.Float)
    attempt_number = db.Column(db.Integer, nullable=False, default=1)

    # applicant-supplied
    position = db.Column(db.String(200))
    subject_specialization = db.Column(db.String(200))
    educational_background = db.Column(db.Text)
    teaching_experience = db.Column(db.Text)
    motivation = db.Column(db.Text)
    documents = db.Column(db.JSON)  # [{"name": "resume.pdf", "url": "...", "type": "application/pdf"}]

    # teaching demo
    demo_schedule = db.Column(db.DateTime)
    demo_location = db.Column(db.String(255))
    demo_duration = db.Column(db.Integer)  # minutes
    demo_notes = db.Column(db.Text)
    hr_notes = db.Column(db.Text)

    # interviews after a passed demo
    interview_eligible = db.Column(db.Boolean, nullable=False, default=False)
    initial_interview_schedule = db.Column(db.DateTime)
    initial_interview_result = db.Column(db.String(10))
    final_interview_schedule = db.Column(db.DateTime)
    final_interview_result = db.Column(db.String(10))

    applicant = db.relationship("User", back_populates="applications")
    scores = db.relationship("Score", back_populates="application",
                             cascade="all, delete-orphan")

    def demo_time(self):
        """12-hour clock label for the demo, e.g. ``2:30 PM``."""
        if not self.demo_schedule:
            return None
        hours = self.demo_schedule.hour
        period = "PM" if hours >= 12 else "AM"
        hours = hours % 12 or 12
        return f"{hours}:{self.demo_schedule.minute:02d} {period}"

    def to_dict(self, with_applicant=False):
        data = super().to_dict()
        if self.demo_schedule:
            data["demo_time"] = self.demo_time()
        if with_applicant and self.applicant is not None:
            data["applicant"] = self.applicant.summary()
        return data

    def __repr__(self) -> str:
        return f"<Application id={self.id} applicant_id={self.applicant_id} status={self.status}>"
