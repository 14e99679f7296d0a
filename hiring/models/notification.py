from ..extensions import db
from .base import SerializerMixin, utcnow


class NotificationType:
    SUBMISSION = "submission"
    APPROVAL = "approval"
    REJECTION = "rejection"
    SCHEDULE = "schedule"
    RESCHEDULE = "reschedule"
    RESULT = "result"
    HR_ALERT = "hr_alert"


class Notification(db.Model, SerializerMixin):
    """Audit row for a delivered e-mail. Rows are only ever inserted."""
    __tablename__ = "notifications"
    id = db.Column(db.Integer, primary_key=True)
    # no FK: the audit trail outlives deleted applications
    application_id = db.Column(db.Integer, index=True)
    type = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    provider_message_id = db.Column(db.String(255))
    sent_at = db.Column(db.DateTime, nullable=False, default=utcnow)
