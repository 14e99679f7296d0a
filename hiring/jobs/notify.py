from flask import has_app_context
from ..extensions import db
from ..services.mail import send_email, send_email_with_retry
from ..models.notification import Notification
from ..models.base import utcnow


def _deliver(payload):
    sender = send_email_with_retry if payload.get('retry') else send_email
    status, headers = sender(payload['email'], payload['subject'], payload['message'])
    n = Notification(application_id=payload.get('application_id'),
                     type=payload['type'], email=payload['email'],
                     subject=payload['subject'],
                     # the audit row may carry a shorter in-app message than the e-mail body
                     message=payload.get('audit_message') or payload['message'],
                     provider_message_id=headers.get('X-Message-Id') if headers else None,
                     sent_at=utcnow())
    db.session.add(n)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return n.id


def send_notification(payload):
    """Entrypoint that ensures execution inside a Flask app context for workers."""
    if has_app_context():
        return _deliver(payload)
    from hiring import create_app
    app = create_app()
    with app.app_context():
        return _deliver(payload)
