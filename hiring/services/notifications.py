"""E-mail notifications driven by lifecycle signals.

Receivers build the message while the request still holds the data, then hand
a plain payload to RQ. Nothing here may raise into the lifecycle operation
that sent the signal: failures are logged and dropped.
"""
from functools import wraps
from flask import current_app
from ..extensions import rq
from ..models.base import utcnow
from ..models.notification import Notification, NotificationType
from ..models.user import User, Role
from ..jobs.notify import send_notification
from .. import signals


def _signature():
    return f"Best regards,\n{current_app.config.get('MAIL_FROM_NAME', 'HR Team')}"


def _program(application):
    return application.program or application.position or application.subject_specialization or ""


def _fmt_date(dt):
    return dt.strftime("%B %d, %Y") if dt else ""


def _fmt_time(dt):
    return dt.strftime("%I:%M %p").lstrip("0") if dt else ""


def hr_emails():
    return [u.email for u in User.query.filter(User.role.in_(Role.STAFF)).all()]


def _payload(email, subject, message, ntype, application, retry=False, audit_message=None):
    return {
        "email": email,
        "subject": subject,
        "message": message,
        "type": ntype,
        "application_id": application.id if application is not None else None,
        "retry": retry,
        "audit_message": audit_message,
    }


def dispatch(payload):
    if not current_app.config.get("NOTIFICATIONS_ENABLED", True):
        return None
    return rq.enqueue(send_notification, payload)


# --- message builders ----------------------------------------------------------

def submission_message(application, applicant):
    subject = "Application Submitted Successfully"
    message = f"""Dear {applicant.full_name},

Thank you for submitting your teacher application for {_program(application)}.

Application Details:
- Application ID: {application.id}
- Attempt Number: {application.attempt_number}
- Program: {_program(application)}
- Submission Date: {_fmt_date(application.created_at or utcnow())}
- Status: Pending Review

Your application is now under review by our HR team. You will receive e-mail
updates as your application moves through the review process.

{_signature()}
"""
    return _payload(applicant.email, subject, message, NotificationType.SUBMISSION, application)


def hr_alert_message(application, applicant, hr_email):
    subject = "New Teacher Application Submitted - Action Required"
    message = f"""A new teacher application has been submitted and requires your review.

Applicant Details:
- Name: {applicant.full_name}
- Email: {applicant.email}
- Phone: {applicant.phone or 'Not provided'}

Application Details:
- Application ID: {application.id}
- Attempt Number: {application.attempt_number}
- Program: {_program(application)}

Please log into the HR portal to review this application.
"""
    return _payload(hr_email, subject, message, NotificationType.HR_ALERT, application)


def approval_message(application, applicant):
    subject = "Application Approved - Teaching Demo Scheduling"
    notes = f"\nHR Notes: {application.hr_notes}\n" if application.hr_notes else ""
    message = f"""Dear {applicant.full_name},

Congratulations! Your teacher application for {_program(application)} has been approved.

Application Details:
- Application ID: {application.id}
- Approval Date: {_fmt_date(utcnow())}

Next Steps:
You will be notified about the schedule of your teaching demonstration.
{notes}
{_signature()}
"""
    return _payload(applicant.email, subject, message, NotificationType.APPROVAL, application)


def rejection_message(application, applicant):
    subject = "Application Status Update"
    feedback = f"\nFeedback: {application.hr_notes}\n" if application.hr_notes else ""
    message = f"""Dear {applicant.full_name},

Thank you for your interest in teaching {_program(application)}.

After careful review of your application, we will not be moving forward with it at this time.

Application Details:
- Application ID: {application.id}
- Review Date: {_fmt_date(utcnow())}
{feedback}
You are welcome to apply again in the future.

{_signature()}
"""
    return _payload(applicant.email, subject, message, NotificationType.REJECTION, application)


def _demo_details(application):
    lines = [
        f"- Date: {_fmt_date(application.demo_schedule)}",
        f"- Time: {_fmt_time(application.demo_schedule)}",
    ]
    if application.demo_location:
        lines.append(f"- Location: {application.demo_location}")
    if application.demo_duration:
        lines.append(f"- Duration: {application.demo_duration} minutes")
    lines.append(f"- Program: {_program(application)}")
    lines.append(f"- Application ID: {application.id}")
    return "\n".join(lines)


def demo_schedule_message(application, applicant):
    subject = "Teaching Demo Scheduled"
    notes = f"\nNotes: {application.demo_notes}\n" if application.demo_notes else ""
    message = f"""Dear {applicant.full_name},

Your teaching demonstration has been scheduled.

DEMONSTRATION DETAILS:
{_demo_details(application)}
{notes}
Please prepare a 1-hour lesson for your demonstration.
If you need to reschedule due to an emergency, contact our HR department as soon as possible.

{_signature()}
"""
    return _payload(applicant.email, subject, message, NotificationType.SCHEDULE, application)


RESCHEDULE_NO_SHOW = ("APPLICANT_NO_SHOW", "applicant_no_show")
RESCHEDULE_SCHOOL = ("SCHOOL", "school_reschedule")


def demo_reschedule_messages(application, applicant, reason=None):
    """Applicant notice plus one HR alert per staff address."""
    if reason in RESCHEDULE_NO_SHOW:
        subject = "Action Required: Rescheduling Your Teaching Demo"
        intro = ("We were unable to proceed with your scheduled teaching demonstration because "
                 "you did not appear at the scheduled time. A new demo has been scheduled below.")
        closing = ("Since you did not attend the previous schedule, please be punctual for the new one. "
                   "Frequent no-shows may affect your application.\n\n")
    elif reason in RESCHEDULE_SCHOOL:
        subject = "Notice: Teaching Demo Rescheduled by HR"
        intro = ("Your teaching demonstration has been rescheduled by our HR team for scheduling "
                 "or administrative reasons. We apologize for the inconvenience.")
        closing = ""
    else:
        subject = "Teaching Demo Rescheduled"
        intro = "Your teaching demonstration has been rescheduled. Please see the updated schedule below."
        closing = ""
    message = f"""Dear {applicant.full_name},

{intro}

DEMONSTRATION DETAILS:
{_demo_details(application)}

{closing}{_signature()}
"""
    payloads = [_payload(applicant.email, subject, message, NotificationType.RESCHEDULE, application)]

    hr_subject = f"Application #{application.id} - Demo Rescheduled"
    hr_message = (f"Application ID: {application.id}\n"
                  f"Applicant: {applicant.full_name} ({applicant.email})\n"
                  f"Program: {_program(application)}\n"
                  f"New Demo: {_fmt_date(application.demo_schedule)} at {_fmt_time(application.demo_schedule)}\n"
                  f"Reason: {reason or 'Not specified'}\n")
    for email in hr_emails():
        payloads.append(_payload(email, hr_subject, hr_message, NotificationType.HR_ALERT, application))
    return payloads


def score_breakdown(scores):
    if not scores:
        return ""
    lines = ["Score Breakdown:"]
    for score in scores:
        line = f"- {score.rubric.criteria}: {score.score_value:g}/{score.rubric.max_score:g}"
        if score.comments:
            line += f" ({score.comments})"
        lines.append(line)
    return "\n".join(lines)


def results_message(application, applicant, scores):
    if application.total_score is None or not application.result:
        raise ValueError("Application scores not completed")
    passed = application.result == "PASS"
    subject = "Teaching Demo Results"
    verdict = "Congratulations! You have passed" if passed else "Unfortunately, you did not pass"
    next_steps = ("You will be notified about the next steps in the hiring process." if passed else
                  "We encourage you to keep developing your teaching skills. You are welcome to apply again in the future.")
    message = f"""Dear {applicant.full_name},

Your teaching demonstration for {_program(application)} has been evaluated.

{verdict} the teaching demonstration evaluation.

Final Results:
- Overall Score: {application.total_score:.1f}%
- Result: {application.result}
- Evaluation Date: {_fmt_date(utcnow())}

{score_breakdown(scores)}

{next_steps}

{_signature()}
"""
    return _payload(applicant.email, subject, message, NotificationType.RESULT, application, retry=True)


def interview_schedule_message(application, applicant, stage):
    when = getattr(application, f"{stage}_interview_schedule")
    if when is None:
        raise ValueError("Interview schedule not set")
    subject = f"{stage.capitalize()} Interview Scheduled"
    message = f"""Dear {applicant.full_name},

Your application for {_program(application)} has been scheduled for an interview.

INTERVIEW DETAILS:
- Date: {_fmt_date(when)}
- Time: {_fmt_time(when)}
- Application ID: {application.id}

Please be prepared and on time. If you need to reschedule, contact our HR department.

{_signature()}
"""
    return _payload(applicant.email, subject, message, NotificationType.SCHEDULE, application)


def final_interview_passed_message(application, applicant):
    subject = "Congratulations! Passed Final Interview"
    message = f"""Dear {applicant.full_name},

You have passed all stages of the application process for {_program(application)}:

- Demo Teaching: Passed
- Initial Interview: Passed
- Final Interview: Passed

Next Steps:
Please log in to the applicant portal and submit your pre-employment requirements
to finalize your hiring.

{_signature()}
"""
    audit = (f"Congratulations! You have passed the final interview for {_program(application)}. "
             "Please proceed to the Pre-Employment page to submit your requirements.")
    return _payload(applicant.email, subject, message, NotificationType.RESULT, application,
                    audit_message=audit)


# --- signal receivers --------------------------------------------------------

def best_effort(func):
    @wraps(func)
    def wrapped(sender, **kwargs):
        try:
            func(sender, **kwargs)
        except Exception:
            application = kwargs.get("application")
            current_app.logger.exception('Failed to send %s notification for application %s',
                                         func.__name__, getattr(application, 'id', None))
    return wrapped


@signals.application_submitted.connect
@best_effort
def on_application_submitted(sender, application, applicant, **extra):
    dispatch(submission_message(application, applicant))
    for email in hr_emails():
        dispatch(hr_alert_message(application, applicant, email))


@signals.application_approved.connect
@best_effort
def on_application_approved(sender, application, applicant, **extra):
    dispatch(approval_message(application, applicant))


@signals.application_rejected.connect
@best_effort
def on_application_rejected(sender, application, applicant, **extra):
    dispatch(rejection_message(application, applicant))


@signals.demo_scheduled.connect
@best_effort
def on_demo_scheduled(sender, application, applicant, **extra):
    dispatch(demo_schedule_message(application, applicant))


@signals.demo_rescheduled.connect
@best_effort
def on_demo_rescheduled(sender, application, applicant, reason=None, **extra):
    for payload in demo_reschedule_messages(application, applicant, reason):
        dispatch(payload)


@signals.results_ready.connect
@best_effort
def on_results_ready(sender, application, applicant, scores=None, **extra):
    dispatch(results_message(application, applicant, scores or []))


@signals.interview_scheduled.connect
@best_effort
def on_interview_scheduled(sender, application, applicant, stage="initial", **extra):
    dispatch(interview_schedule_message(application, applicant, stage))


@signals.final_interview_passed.connect
@best_effort
def on_final_interview_passed(sender, application, applicant, **extra):
    dispatch(final_interview_passed_message(application, applicant))


# --- audit history -----------------------------------------------------------

def history(email=None, type=None, application_id=None, limit=50):
    query = Notification.query
    if email:
        query = query.filter(Notification.email == email)
    if type:
        query = query.filter(Notification.type == type)
    if application_id:
        query = query.filter(Notification.application_id == application_id)
    return query.order_by(Notification.sent_at.desc(), Notification.id.desc()).limit(limit).all()
