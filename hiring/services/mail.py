import time
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from flask import current_app


def send_email(to_email, subject, text):
    api_key = current_app.config.get('SENDGRID_API_KEY')
    if not api_key:
        raise RuntimeError('SENDGRID_API_KEY is not configured')
    sg = SendGridAPIClient(api_key=api_key)
    message = Mail(from_email=(current_app.config['MAIL_FROM'], current_app.config['MAIL_FROM_NAME']),
                   to_emails=to_email,
                   subject=subject,
                   plain_text_content=text)
    resp = sg.send(message)
    return resp.status_code, getattr(resp, 'headers', None)


def send_email_with_retry(to_email, subject, text, max_retries=None, initial_delay=None):
    """send_email with exponential backoff: delay doubles after each failed attempt."""
    if max_retries is None:
        max_retries = int(current_app.config.get('EMAIL_MAX_RETRIES', 3))
    if initial_delay is None:
        initial_delay = float(current_app.config.get('EMAIL_RETRY_DELAY', 1.0))
    last_error = None
    for attempt in range(max_retries):
        try:
            return send_email(to_email, subject, text)
        except Exception as e:
            last_error = e
            current_app.logger.warning('Email send attempt %s/%s to %s failed: %s', attempt + 1, max_retries, to_email, e)
            if attempt < max_retries - 1:
                time.sleep(initial_delay * (2 ** attempt))
    raise last_error or RuntimeError('Failed to send email after multiple attempts')
