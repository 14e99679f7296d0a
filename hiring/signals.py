"""Domain events emitted after a lifecycle or scoring change is committed.

Receivers get the current app as sender plus keyword payloads. Delivery side
effects (e-mail, audit rows) live in ``hiring.services.notifications``.
"""
from blinker import Namespace

_signals = Namespace()

application_submitted = _signals.signal("application-submitted")
application_approved = _signals.signal("application-approved")
application_rejected = _signals.signal("application-rejected")
demo_scheduled = _signals.signal("demo-scheduled")
demo_rescheduled = _signals.signal("demo-rescheduled")
results_ready = _signals.signal("results-ready")
interview_scheduled = _signals.signal("interview-scheduled")
final_interview_passed = _signals.signal("final-interview-passed")
